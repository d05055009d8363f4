"""Performance metrics library for fund NAV analysis.

This library provides the performance and risk metrics engine:

1. **Models** (`models.py`): Pydantic data structures
   - NavObservation: One (date, nav) point
   - DrawdownResult / DrawdownPoint: Peak-to-trough analysis
   - RollingReturn: Trailing-window return
   - MetricsResult: All metrics for one fund and period
   - FundAnalysis / RankedEntry: Ranking input and output

2. **Metrics** (`metrics.py`): Pure calculation functions
   - Series: daily returns, standard deviation
   - Returns: absolute return, CAGR, annualization
   - Risk-adjusted: volatility, Sharpe, Sortino, Treynor
   - Drawdown and rolling returns

3. **Benchmark** (`benchmark.py`): Synthetic benchmark, beta, alpha,
   information ratio

4. **Calculators** (`calculators.py`): Incremental drawdown tracking

5. **Analysis** (`analysis.py`): One MetricsResult per fund and period,
   batch analysis across funds

6. **Ranking** (`ranking.py`): Composite score and rank

Usage:
    >>> import numpy as np
    >>> from fundmetrics.libraries.performance import analyze_funds, rank_funds
    >>> analyses = analyze_funds({"fund-a": series_a, "fund-b": series_b}, ["1Y"], rng=np.random.default_rng(1))
    >>> ranked = rank_funds(analyses, "1Y")
    >>> ranked[0].rank
    1

Design Principles:
    - Float arithmetic, percentages for returns and volatility
    - Explicit edge case handling (zero volatility, zero beta, zero years)
    - Constants in MetricsConfig, randomness through an injected generator
"""

from fundmetrics.libraries.performance.analysis import (
    analyze_fund,
    analyze_funds,
    compute_all_metrics,
    compute_multiple_periods,
    estimate_expense_ratio,
    slice_period,
)
from fundmetrics.libraries.performance.benchmark import (
    calculate_alpha,
    calculate_beta,
    calculate_information_ratio,
    generate_benchmark_returns,
)
from fundmetrics.libraries.performance.calculators import DrawdownCalculator
from fundmetrics.libraries.performance.config import MetricsConfig, ScoringConfig
from fundmetrics.libraries.performance.errors import InsufficientDataError, LengthMismatchError, PerformanceError
from fundmetrics.libraries.performance.metrics import (
    annualize_return,
    calculate_absolute_return,
    calculate_cagr,
    calculate_daily_returns,
    calculate_drawdown_series,
    calculate_max_drawdown,
    calculate_rolling_returns,
    calculate_sharpe_ratio,
    calculate_sortino_ratio,
    calculate_standard_deviation,
    calculate_treynor_ratio,
    calculate_volatility,
)
from fundmetrics.libraries.performance.models import (
    DrawdownPoint,
    DrawdownResult,
    FundAnalysis,
    MetricsResult,
    NavObservation,
    RankedEntry,
    RollingReturn,
    ScoreBreakdown,
    validate_nav_series,
)
from fundmetrics.libraries.performance.ranking import rank_funds, score_metrics, select_primary_period

__all__ = [
    # Models
    "NavObservation",
    "DrawdownResult",
    "DrawdownPoint",
    "RollingReturn",
    "MetricsResult",
    "FundAnalysis",
    "ScoreBreakdown",
    "RankedEntry",
    "validate_nav_series",
    # Configuration
    "MetricsConfig",
    "ScoringConfig",
    # Errors
    "PerformanceError",
    "InsufficientDataError",
    "LengthMismatchError",
    # Metrics (pure functions)
    "calculate_daily_returns",
    "calculate_standard_deviation",
    "calculate_absolute_return",
    "calculate_cagr",
    "annualize_return",
    "calculate_volatility",
    "calculate_sharpe_ratio",
    "calculate_sortino_ratio",
    "calculate_treynor_ratio",
    "calculate_max_drawdown",
    "calculate_drawdown_series",
    "calculate_rolling_returns",
    # Benchmark-relative
    "generate_benchmark_returns",
    "calculate_beta",
    "calculate_alpha",
    "calculate_information_ratio",
    # Calculators (stateful)
    "DrawdownCalculator",
    # Orchestration
    "compute_all_metrics",
    "compute_multiple_periods",
    "slice_period",
    "estimate_expense_ratio",
    "analyze_fund",
    "analyze_funds",
    # Ranking
    "score_metrics",
    "rank_funds",
    "select_primary_period",
]
