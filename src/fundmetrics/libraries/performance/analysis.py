"""Metrics orchestration.

Assembles every calculator into one MetricsResult per (fund, period) and
runs the per-period / per-fund batch used before ranking.

Randomness (synthetic benchmark, expense ratio estimate) comes only from
the ``numpy.random.Generator`` passed in, so a seeded generator makes the
whole result reproducible:

    >>> import numpy as np
    >>> result = compute_all_metrics(series, "1Y", rng=np.random.default_rng(7))

Each call reads only its own series and allocates its own result; funds
can be analysed concurrently as long as every task owns its generator.
"""

from typing import Mapping, Sequence

import numpy as np

from fundmetrics.libraries.performance.benchmark import (
    calculate_alpha,
    calculate_beta,
    calculate_information_ratio,
    generate_benchmark_returns,
)
from fundmetrics.libraries.performance.config import MetricsConfig
from fundmetrics.libraries.performance.metrics import (
    calculate_absolute_return,
    calculate_cagr,
    calculate_daily_returns,
    calculate_max_drawdown,
    calculate_rolling_returns,
    calculate_sharpe_ratio,
    calculate_sortino_ratio,
    calculate_treynor_ratio,
    calculate_volatility,
)
from fundmetrics.libraries.performance.models import FundAnalysis, MetricsResult, NavObservation
from fundmetrics.system.log_system import LoggerFactory

logger = LoggerFactory.get_logger()


def estimate_expense_ratio(rng: np.random.Generator, config: MetricsConfig | None = None) -> float:
    """
    Draw an expense ratio estimate uniformly from the configured range.

    Placeholder until scheme documents are available; defaults to [0.8, 1.8].
    """
    config = config if config is not None else MetricsConfig()
    spread = config.expense_ratio_max_pct - config.expense_ratio_min_pct
    return config.expense_ratio_min_pct + float(rng.random()) * spread


def compute_all_metrics(
    series: Sequence[NavObservation] | None,
    period: str,
    config: MetricsConfig | None = None,
    rng: np.random.Generator | None = None,
) -> MetricsResult | None:
    """
    Compute every metric for one NAV series.

    Args:
        series: NAV observations, oldest first, already validated
        period: Period label stored on the result (e.g. "1Y")
        config: Engine configuration (defaults when None)
        rng: Random generator for benchmark and expense ratio
             (fresh unseeded generator when None)

    Returns:
        MetricsResult, or None when the series is missing or has fewer
        than 2 observations
    """
    if series is None or len(series) < 2:
        logger.debug(
            "analysis.series_too_short",
            period=period,
            observations=0 if series is None else len(series),
        )
        return None

    config = config if config is not None else MetricsConfig()
    if rng is None:
        rng = np.random.default_rng()

    start, end = series[0], series[-1]
    observations = len(series)
    years = observations / config.trading_days_per_year

    absolute_return = calculate_absolute_return(start.nav, end.nav)
    cagr = calculate_cagr(start.nav, end.nav, years)

    volatility = calculate_volatility(series, config)
    sharpe = calculate_sharpe_ratio(cagr, volatility, config=config)
    sortino = calculate_sortino_ratio(series, config=config)

    drawdown = calculate_max_drawdown(series)

    if observations > config.rolling_window_days:
        rolling_returns = calculate_rolling_returns(series, config.rolling_window_days)
    else:
        rolling_returns = []

    benchmark_returns = generate_benchmark_returns(observations, rng=rng, config=config)
    fund_returns = calculate_daily_returns(series)
    beta = calculate_beta(fund_returns, benchmark_returns)
    alpha = calculate_alpha(cagr, config.benchmark_annual_return_pct, beta, config=config)

    information_ratio = calculate_information_ratio(fund_returns, benchmark_returns, config)
    treynor = calculate_treynor_ratio(cagr, beta, config=config)

    expense_ratio = estimate_expense_ratio(rng, config)

    return MetricsResult(
        period=period,
        start_date=start.date,
        end_date=end.date,
        start_nav=start.nav,
        end_nav=end.nav,
        observations=observations,
        absolute_return_pct=absolute_return,
        cagr_pct=cagr,
        volatility_pct=volatility,
        drawdown=drawdown,
        sharpe_ratio=sharpe,
        sortino_ratio=sortino,
        treynor_ratio=treynor,
        beta=beta,
        alpha_pct=alpha,
        information_ratio=information_ratio,
        expense_ratio_pct=expense_ratio,
        rolling_returns=rolling_returns,
    )


def slice_period(
    series: Sequence[NavObservation],
    period: str,
    config: MetricsConfig | None = None,
) -> list[NavObservation]:
    """
    Trailing observations covered by a period label.

    Returns the last ``min(days_for_period(period), len(series))``
    observations; unknown labels use ``default_period_days``.
    """
    config = config if config is not None else MetricsConfig()
    days = config.days_for_period(period)
    return list(series[-min(days, len(series)) :]) if series else []


def compute_multiple_periods(
    series: Sequence[NavObservation],
    periods: Sequence[str],
    config: MetricsConfig | None = None,
    rng: np.random.Generator | None = None,
) -> dict[str, MetricsResult]:
    """
    Compute metrics for several periods of the same fund.

    Periods whose slice has fewer than ``min_period_observations``
    observations are left out of the result.

    Returns:
        Period label -> MetricsResult, in the order the periods were given
    """
    config = config if config is not None else MetricsConfig()
    if rng is None:
        rng = np.random.default_rng()

    results: dict[str, MetricsResult] = {}
    for period in periods:
        period_series = slice_period(series, period, config)

        if len(period_series) < config.min_period_observations:
            logger.debug(
                "analysis.period_skipped",
                period=period,
                observations=len(period_series),
                required=config.min_period_observations,
            )
            continue

        metrics = compute_all_metrics(period_series, period, config, rng)
        if metrics is not None:
            results[period] = metrics

    return results


def analyze_fund(
    fund_id: str,
    series: Sequence[NavObservation],
    periods: Sequence[str],
    fund_name: str | None = None,
    config: MetricsConfig | None = None,
    rng: np.random.Generator | None = None,
) -> FundAnalysis | None:
    """
    Analyse one fund over the selected periods.

    Returns:
        FundAnalysis, or None when the history is shorter than
        ``min_observations`` or no period produced metrics
    """
    config = config if config is not None else MetricsConfig()

    if len(series) < config.min_observations:
        logger.warning(
            "analysis.insufficient_history",
            fund_id=fund_id,
            observations=len(series),
            required=config.min_observations,
        )
        return None

    metrics = compute_multiple_periods(series, periods, config, rng)
    if not metrics:
        logger.warning("analysis.no_period_metrics", fund_id=fund_id, periods=list(periods))
        return None

    return FundAnalysis(fund_id=fund_id, fund_name=fund_name, metrics=metrics)


def analyze_funds(
    funds: Mapping[str, Sequence[NavObservation]],
    periods: Sequence[str],
    config: MetricsConfig | None = None,
    rng: np.random.Generator | None = None,
    fund_names: Mapping[str, str] | None = None,
) -> list[FundAnalysis]:
    """
    Analyse a batch of funds.

    A fund that cannot be analysed is logged and left out; it never stops
    the rest of the batch.

    Args:
        funds: Fund id -> NAV series
        periods: Period labels to compute
        config: Engine configuration
        rng: Random generator shared sequentially across the batch
        fund_names: Optional fund id -> display name

    Returns:
        One FundAnalysis per fund that produced metrics, in input order
    """
    config = config if config is not None else MetricsConfig()
    if rng is None:
        rng = np.random.default_rng()
    fund_names = fund_names or {}

    logger.info("analysis.started", funds=len(funds), periods=list(periods))

    analyses: list[FundAnalysis] = []
    for fund_id, series in funds.items():
        try:
            analysis = analyze_fund(fund_id, series, periods, fund_names.get(fund_id), config, rng)
        except (ValueError, ArithmeticError) as e:
            logger.error("analysis.fund_failed", fund_id=fund_id, error=str(e))
            continue

        if analysis is not None:
            analyses.append(analysis)

    logger.info("analysis.completed", analysed=len(analyses), skipped=len(funds) - len(analyses))

    return analyses
