"""Benchmark-relative performance calculations.

No real index data is used. The benchmark is a synthetic daily return
series drawn from a normal distribution with a configured annual return
and volatility; beta, alpha and the information ratio are measured
against it.

Randomness is always taken from an injected ``numpy.random.Generator``:

    >>> import numpy as np
    >>> rng = np.random.default_rng(42)
    >>> returns = generate_benchmark_returns(253, rng=rng)
    >>> len(returns)
    252
"""

import math
from typing import Sequence

import numpy as np

from fundmetrics.libraries.performance.config import MetricsConfig
from fundmetrics.libraries.performance.errors import LengthMismatchError
from fundmetrics.libraries.performance.metrics import calculate_standard_deviation
from fundmetrics.system.log_system import LoggerFactory

logger = LoggerFactory.get_logger()

_DEFAULT_CONFIG = MetricsConfig()


def generate_benchmark_returns(
    length: int,
    annual_return_pct: float | None = None,
    annual_volatility_pct: float | None = None,
    rng: np.random.Generator | None = None,
    config: MetricsConfig | None = None,
) -> list[float]:
    """
    Generate synthetic benchmark daily returns.

    Each sample uses a Box-Muller transform of two uniform draws:
    ``z = sqrt(-2 ln u1) * cos(2 pi u2)``, then
    ``daily_return + daily_volatility * z``.

    Args:
        length: Length of the NAV series to pair with (returns ``length - 1`` values)
        annual_return_pct: Target annual return; config default (12%) when None
        annual_volatility_pct: Target annual volatility; config default (18%) when None
        rng: Random generator; a fresh unseeded generator when None
        config: Engine configuration

    Returns:
        ``length - 1`` daily returns as fractions (empty when length < 2)
    """
    config = config if config is not None else _DEFAULT_CONFIG
    if annual_return_pct is None:
        annual_return_pct = config.benchmark_annual_return_pct
    if annual_volatility_pct is None:
        annual_volatility_pct = config.benchmark_annual_volatility_pct
    if rng is None:
        rng = np.random.default_rng()

    trading_days = config.trading_days_per_year
    daily_return = annual_return_pct / 100 / trading_days
    daily_volatility = (annual_volatility_pct / 100) / math.sqrt(trading_days)

    returns: list[float] = []
    for _ in range(max(length - 1, 0)):
        u1 = 1.0 - rng.random()  # (0, 1] keeps log() finite
        u2 = rng.random()
        z = math.sqrt(-2 * math.log(u1)) * math.cos(2 * math.pi * u2)
        returns.append(daily_return + daily_volatility * z)

    return returns


def _lengths_match(
    fund_returns: Sequence[float],
    benchmark_returns: Sequence[float],
    metric: str,
    fallback: float,
    strict: bool,
) -> bool:
    """Check pairing of the two series; log (or raise when strict) on mismatch."""
    if len(fund_returns) == len(benchmark_returns):
        return True

    if strict:
        raise LengthMismatchError(len(fund_returns), len(benchmark_returns))

    logger.warning(
        "benchmark.length_mismatch",
        metric=metric,
        fund_length=len(fund_returns),
        benchmark_length=len(benchmark_returns),
        fallback=fallback,
    )
    return False


def calculate_beta(
    fund_returns: Sequence[float],
    benchmark_returns: Sequence[float],
    strict: bool = False,
) -> float:
    """
    Calculate beta (sensitivity of fund returns to benchmark returns).

    Beta = Cov(fund, benchmark) / Var(benchmark), population moments.

    Args:
        fund_returns: Fund daily returns
        benchmark_returns: Benchmark daily returns, paired by index
        strict: Raise LengthMismatchError instead of falling back to 1.0

    Returns:
        Beta. 1.0 (neutral) when the series lengths differ, when they are
        empty, or when the benchmark has zero variance.

    Raises:
        LengthMismatchError: Only when ``strict`` and the lengths differ
    """
    if not _lengths_match(fund_returns, benchmark_returns, "beta", 1.0, strict):
        return 1.0

    n = len(fund_returns)
    if n == 0:
        return 1.0

    fund_mean = sum(fund_returns) / n
    benchmark_mean = sum(benchmark_returns) / n

    covariance = 0.0
    benchmark_variance = 0.0
    for fund_r, bench_r in zip(fund_returns, benchmark_returns):
        fund_diff = fund_r - fund_mean
        bench_diff = bench_r - benchmark_mean
        covariance += fund_diff * bench_diff
        benchmark_variance += bench_diff * bench_diff

    covariance /= n
    benchmark_variance /= n

    if benchmark_variance == 0:
        return 1.0

    return covariance / benchmark_variance


def calculate_alpha(
    fund_annual_return_pct: float,
    benchmark_annual_return_pct: float,
    beta: float,
    risk_free_rate_pct: float | None = None,
    config: MetricsConfig | None = None,
) -> float:
    """
    Calculate Jensen's alpha (return above the CAPM expectation).

    Alpha = Fund - [RiskFree + Beta * (Benchmark - RiskFree)]

    Example:
        >>> calculate_alpha(15.0, 12.0, 1.0, risk_free_rate_pct=6.5)
        3.0
    """
    if risk_free_rate_pct is None:
        risk_free_rate_pct = (config if config is not None else _DEFAULT_CONFIG).risk_free_rate_pct

    expected_return = risk_free_rate_pct + beta * (benchmark_annual_return_pct - risk_free_rate_pct)
    return fund_annual_return_pct - expected_return


def calculate_information_ratio(
    fund_returns: Sequence[float],
    benchmark_returns: Sequence[float],
    config: MetricsConfig | None = None,
    strict: bool = False,
) -> float:
    """
    Calculate information ratio (active return per unit of tracking error).

    Both the mean tracking difference and its standard deviation are
    annualized with ``trading_days_per_year``.

    Returns:
        Information ratio, 0.0 when the tracking error volatility is 0,
        when the inputs are empty, or when their lengths differ

    Raises:
        LengthMismatchError: Only when ``strict`` and the lengths differ
    """
    config = config if config is not None else _DEFAULT_CONFIG

    if not _lengths_match(fund_returns, benchmark_returns, "information_ratio", 0.0, strict):
        return 0.0

    if not fund_returns:
        return 0.0

    tracking_error = [f - b for f, b in zip(fund_returns, benchmark_returns)]
    mean_tracking_error = sum(tracking_error) / len(tracking_error)
    tracking_volatility = calculate_standard_deviation(tracking_error)

    if tracking_volatility == 0:
        return 0.0

    trading_days = config.trading_days_per_year
    annualized_active_return = mean_tracking_error * trading_days * 100
    annualized_tracking_error = tracking_volatility * math.sqrt(trading_days) * 100

    return annualized_active_return / annualized_tracking_error
