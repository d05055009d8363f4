"""Performance metrics calculation functions.

Pure functions for calculating performance statistics from NAV series and
return series. All functions are stateless and testable.

Philosophy:
- Pure functions: same inputs always produce same outputs
- No side effects: don't modify inputs or global state
- Degenerate numeric input (zero volatility, zero beta, zero years) resolves
  to a defined value instead of raising
- Constants come from an explicit MetricsConfig, never from literals

Units:
- NAV series: sequence of NavObservation, oldest first
- Returns, volatility, drawdown: percentages (12.5 means 12.5%)
- Daily returns: fractions (0.01 means 1%)

Usage:
    >>> from fundmetrics.libraries.performance import metrics
    >>>
    >>> metrics.calculate_absolute_return(100.0, 125.0)
    25.0
    >>> metrics.calculate_sharpe_ratio(14.0, 10.0, risk_free_rate_pct=6.5)
    0.75
"""

import math
from typing import Sequence

from fundmetrics.libraries.performance.calculators import DrawdownCalculator
from fundmetrics.libraries.performance.config import MetricsConfig
from fundmetrics.libraries.performance.errors import InsufficientDataError
from fundmetrics.libraries.performance.models import DrawdownPoint, DrawdownResult, NavObservation, RollingReturn
from fundmetrics.system.log_system import LoggerFactory

logger = LoggerFactory.get_logger()

_DEFAULT_CONFIG = MetricsConfig()


def _resolve_config(config: MetricsConfig | None) -> MetricsConfig:
    return config if config is not None else _DEFAULT_CONFIG


# ============================================
# Series utilities
# ============================================


def calculate_daily_returns(series: Sequence[NavObservation]) -> list[float]:
    """
    Calculate simple period-over-period returns.

    Args:
        series: NAV observations, oldest first

    Returns:
        One return per consecutive pair, as fractions
        (``(nav[i] - nav[i-1]) / nav[i-1]``)

    Raises:
        InsufficientDataError: If the series has fewer than 2 observations

    Example:
        >>> calculate_daily_returns(navs([100, 110, 99]))
        [0.1, -0.1]
    """
    if len(series) < 2:
        raise InsufficientDataError(required=2, actual=len(series))

    return [(curr.nav - prev.nav) / prev.nav for prev, curr in zip(series, series[1:])]


def calculate_standard_deviation(values: Sequence[float]) -> float:
    """
    Population standard deviation (divides by N, not N-1).

    Returns 0.0 for an empty sequence so downstream ratios stay defined.
    """
    if not values:
        return 0.0

    mean = sum(values) / len(values)
    variance = sum((v - mean) ** 2 for v in values) / len(values)

    return math.sqrt(variance)


# ============================================
# Returns & growth
# ============================================


def calculate_absolute_return(start_nav: float, end_nav: float) -> float:
    """
    Calculate absolute (point-to-point) return percentage.

    Example:
        >>> calculate_absolute_return(100.0, 80.0)
        -20.0
    """
    if start_nav == 0:
        return 0.0

    return (end_nav - start_nav) / start_nav * 100


def _compound_annual_rate(growth: float, years: float) -> float:
    """
    ``(growth ** (1 / years) - 1) * 100`` without raising.

    Very short periods with a large move exceed float range; the rate is
    then ``inf``. A negative growth factor has no real root and gives ``nan``.
    """
    if growth < 0:
        return math.nan

    try:
        return (growth ** (1 / years) - 1) * 100
    except OverflowError:
        return math.inf


def calculate_cagr(start_nav: float, end_nav: float, years: float) -> float:
    """
    Calculate Compound Annual Growth Rate.

    Args:
        start_nav: NAV at period start
        end_nav: NAV at period end
        years: Length of the period in years

    Returns:
        CAGR as percentage, 0.0 when ``years`` is 0, ``inf`` when the
        annualized growth exceeds float range

    Example:
        >>> round(calculate_cagr(100.0, 121.0, 2), 6)
        10.0
    """
    if years == 0 or start_nav == 0:
        return 0.0

    return _compound_annual_rate(end_nav / start_nav, years)


def annualize_return(period_return_pct: float, days: float, config: MetricsConfig | None = None) -> float:
    """
    Convert a return observed over ``days`` calendar days to an annual rate.

    Uses compound scaling with ``years = days / calendar_days_per_year``, so
    ``annualize_return(calculate_absolute_return(a, b), d)`` equals
    ``calculate_cagr(a, b, d / 365)``.

    Returns:
        Annualized return percentage, 0.0 when ``days`` is 0, ``inf`` on
        overflow
    """
    config = _resolve_config(config)

    if days == 0:
        return 0.0

    years = days / config.calendar_days_per_year
    return _compound_annual_rate(1 + period_return_pct / 100, years)


# ============================================
# Volatility & risk-adjusted ratios
# ============================================


def calculate_volatility(series: Sequence[NavObservation], config: MetricsConfig | None = None) -> float:
    """
    Calculate annualized volatility of daily returns.

    ``stdev(daily returns) * sqrt(trading_days_per_year) * 100``

    Raises:
        InsufficientDataError: If the series has fewer than 2 observations
    """
    config = _resolve_config(config)

    daily_volatility = calculate_standard_deviation(calculate_daily_returns(series))
    return daily_volatility * math.sqrt(config.trading_days_per_year) * 100


def calculate_sharpe_ratio(
    annual_return_pct: float,
    volatility_pct: float,
    risk_free_rate_pct: float | None = None,
    config: MetricsConfig | None = None,
) -> float:
    """
    Calculate Sharpe ratio.

    Sharpe = (Return - RiskFreeRate) / Volatility

    Args:
        annual_return_pct: Annualized return (the engine passes CAGR)
        volatility_pct: Annualized volatility
        risk_free_rate_pct: Annual risk-free rate; config value when None
        config: Engine configuration

    Returns:
        Sharpe ratio, 0.0 when volatility is 0
    """
    if risk_free_rate_pct is None:
        risk_free_rate_pct = _resolve_config(config).risk_free_rate_pct

    if volatility_pct == 0:
        return 0.0

    return (annual_return_pct - risk_free_rate_pct) / volatility_pct


def calculate_sortino_ratio(
    series: Sequence[NavObservation],
    risk_free_rate_pct: float | None = None,
    config: MetricsConfig | None = None,
) -> float:
    """
    Calculate Sortino ratio (penalizes only downside volatility).

    Annualized return is the mean daily return scaled by trading days;
    downside deviation is the population standard deviation of the
    negative daily returns, annualized like volatility.

    Returns:
        Sortino ratio. When there are no negative returns the annualized
        return itself is returned, undivided. 0.0 when the downside
        deviation is 0.

    Raises:
        InsufficientDataError: If the series has fewer than 2 observations
    """
    config = _resolve_config(config)
    if risk_free_rate_pct is None:
        risk_free_rate_pct = config.risk_free_rate_pct

    daily_returns = calculate_daily_returns(series)
    mean_return = sum(daily_returns) / len(daily_returns)
    annualized_return = mean_return * config.trading_days_per_year * 100

    negative_returns = [r for r in daily_returns if r < 0]
    if not negative_returns:
        # NOTE: kept for compatibility with published figures; not a ratio
        logger.debug(
            "metrics.sortino_no_downside",
            annualized_return=annualized_return,
            observations=len(series),
        )
        return annualized_return

    downside_deviation = calculate_standard_deviation(negative_returns)
    annualized_downside = downside_deviation * math.sqrt(config.trading_days_per_year) * 100

    if annualized_downside == 0:
        return 0.0

    return (annualized_return - risk_free_rate_pct) / annualized_downside


def calculate_treynor_ratio(
    annual_return_pct: float,
    beta: float,
    risk_free_rate_pct: float | None = None,
    config: MetricsConfig | None = None,
) -> float:
    """
    Calculate Treynor ratio (excess return per unit of beta).

    Returns:
        Treynor ratio, 0.0 when beta is 0
    """
    if risk_free_rate_pct is None:
        risk_free_rate_pct = _resolve_config(config).risk_free_rate_pct

    if beta == 0:
        return 0.0

    return (annual_return_pct - risk_free_rate_pct) / beta


# ============================================
# Drawdown & rolling windows
# ============================================


def calculate_max_drawdown(series: Sequence[NavObservation]) -> DrawdownResult:
    """
    Calculate maximum drawdown with its peak and trough.

    Single forward pass against a running peak. The reported peak is the
    one active when the deepest trough was reached.

    Raises:
        InsufficientDataError: If the series is empty

    Example:
        >>> result = calculate_max_drawdown(navs([100, 90, 95]))
        >>> result.max_drawdown_pct, result.peak_nav, result.trough_nav
        (10.0, 100.0, 90.0)
    """
    if not series:
        raise InsufficientDataError(required=1, actual=0)

    calc = DrawdownCalculator()
    for obs in series:
        calc.update(obs.date, obs.nav)

    return calc.result()


def calculate_drawdown_series(series: Sequence[NavObservation]) -> list[DrawdownPoint]:
    """
    Drawdown from the running peak at every observation.

    Same scan as calculate_max_drawdown, keeping each intermediate point
    (underwater chart data).
    """
    calc = DrawdownCalculator()
    return [calc.update(obs.date, obs.nav) for obs in series]


def calculate_rolling_returns(series: Sequence[NavObservation], window_days: int) -> list[RollingReturn]:
    """
    Calculate absolute returns over a trailing window of observations.

    For every index ``i >= window_days`` the return from
    ``series[i - window_days]`` to ``series[i]``, dated at ``series[i]``.

    Args:
        series: NAV observations, oldest first
        window_days: Window length in observations

    Returns:
        Rolling returns, empty when ``len(series) <= window_days``

    Raises:
        ValueError: If window_days < 1
    """
    if window_days < 1:
        raise ValueError(f"window_days must be >= 1, got {window_days}")

    return [
        RollingReturn(
            date=series[i].date,
            return_pct=calculate_absolute_return(series[i - window_days].nav, series[i].nav),
        )
        for i in range(window_days, len(series))
    ]
