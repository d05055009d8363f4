"""Configuration for the performance engine.

Holds every constant the calculators depend on (risk-free rate, the
252 trading-day and 365 calendar-day conventions, benchmark assumptions,
period windows) and the composite score weights.

Design Principles:
- Immutable (frozen dataclasses)
- Validation in __post_init__
- Passed explicitly to calculators, never read from module globals

Thread Safety:
- All models are immutable and thread-safe
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


def _default_period_days() -> dict[str, int]:
    """Trading-day windows for the standard period vocabulary."""
    return {
        "1M": 21,
        "3M": 63,
        "6M": 126,
        "1Y": 252,
        "3Y": 756,
        "5Y": 1260,
    }


@dataclass(frozen=True)
class MetricsConfig:
    """Constants used by the metric calculators.

    Two annualization conventions coexist and must not be mixed up:
    volatility and mean-return based rates scale by ``trading_days_per_year``,
    while ``annualize_return`` converts calendar days using
    ``calendar_days_per_year``.

    Attributes:
        risk_free_rate_pct: Annual risk-free rate in percent (e.g., 6.5)
        trading_days_per_year: Trading days used for annualization (252)
        calendar_days_per_year: Calendar days used by annualize_return (365)
        benchmark_annual_return_pct: Assumed benchmark annual return (12%)
        benchmark_annual_volatility_pct: Synthetic benchmark volatility (18%)
        rolling_window_days: Window for rolling returns (252 observations)
        expense_ratio_min_pct: Lower bound of the expense ratio estimate
        expense_ratio_max_pct: Upper bound of the expense ratio estimate
        period_days: Period label -> number of trailing observations (read-only)
        default_period_days: Window used for unknown period labels
        min_observations: Funds with shorter history are skipped in batch analysis
        min_period_observations: Periods with shorter slices are skipped
        preferred_primary_period: Ranking period used when it was selected

    Example:
        >>> config = MetricsConfig(risk_free_rate_pct=7.0)
        >>> config.days_for_period("3M")
        63
    """

    risk_free_rate_pct: float = 6.5
    trading_days_per_year: int = 252
    calendar_days_per_year: int = 365
    benchmark_annual_return_pct: float = 12.0
    benchmark_annual_volatility_pct: float = 18.0
    rolling_window_days: int = 252
    expense_ratio_min_pct: float = 0.8
    expense_ratio_max_pct: float = 1.8
    period_days: Mapping[str, int] = field(default_factory=_default_period_days, hash=False)
    default_period_days: int = 252
    min_observations: int = 20
    min_period_observations: int = 10
    preferred_primary_period: str = "1Y"

    def __post_init__(self) -> None:
        """Validate configuration values and freeze the period table."""
        object.__setattr__(self, "period_days", MappingProxyType(dict(self.period_days)))

        if self.trading_days_per_year <= 0:
            raise ValueError(f"trading_days_per_year must be positive, got {self.trading_days_per_year}")

        if self.calendar_days_per_year <= 0:
            raise ValueError(f"calendar_days_per_year must be positive, got {self.calendar_days_per_year}")

        if self.rolling_window_days < 1:
            raise ValueError(f"rolling_window_days must be >= 1, got {self.rolling_window_days}")

        if self.benchmark_annual_volatility_pct < 0:
            raise ValueError(
                f"benchmark_annual_volatility_pct cannot be negative, got {self.benchmark_annual_volatility_pct}"
            )

        if self.expense_ratio_min_pct > self.expense_ratio_max_pct:
            raise ValueError(
                f"expense_ratio_min_pct ({self.expense_ratio_min_pct}) must not exceed "
                f"expense_ratio_max_pct ({self.expense_ratio_max_pct})"
            )

        if self.default_period_days < 1:
            raise ValueError(f"default_period_days must be >= 1, got {self.default_period_days}")

        for label, days in self.period_days.items():
            if days < 1:
                raise ValueError(f"period '{label}' must span at least 1 day, got {days}")

        if self.min_observations < 2:
            raise ValueError(f"min_observations must be >= 2, got {self.min_observations}")

        if self.min_period_observations < 2:
            raise ValueError(f"min_period_observations must be >= 2, got {self.min_period_observations}")

    def days_for_period(self, period: str) -> int:
        """Number of trailing observations covered by a period label."""
        return self.period_days.get(period, self.default_period_days)


@dataclass(frozen=True)
class ScoringConfig:
    """Weights and normalisation scales for the composite fund score.

    Each component is clamped on its own before the components are summed:

        cagr       min(cagr / cagr_scale * cagr_weight, cagr_weight)
        sharpe     min(sharpe / sharpe_scale * sharpe_weight, sharpe_weight)
        volatility max(volatility_weight - vol / volatility_scale * volatility_weight, 0)
        alpha      min((alpha + alpha_shift) / alpha_scale * alpha_weight, alpha_weight)
        drawdown   max(drawdown_weight - dd / drawdown_scale * drawdown_weight, 0)

    With the defaults the weights sum to 100.
    """

    cagr_weight: float = 30.0
    cagr_scale: float = 20.0
    sharpe_weight: float = 25.0
    sharpe_scale: float = 2.0
    volatility_weight: float = 20.0
    volatility_scale: float = 30.0
    alpha_weight: float = 15.0
    alpha_shift: float = 5.0
    alpha_scale: float = 10.0
    drawdown_weight: float = 10.0
    drawdown_scale: float = 40.0

    def __post_init__(self) -> None:
        """Validate scales (they are used as divisors)."""
        for name in ("cagr_scale", "sharpe_scale", "volatility_scale", "alpha_scale", "drawdown_scale"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

    @property
    def max_score(self) -> float:
        """Upper bound of the composite score."""
        return self.cagr_weight + self.sharpe_weight + self.volatility_weight + self.alpha_weight + self.drawdown_weight
