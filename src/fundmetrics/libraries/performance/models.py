"""Performance metrics data models.

Pydantic models for NAV series, metric results and ranking output.
All models are frozen: a result is immutable once produced and owned by
the caller that requested it.
"""

import datetime as dt
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field, model_validator


class NavObservation(BaseModel):
    """
    Net asset value of a fund on one calendar date.

    Example:
        >>> obs = NavObservation(date=dt.date(2025, 1, 2), nav=101.25)
    """

    date: dt.date
    nav: float = Field(gt=0)

    model_config = ConfigDict(frozen=True)


def validate_nav_series(series: Sequence[NavObservation]) -> None:
    """
    Check that a NAV series is non-empty and strictly ordered by date.

    The engine assumes this has already been done by the data provider;
    the helper exists for callers that load series themselves.

    Raises:
        ValueError: If the series is empty, unordered or has duplicate dates
    """
    if not series:
        raise ValueError("NAV series is empty")

    for prev, curr in zip(series, series[1:]):
        if curr.date == prev.date:
            raise ValueError(f"Duplicate NAV date: {curr.date.isoformat()}")
        if curr.date < prev.date:
            raise ValueError(
                f"NAV series not in chronological order: {curr.date.isoformat()} after {prev.date.isoformat()}"
            )


class DrawdownResult(BaseModel):
    """
    Largest peak-to-subsequent-trough decline of a NAV series.

    The peak is the running peak active when the trough was recorded, so
    the peak never comes after the trough.
    """

    max_drawdown_pct: float = Field(ge=0)  # Positive magnitude, e.g. 10.0 for -10%
    peak_nav: float
    trough_nav: float
    peak_date: dt.date
    trough_date: dt.date

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_order(self) -> "DrawdownResult":
        """Peak must precede or equal the trough."""
        if self.peak_date > self.trough_date:
            raise ValueError(f"peak_date {self.peak_date} is after trough_date {self.trough_date}")
        return self


class DrawdownPoint(BaseModel):
    """Drawdown from the running peak at a single date."""

    date: dt.date
    nav: float
    peak_nav: float
    drawdown_pct: float  # Positive magnitude, 0.0 at a new peak

    model_config = ConfigDict(frozen=True)


class RollingReturn(BaseModel):
    """Absolute return over a trailing window ending at ``date``."""

    date: dt.date
    return_pct: float

    model_config = ConfigDict(frozen=True)


class MetricsResult(BaseModel):
    """
    All metrics for one fund over one period.

    Returns and volatility are percentages; ratios are dimensionless.
    """

    period: str  # "1M", "3M", "6M", "1Y", "3Y", "5Y"
    start_date: dt.date
    end_date: dt.date
    start_nav: float
    end_nav: float
    observations: int

    # Returns
    absolute_return_pct: float
    cagr_pct: float

    # Risk
    volatility_pct: float
    drawdown: DrawdownResult

    # Risk-adjusted
    sharpe_ratio: float
    sortino_ratio: float
    treynor_ratio: float

    # Benchmark-relative (synthetic benchmark)
    beta: float
    alpha_pct: float
    information_ratio: float

    expense_ratio_pct: float  # Estimate, not sourced from fund documents
    rolling_returns: list[RollingReturn] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def max_drawdown_pct(self) -> float:
        """Maximum drawdown as positive percentage."""
        return self.drawdown.max_drawdown_pct


class FundAnalysis(BaseModel):
    """Metrics of one fund keyed by period label (ranking input)."""

    fund_id: str
    fund_name: str | None = None
    metrics: dict[str, MetricsResult]

    model_config = ConfigDict(frozen=True)


class ScoreBreakdown(BaseModel):
    """Clamped components of the composite score."""

    cagr: float
    sharpe: float
    volatility: float
    alpha: float
    drawdown: float

    model_config = ConfigDict(frozen=True)

    @property
    def total(self) -> float:
        """Sum of all components."""
        return self.cagr + self.sharpe + self.volatility + self.alpha + self.drawdown


class RankedEntry(BaseModel):
    """A fund with its composite score and 1-based rank."""

    fund_id: str
    fund_name: str | None = None
    metrics: dict[str, MetricsResult]
    primary_period: str
    overall_score: float
    score_breakdown: ScoreBreakdown
    rank: int = Field(ge=1)

    model_config = ConfigDict(frozen=True)
