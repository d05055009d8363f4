"""Stateful performance calculators for incremental updates.

Calculators hold a single accumulator and are updated one observation at
a time. The pure functions in ``metrics`` fold a whole series through
them, so the same scan serves both batch and streaming callers.

Usage:
    >>> from fundmetrics.libraries.performance.calculators import DrawdownCalculator
    >>>
    >>> calc = DrawdownCalculator()
    >>> calc.update(date(2025, 1, 1), 100.0)
    >>> calc.update(date(2025, 1, 2), 90.0)   # Drawdown starts
    >>> calc.max_drawdown_pct
    10.0
    >>> calc.update(date(2025, 1, 3), 95.0)   # Partial recovery, trough unchanged
    >>> calc.result().trough_nav
    90.0
"""

import datetime as dt

from fundmetrics.libraries.performance.models import DrawdownPoint, DrawdownResult


class DrawdownCalculator:
    """
    Tracks maximum drawdown incrementally against a running peak.

    A later higher NAV moves the running peak for subsequent comparisons
    but never rewrites a trough that was already recorded.
    """

    def __init__(self) -> None:
        """Initialize drawdown calculator."""
        self._peak_nav: float | None = None
        self._peak_date: dt.date | None = None
        self._max_drawdown = 0.0  # Most negative (current - peak) / peak seen, in percent
        self._max_peak_nav: float | None = None
        self._max_peak_date: dt.date | None = None
        self._trough_nav: float | None = None
        self._trough_date: dt.date | None = None
        self._current_drawdown_pct = 0.0

    def update(self, date: dt.date, nav: float) -> DrawdownPoint:
        """
        Add the next observation.

        Args:
            date: Observation date
            nav: Net asset value (positive)

        Returns:
            Drawdown of this observation relative to the running peak
        """
        if self._peak_nav is None:
            self._peak_nav = nav
            self._peak_date = date
            self._max_peak_nav = nav
            self._max_peak_date = date
            self._trough_nav = nav
            self._trough_date = date
        elif nav > self._peak_nav:
            self._peak_nav = nav
            self._peak_date = date

        drawdown = (nav - self._peak_nav) / self._peak_nav * 100

        if drawdown < self._max_drawdown:
            self._max_drawdown = drawdown
            self._max_peak_nav = self._peak_nav
            self._max_peak_date = self._peak_date
            self._trough_nav = nav
            self._trough_date = date

        self._current_drawdown_pct = abs(drawdown)

        return DrawdownPoint(
            date=date,
            nav=nav,
            peak_nav=self._peak_nav,
            drawdown_pct=self._current_drawdown_pct,
        )

    def result(self) -> DrawdownResult:
        """
        Maximum drawdown observed so far.

        Without any decline both peak and trough point at the first
        observation and the drawdown is 0.

        Raises:
            ValueError: If no observation has been added
        """
        if (
            self._max_peak_nav is None
            or self._max_peak_date is None
            or self._trough_nav is None
            or self._trough_date is None
        ):
            raise ValueError("DrawdownCalculator has no observations")

        return DrawdownResult(
            max_drawdown_pct=abs(self._max_drawdown),
            peak_nav=self._max_peak_nav,
            trough_nav=self._trough_nav,
            peak_date=self._max_peak_date,
            trough_date=self._trough_date,
        )

    @property
    def max_drawdown_pct(self) -> float:
        """Maximum drawdown percentage observed."""
        return abs(self._max_drawdown)

    @property
    def current_drawdown_pct(self) -> float:
        """Drawdown of the latest observation."""
        return self._current_drawdown_pct

    @property
    def peak_nav(self) -> float | None:
        """Current running peak."""
        return self._peak_nav

    @property
    def is_underwater(self) -> bool:
        """True if the latest observation is below the running peak."""
        return self._current_drawdown_pct > 0
