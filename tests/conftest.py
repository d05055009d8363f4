"""Root conftest for all tests - setup sys.path and shared NAV fixtures."""

import math
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Callable, Sequence

import pytest

# Add src/ to sys.path so tests run without an editable install
src_root = Path(__file__).parent.parent / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from fundmetrics.libraries.performance.models import NavObservation  # noqa: E402

START_DATE = date(2024, 1, 1)


def build_series(navs: Sequence[float], start: date = START_DATE) -> list[NavObservation]:
    """NAV series with one observation per calendar day."""
    return [NavObservation(date=start + timedelta(days=i), nav=nav) for i, nav in enumerate(navs)]


def wavy_navs(length: int, daily_growth: float = 0.0005, amplitude: float = 0.02) -> list[float]:
    """Deterministic NAV path: compound growth with a sine wobble (has up and down days)."""
    return [100.0 * (1 + daily_growth) ** i * (1 + amplitude * math.sin(i / 3)) for i in range(length)]


@pytest.fixture
def make_series() -> Callable[..., list[NavObservation]]:
    """Factory fixture building a NAV series from raw values."""
    return build_series


@pytest.fixture
def wavy_series() -> Callable[..., list[NavObservation]]:
    """Factory fixture building a deterministic non-monotonic NAV series."""

    def _make(length: int, daily_growth: float = 0.0005, amplitude: float = 0.02) -> list[NavObservation]:
        return build_series(wavy_navs(length, daily_growth, amplitude))

    return _make


@pytest.fixture
def write_nav_csv(tmp_path) -> Callable[[str, Sequence[float]], Path]:
    """Factory fixture writing a date,nav CSV file and returning its path."""

    def _write(name: str, navs: Sequence[float]) -> Path:
        path = tmp_path / f"{name}.csv"
        lines = ["date,nav"] + [f"{obs.date.isoformat()},{obs.nav}" for obs in build_series(navs)]
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write
