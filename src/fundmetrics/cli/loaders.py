"""NAV CSV loading for the CLI.

Expects a header with ``date`` and ``nav`` columns (ISO dates), oldest
first. Fund id is the file stem.

    date,nav
    2024-01-01,100.00
    2024-01-02,100.35
"""

import csv
from datetime import date
from pathlib import Path

from fundmetrics.libraries.performance.models import NavObservation, validate_nav_series
from fundmetrics.system.log_system import LoggerFactory

logger = LoggerFactory.get_logger()

REQUIRED_COLUMNS = ("date", "nav")


def load_nav_csv(path: Path) -> list[NavObservation]:
    """Read a NAV series from CSV.

    Args:
        path: CSV file with date and nav columns

    Returns:
        NAV observations in file order

    Raises:
        ValueError: If columns are missing, a row cannot be parsed, or
                    dates are not strictly increasing
    """
    with path.open("r", newline="") as f:
        reader = csv.DictReader(f)
        fieldnames = [name.strip().lower() for name in reader.fieldnames or []]
        missing = [col for col in REQUIRED_COLUMNS if col not in fieldnames]
        if missing:
            raise ValueError(f"{path.name}: missing column(s) {missing}, found {fieldnames}")

        series: list[NavObservation] = []
        for line_no, raw in enumerate(reader, start=2):
            row = {k.strip().lower(): (v or "").strip() for k, v in raw.items() if k is not None}
            try:
                series.append(NavObservation(date=date.fromisoformat(row["date"]), nav=float(row["nav"])))
            except ValueError as e:
                raise ValueError(f"{path.name}:{line_no}: invalid row {row}: {e}")

    validate_nav_series(series)

    logger.debug(
        "loaders.nav_loaded",
        path=str(path),
        observations=len(series),
        start=series[0].date.isoformat(),
        end=series[-1].date.isoformat(),
    )

    return series
