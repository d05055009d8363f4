"""Options and setup shared by the analysis commands."""

from pathlib import Path
from typing import Literal, Optional, cast

import click
import numpy as np

from fundmetrics.system import LoggerFactory, SystemConfig, reload_system_config

PERIOD_CHOICES = ["1M", "3M", "6M", "1Y", "3Y", "5Y"]

period_option = click.option(
    "--period",
    "-p",
    "periods",
    type=click.Choice(PERIOD_CHOICES, case_sensitive=False),
    multiple=True,
    default=("1Y",),
    show_default=True,
    help="Period(s) to analyse (repeatable)",
)
seed_option = click.option(
    "--seed",
    type=int,
    help="Seed for the synthetic benchmark and expense ratio estimate (reproducible output)",
)
config_option = click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to system configuration file (YAML)",
)
log_level_option = click.option(
    "--log-level",
    "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Set logging level",
)


def setup_runtime(config_file: Optional[Path], log_level: Optional[str]) -> SystemConfig:
    """Load system config and configure logging, applying CLI overrides."""
    system_config = reload_system_config(config_file)

    if log_level:
        level = cast(Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], log_level.upper())
        system_config.logging.level = level

    LoggerFactory.configure(system_config.logging)
    return system_config


def make_rng(seed: Optional[int]) -> np.random.Generator:
    """Seeded generator when a seed is given, OS entropy otherwise."""
    return np.random.default_rng(seed)


def normalize_periods(periods: tuple[str, ...]) -> list[str]:
    """Upper-case and de-duplicate period labels, keeping order."""
    return list(dict.fromkeys(p.upper() for p in periods))
