"""Single-fund analysis command."""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from fundmetrics.cli.commands.common import (
    config_option,
    log_level_option,
    make_rng,
    normalize_periods,
    period_option,
    seed_option,
    setup_runtime,
)
from fundmetrics.cli.loaders import load_nav_csv
from fundmetrics.cli.ui import create_metrics_table
from fundmetrics.libraries.performance.analysis import analyze_fund

console = Console()


@click.command("analyze")
@click.argument("nav_files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@period_option
@seed_option
@config_option
@log_level_option
def analyze_command(
    nav_files: tuple[Path, ...],
    periods: tuple[str, ...],
    seed: Optional[int],
    config_file: Optional[Path],
    log_level: Optional[str],
):
    """
    Compute performance and risk metrics for NAV CSV file(s).

    Each file needs ``date`` and ``nav`` columns, oldest first.

    \b
    Examples:
        fundmetrics analyze data/flexicap.csv
        fundmetrics analyze data/flexicap.csv -p 1Y -p 3Y --seed 42
    """
    try:
        system_config = setup_runtime(config_file, log_level)
        metrics_config = system_config.metrics.to_metrics_config()
        rng = make_rng(seed)
        selected = normalize_periods(periods)

        analysed = 0
        for path in nav_files:
            series = load_nav_csv(path)
            analysis = analyze_fund(path.stem, series, selected, config=metrics_config, rng=rng)

            if analysis is None:
                console.print(
                    f"[yellow]⚠ {path.name}: not enough history "
                    f"({len(series)} observations, need {metrics_config.min_observations})[/yellow]"
                )
                continue

            console.print(create_metrics_table(analysis))
            console.print()
            analysed += 1

        if analysed == 0:
            console.print("[bold red]✗ No fund had sufficient history[/bold red]")
            sys.exit(1)

    except (ValueError, OSError) as e:
        console.print(f"[bold red]✗ Analysis failed:[/bold red] {e}")
        sys.exit(1)
