"""Fund ranking command."""

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
from fundmetrics.cli.ui import add_ranking_row, create_ranking_table
from fundmetrics.libraries.performance.analysis import analyze_funds
from fundmetrics.libraries.performance.ranking import rank_funds, select_primary_period

console = Console()


@click.command("rank")
@click.argument("nav_files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@period_option
@seed_option
@config_option
@log_level_option
def rank_command(
    nav_files: tuple[Path, ...],
    periods: tuple[str, ...],
    seed: Optional[int],
    config_file: Optional[Path],
    log_level: Optional[str],
):
    """
    Rank funds by composite score.

    The score uses the 1Y metrics when 1Y is selected, otherwise the first
    selected period. Funds with too little history are skipped.

    \b
    Examples:
        fundmetrics rank data/*.csv
        fundmetrics rank data/*.csv -p 3Y -p 1Y --seed 7
    """
    try:
        system_config = setup_runtime(config_file, log_level)
        metrics_config = system_config.metrics.to_metrics_config()
        scoring_config = system_config.scoring.to_scoring_config()
        selected = normalize_periods(periods)
        primary_period = select_primary_period(selected, metrics_config)

        funds = {}
        sources: dict[str, Path] = {}
        for path in nav_files:
            if path.stem in sources:
                console.print(
                    f"[yellow]⚠ Skipping {path}:[/yellow] "
                    f"fund id '{path.stem}' already loaded from {sources[path.stem]}"
                )
                continue
            sources[path.stem] = path
            try:
                funds[path.stem] = load_nav_csv(path)
            except ValueError as e:
                console.print(f"[yellow]⚠ Skipping {path.name}:[/yellow] {e}")

        analyses = analyze_funds(funds, selected, config=metrics_config, rng=make_rng(seed))
        ranked = rank_funds(analyses, primary_period, scoring_config)

        if not ranked:
            console.print("[bold red]✗ No fund could be ranked[/bold red]")
            sys.exit(1)

        table = create_ranking_table(primary_period)
        for entry in ranked:
            add_ranking_row(table, entry)

        console.print(table)

        skipped = len(nav_files) - len(ranked)
        if skipped:
            console.print(f"[dim]{skipped} fund(s) skipped[/dim]")

    except (ValueError, OSError) as e:
        console.print(f"[bold red]✗ Ranking failed:[/bold red] {e}")
        sys.exit(1)
