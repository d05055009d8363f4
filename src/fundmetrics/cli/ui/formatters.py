"""Rich table formatters for CLI output."""

from rich.table import Table

from fundmetrics.libraries.performance.models import FundAnalysis, MetricsResult, RankedEntry


def _pct(value: float) -> str:
    """Format a percentage value."""
    return f"{value:.2f}%"


def _ratio(value: float) -> str:
    """Format a dimensionless ratio."""
    return f"{value:.2f}"


def create_metrics_table(analysis: FundAnalysis) -> Table:
    """
    Create a Rich table with one column per period for a single fund.

    Args:
        analysis: Fund metrics keyed by period

    Returns:
        Populated Rich Table
    """
    title = analysis.fund_name or analysis.fund_id
    table = Table(title=f"{title} - Performance Metrics")
    table.add_column("Metric", style="cyan", no_wrap=True)

    periods = list(analysis.metrics)
    for period in periods:
        table.add_column(period, justify="right")

    results = [analysis.metrics[p] for p in periods]

    def row(label: str, values: list[str], style: str | None = None) -> None:
        table.add_row(label, *values, style=style)

    row("Date Range", [f"{m.start_date} to {m.end_date}" for m in results], style="dim")
    row("Start NAV", [f"{m.start_nav:.4f}" for m in results])
    row("End NAV", [f"{m.end_nav:.4f}" for m in results])
    row("Absolute Return", [_pct(m.absolute_return_pct) for m in results])
    row("CAGR", [_pct(m.cagr_pct) for m in results])
    row("Volatility", [_pct(m.volatility_pct) for m in results])
    row("Sharpe Ratio", [_ratio(m.sharpe_ratio) for m in results])
    row("Sortino Ratio", [_ratio(m.sortino_ratio) for m in results])
    row("Max Drawdown", [_pct(m.max_drawdown_pct) for m in results])
    row("Beta", [_ratio(m.beta) for m in results])
    row("Alpha", [_pct(m.alpha_pct) for m in results])
    row("Information Ratio", [_ratio(m.information_ratio) for m in results])
    row("Treynor Ratio", [_ratio(m.treynor_ratio) for m in results])
    row("Expense Ratio (est.)", [_pct(m.expense_ratio_pct) for m in results], style="dim")

    return table


def create_ranking_table(period: str) -> Table:
    """
    Create a Rich table for ranked funds.

    Args:
        period: Period the ranking is based on

    Returns:
        Configured Rich Table with columns
    """
    table = Table(title=f"Fund Ranking ({period})")
    table.add_column("Rank", justify="right", style="bold")
    table.add_column("Fund", style="cyan", no_wrap=True)
    table.add_column("Score", justify="right", style="magenta")
    table.add_column("CAGR", justify="right")
    table.add_column("Sharpe", justify="right")
    table.add_column("Volatility", justify="right")
    table.add_column("Alpha", justify="right")
    table.add_column("Max DD", justify="right")
    return table


def add_ranking_row(table: Table, entry: RankedEntry) -> None:
    """
    Add a ranked fund row to the table.

    Args:
        table: Rich Table instance
        entry: Ranked fund
    """
    metrics: MetricsResult = entry.metrics[entry.primary_period]
    style = "green" if entry.rank == 1 else None

    table.add_row(
        str(entry.rank),
        entry.fund_name or entry.fund_id,
        f"{entry.overall_score:.1f}",
        _pct(metrics.cagr_pct),
        _ratio(metrics.sharpe_ratio),
        _pct(metrics.volatility_pct),
        _pct(metrics.alpha_pct),
        _pct(metrics.max_drawdown_pct),
        style=style,
    )
