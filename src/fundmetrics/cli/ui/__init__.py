"""CLI UI components - table formatters."""

from fundmetrics.cli.ui.formatters import add_ranking_row, create_metrics_table, create_ranking_table

__all__ = [
    "create_metrics_table",
    "create_ranking_table",
    "add_ranking_row",
]
