"""Commands __init__ - exports all commands."""

from fundmetrics.cli.commands.analyze import analyze_command
from fundmetrics.cli.commands.rank import rank_command

__all__ = ["analyze_command", "rank_command"]
