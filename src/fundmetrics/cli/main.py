"""fundmetrics CLI main entry point."""

import click

from fundmetrics import __version__
from fundmetrics.cli.commands import analyze_command, rank_command


@click.group()
@click.version_option(version=__version__)
def main():
    """fundmetrics - Fund Performance & Risk Metrics"""
    pass


# Register commands
main.add_command(analyze_command)
main.add_command(rank_command)


if __name__ == "__main__":
    main()
