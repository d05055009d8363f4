"""Shared fixtures for CLI tests."""

import pytest
from rich.console import Console

from fundmetrics.cli.commands import analyze as analyze_module
from fundmetrics.cli.commands import rank as rank_module
from fundmetrics.system import LoggerFactory
from fundmetrics.system.config import CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def cli_environment(tmp_path, monkeypatch):
    """Isolate config lookup, widen console output and reset logging around each command."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.setattr(analyze_module, "console", Console(width=200))
    monkeypatch.setattr(rank_module, "console", Console(width=200))
    LoggerFactory.reset()
    yield
    LoggerFactory.reset()
