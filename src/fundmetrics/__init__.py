"""
fundmetrics - Fund Performance & Risk Metrics

Public API for computing NAV-based performance metrics and ranking funds.
"""

from importlib.metadata import version

try:
    __version__ = version("fundmetrics")
except Exception:
    __version__ = "0.0.0.dev"  # Fallback for development


__all__ = [
    "__version__",
]
