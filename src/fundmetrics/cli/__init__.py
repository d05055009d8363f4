"""fundmetrics command line interface."""
