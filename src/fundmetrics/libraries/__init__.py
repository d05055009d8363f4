"""fundmetrics calculation libraries."""
