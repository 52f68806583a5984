"""Two-player chess rule engine."""

__version__ = "0.1.0"
