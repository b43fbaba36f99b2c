"""TrendPulse command-line front end and report tables."""

__version__ = "0.1.0"
