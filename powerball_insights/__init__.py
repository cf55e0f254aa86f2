"""Powerball drawing analysis and weighted number prediction."""

__version__ = "1.0.0"
