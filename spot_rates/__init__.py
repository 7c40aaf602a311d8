"""Canonical spot exchange rates from trading venues."""

__version__ = "0.1.0"
