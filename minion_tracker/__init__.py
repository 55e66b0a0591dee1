"""Minion tracker: combat stat blocks for tabletop sessions."""

__version__ = "0.1.0"
