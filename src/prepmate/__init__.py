"""Opponent rating profile extraction and analysis."""

__version__ = "0.1.0"
