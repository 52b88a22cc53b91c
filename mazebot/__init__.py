"""Autonomous player for the line-based maze game."""

__version__ = "0.1.0"
