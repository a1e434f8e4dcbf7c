"""Grido: a console-style falling-tile puzzle with exploding 3x3 clusters."""

__version__ = "0.1.0"
