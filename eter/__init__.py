"""Eter: a two-player terminal card and board game with saved games and statistics."""

__version__ = "0.1.0"