"""Persistent storage for Cart Runner."""

from .highscore import HighScoreStore, MemoryHighScoreStore

__all__ = ["HighScoreStore", "MemoryHighScoreStore"]
