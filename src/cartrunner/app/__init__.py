"""Desktop window for Cart Runner."""

from .window import GameWindow

__all__ = ["GameWindow"]
