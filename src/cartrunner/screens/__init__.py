"""
Per-screen handlers for Cart Runner.
"""

from cartrunner.core.state import Screen

from .base import ScreenHandler
from .confetti import ConfettiScreen
from .final import FinalScreen
from .game import GameScreen
from .results import LoseScreen, WinScreen
from .splash import SplashScreen


def build_handlers() -> dict[Screen, ScreenHandler]:
    """One handler per screen. Confetti paints over the game handler."""
    game = GameScreen()
    handlers: list[ScreenHandler] = [
        SplashScreen(),
        game,
        ConfettiScreen(underlay=game),
        WinScreen(),
        LoseScreen(),
        FinalScreen(),
    ]
    return {handler.screen: handler for handler in handlers}


__all__ = [
    "ScreenHandler",
    "SplashScreen",
    "GameScreen",
    "ConfettiScreen",
    "WinScreen",
    "LoseScreen",
    "FinalScreen",
    "build_handlers",
]
