"""
Screen state machine for Cart Runner.

States:
    SPLASH: Title screen, simulation idle
    GAME: Round in progress (or paused)
    CONFETTI: Round over, celebratory overlay playing
    WIN: At least one box collected
    LOSE: Nothing collected
    FINAL: Product reveal with QR code
"""

from enum import Enum, auto
from typing import Callable, Protocol
import logging

logger = logging.getLogger(__name__)


class Screen(Enum):
    """Presentation states."""
    SPLASH = auto()
    GAME = auto()
    CONFETTI = auto()
    WIN = auto()
    LOSE = auto()
    FINAL = auto()


class HasScreen(Protocol):
    screen: Screen


ScreenListener = Callable[[Screen, Screen], None]


class ScreenStateMachine:
    """
    Owns writes to ``state.screen``.

    Only transitions in VALID_TRANSITIONS are applied; anything else
    is logged and refused so a stray click can never skip a screen.
    """

    VALID_TRANSITIONS: list[tuple[Screen, Screen]] = [
        (Screen.SPLASH, Screen.GAME),

        (Screen.GAME, Screen.CONFETTI),
        (Screen.GAME, Screen.GAME),  # Restart key

        (Screen.CONFETTI, Screen.WIN),
        (Screen.CONFETTI, Screen.LOSE),
        (Screen.CONFETTI, Screen.GAME),

        (Screen.WIN, Screen.FINAL),
        (Screen.WIN, Screen.GAME),

        (Screen.LOSE, Screen.GAME),

        (Screen.FINAL, Screen.GAME),
    ]

    def __init__(self, state: HasScreen) -> None:
        self._state = state
        self._listeners: list[ScreenListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"ScreenStateMachine initialized with screen: {state.screen.name}")

    @property
    def screen(self) -> Screen:
        """Get current screen."""
        return self._state.screen

    def can_transition(self, to_screen: Screen) -> bool:
        """Check if transition to given screen is valid."""
        return (self._state.screen, to_screen) in self._valid_transitions

    def transition(self, to_screen: Screen) -> bool:
        """
        Attempt to move to a new screen.

        Returns:
            True if transition applied, False otherwise
        """
        if not self.can_transition(to_screen):
            logger.warning(
                f"Invalid transition: {self._state.screen.name} -> {to_screen.name}"
            )
            return False

        old_screen = self._state.screen
        self._state.screen = to_screen

        logger.info(f"Screen transition: {old_screen.name} -> {to_screen.name}")

        for listener in self._listeners:
            try:
                listener(old_screen, to_screen)
            except Exception as e:
                logger.error(f"Error in screen listener: {e}")

        return True

    def add_listener(self, callback: ScreenListener) -> None:
        """Add a screen change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: ScreenListener) -> None:
        """Remove a screen change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)
