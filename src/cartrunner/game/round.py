"""Round countdown, scoring and the one-shot round end."""

import logging
from typing import Protocol

from cartrunner.config.settings import RoundSettings
from cartrunner.core.state import Screen
from cartrunner.game.state import GameState

logger = logging.getLogger(__name__)


class ScoreStore(Protocol):
    def load(self) -> int: ...
    def save(self, value: int) -> None: ...


class RoundTimer:
    def __init__(self, settings: RoundSettings, store: ScoreStore) -> None:
        self.settings = settings
        self.store = store

    def advance(self, state: GameState, dt: float) -> bool:
        """Count down; returns True only on the tick the round ends."""
        state.time_left = max(0.0, state.time_left - dt)

        if state.time_left <= self.settings.finish_warning:
            state.finish_imminent = True

        if state.time_left <= 0 and not state.game_ended:
            self.finish(state)
            return True
        return False

    def finish(self, state: GameState) -> None:
        state.running = False
        state.game_ended = True

        if state.score > state.high_score:
            state.high_score = state.score
            self.store.save(state.high_score)

        logger.info(f"Round over: score={state.score} best={state.high_score}")

    def add_points(self, state: GameState, points: int) -> None:
        state.score += points

    @staticmethod
    def outcome(state: GameState) -> Screen:
        return Screen.WIN if state.score > 0 else Screen.LOSE
