"""Confetti interlude played over the frozen playfield after a round ends."""

from typing import TYPE_CHECKING, Optional

import pygame

from cartrunner.core.state import Screen
from cartrunner.game.round import RoundTimer
from cartrunner.screens.base import ScreenHandler, blit_fitted
from cartrunner.screens.game import GameScreen

if TYPE_CHECKING:
    from cartrunner.assets.store import AssetStore
    from cartrunner.game.session import GameSession


class ConfettiScreen(ScreenHandler):
    """Frame-indexed animation; taps are ignored until it hands off."""

    screen = Screen.CONFETTI

    def __init__(self, underlay: Optional[GameScreen] = None) -> None:
        self._underlay = underlay or GameScreen()

    def on_enter(self, session: "GameSession") -> None:
        state = session.state
        if state.confetti_started_ms is None:
            state.confetti_started_ms = session.now_ms
        state.confetti_frame = 0

    def update(self, session: "GameSession", dt: float, now_ms: float) -> None:
        state = session.state
        settings = session.settings.round
        started = state.confetti_started_ms if state.confetti_started_ms is not None else now_ms
        frame_ms = 1000 / settings.confetti_fps

        state.confetti_frame = max(0, int((now_ms - started) / frame_ms))
        if state.confetti_frame > settings.confetti_frames - 1:
            session.machine.transition(RoundTimer.outcome(state))

    def render(self, surface: pygame.Surface, session: "GameSession", assets: Optional["AssetStore"]) -> None:
        self._underlay.render(surface, session, assets)

        last = session.settings.round.confetti_frames - 1
        frame = min(session.state.confetti_frame, last)
        image = assets.image(f"confetti{frame}") if assets else None
        if image is not None:
            blit_fitted(surface, image, cover=True)
