"""Win and lose result screens."""

import logging
from typing import TYPE_CHECKING, Optional

import pygame

from cartrunner.core.state import Screen
from cartrunner.screens.base import ScreenHandler, draw_full_screen, get_font

if TYPE_CHECKING:
    from cartrunner.assets.store import AssetStore
    from cartrunner.game.session import GameSession

logger = logging.getLogger(__name__)

WIN_COLOR = (76, 175, 80)
LOSE_COLOR = (244, 67, 54)


def _draw_caption(surface: pygame.Surface, title: str, subtitle: str) -> None:
    W, H = surface.get_size()
    head = get_font(max(36, int(W * 0.09))).render(title, True, (255, 255, 255))
    surface.blit(head, head.get_rect(center=(W / 2, H * 0.42)))
    sub = get_font(max(18, int(W * 0.04))).render(subtitle, True, (255, 255, 255))
    surface.blit(sub, sub.get_rect(center=(W / 2, H * 0.52)))


class WinScreen(ScreenHandler):
    screen = Screen.WIN

    def on_tap(self, session: "GameSession") -> None:
        count = session.settings.round.product_count
        session.state.selected_product = session.rng.randint(1, count)
        logger.info(f"Reward product selected: {session.state.selected_product}")
        session.machine.transition(Screen.FINAL)

    def render(self, surface: pygame.Surface, session: "GameSession", assets: Optional["AssetStore"]) -> None:
        draw_full_screen(surface, assets, "win_screen", WIN_COLOR)
        if assets is None or assets.image("win_screen") is None:
            _draw_caption(surface, "YOU WIN!", f"Score: {session.state.score}  -  tap for your prize")


class LoseScreen(ScreenHandler):
    screen = Screen.LOSE

    def on_tap(self, session: "GameSession") -> None:
        session.machine.transition(Screen.GAME)

    def render(self, surface: pygame.Surface, session: "GameSession", assets: Optional["AssetStore"]) -> None:
        draw_full_screen(surface, assets, "lose_screen", LOSE_COLOR)
        if assets is None or assets.image("lose_screen") is None:
            _draw_caption(surface, "TRY AGAIN", "Tap to play")
