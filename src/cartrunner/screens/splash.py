"""Title screen. Waits for the first tap or Space/Enter."""

from typing import TYPE_CHECKING, Optional

import pygame

from cartrunner.core.state import Screen
from cartrunner.screens.base import ScreenHandler, draw_full_screen, get_font

if TYPE_CHECKING:
    from cartrunner.assets.store import AssetStore
    from cartrunner.game.session import GameSession

BG_COLOR = (249, 240, 211)
TEXT_COLOR = (90, 60, 30)


class SplashScreen(ScreenHandler):
    screen = Screen.SPLASH
    simulates = False

    def on_tap(self, session: "GameSession") -> None:
        session.machine.transition(Screen.GAME)

    def render(self, surface: pygame.Surface, session: "GameSession", assets: Optional["AssetStore"]) -> None:
        draw_full_screen(surface, assets, "splash", BG_COLOR, cover=True)
        if assets is not None and assets.image("splash") is not None:
            return

        W, H = surface.get_size()
        title = get_font(max(36, int(W * 0.08))).render("CART RUNNER", True, TEXT_COLOR)
        surface.blit(title, title.get_rect(center=(W / 2, H * 0.4)))
        hint = get_font(max(18, int(W * 0.035))).render("TAP TO PLAY", True, TEXT_COLOR)
        surface.blit(hint, hint.get_rect(center=(W / 2, H * 0.55)))
