"""Base class for the per-screen handlers.

Each Screen value maps to exactly one handler. The session never asks
"which screen are we on?"; it calls the current handler and lets it
decide what a frame, a tap or the action key means.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

import pygame

from cartrunner.core.state import Screen

if TYPE_CHECKING:
    from cartrunner.assets.store import AssetStore
    from cartrunner.game.session import GameSession

Color = tuple[int, int, int]


class ScreenHandler(ABC):
    """Input, update and drawing for one screen.

    Lifecycle:
        1. on_enter(session) - called right after the transition
        2. update(session, dt, now_ms) - once per frame while current
        3. on_tap / on_action_key - player input
        4. render(surface, session, assets) - draw the frame
    """

    screen: Screen
    # Splash runs no per-frame logic at all
    simulates: bool = True

    def on_enter(self, session: "GameSession") -> None:
        """Called when this screen becomes current."""
        pass

    def update(self, session: "GameSession", dt: float, now_ms: float) -> None:
        """Per-frame logic."""
        pass

    def on_tap(self, session: "GameSession") -> None:
        """Pointer click or touch."""
        pass

    def on_action_key(self, session: "GameSession") -> None:
        """Space / Enter. Defaults to the tap behaviour."""
        self.on_tap(session)

    @abstractmethod
    def render(self, surface: pygame.Surface, session: "GameSession", assets: Optional["AssetStore"]) -> None:
        """Draw this screen onto the canvas."""
        pass


def blit_fitted(
    surface: pygame.Surface,
    image: pygame.Surface,
    cover: bool = False,
) -> None:
    """Scale ``image`` to fit (or cover) the canvas, centred, keeping aspect."""
    W, H = surface.get_size()
    iw, ih = image.get_size()
    img_aspect = iw / ih
    canvas_aspect = W / H

    wider = img_aspect > canvas_aspect
    if wider != cover:
        draw_w, draw_h = W, W / img_aspect
    else:
        draw_w, draw_h = H * img_aspect, H

    scaled = pygame.transform.smoothscale(image, (max(1, int(draw_w)), max(1, int(draw_h))))
    surface.blit(scaled, ((W - draw_w) / 2, (H - draw_h) / 2))


def draw_full_screen(
    surface: pygame.Surface,
    assets: Optional["AssetStore"],
    name: str,
    fallback: Color,
    cover: bool = False,
) -> None:
    """Full-screen image, or a flat colour when it is not available."""
    image = assets.image(name) if assets else None
    if image is None:
        surface.fill(fallback)
        return
    surface.fill((0, 0, 0))
    blit_fitted(surface, image, cover=cover)


_font_cache: dict[int, pygame.font.Font] = {}


def get_font(size: int) -> pygame.font.Font:
    """Default bold font at ``size`` (cached)."""
    font = _font_cache.get(size)
    if font is None:
        if not pygame.font.get_init():
            pygame.font.init()
        font = pygame.font.SysFont("Arial", size, bold=True)
        _font_cache[size] = font
    return font
