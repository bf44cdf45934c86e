"""Final reward screen: the selected product and its QR code."""

from typing import TYPE_CHECKING, Optional

import pygame

from cartrunner.core.state import Screen
from cartrunner.screens.base import ScreenHandler, draw_full_screen, get_font

if TYPE_CHECKING:
    from cartrunner.assets.store import AssetStore
    from cartrunner.game.session import GameSession

BG_COLOR = (245, 245, 220)
PRODUCT_PLACEHOLDER = (255, 107, 107)
QR_PLACEHOLDER = (51, 51, 51)


def fit_within(size: tuple[int, int], max_w: float, max_h: float) -> tuple[int, int]:
    """Largest size with the same aspect that fits in ``max_w`` x ``max_h``."""
    w, h = size
    scale = min(max_w / w, max_h / h)
    return max(1, int(w * scale)), max(1, int(h * scale))


class FinalScreen(ScreenHandler):
    screen = Screen.FINAL

    def on_tap(self, session: "GameSession") -> None:
        session.machine.transition(Screen.GAME)

    def render(self, surface: pygame.Surface, session: "GameSession", assets: Optional["AssetStore"]) -> None:
        W, H = surface.get_size()
        draw_full_screen(surface, assets, "final_screen", BG_COLOR, cover=True)

        n = session.state.selected_product
        if n <= 0:
            return

        product = assets.image(f"product{n}") if assets else None
        center_x, product_y = W / 2, H * 0.48
        if product is not None:
            size = fit_within(product.get_size(), W * 0.5, H * 0.4)
            scaled = pygame.transform.smoothscale(product, size)
            surface.blit(scaled, scaled.get_rect(center=(center_x, product_y)))
        else:
            rect = pygame.Rect(0, 0, int(W * 0.5), int(H * 0.3))
            rect.center = (int(center_x), int(product_y))
            pygame.draw.rect(surface, PRODUCT_PLACEHOLDER, rect)
            label = get_font(max(24, int(W * 0.05))).render(f"Product {n}", True, (255, 255, 255))
            surface.blit(label, label.get_rect(center=rect.center))

        qr_size = int(min(W * 0.22, H * 0.12))
        qr_rect = pygame.Rect(0, 0, qr_size, qr_size)
        qr_rect.center = (int(center_x), int(H * 0.785))
        qr = assets.image(f"qr{n}") if assets else None
        if qr is not None:
            surface.blit(pygame.transform.smoothscale(qr, qr_rect.size), qr_rect)
        else:
            pygame.draw.rect(surface, QR_PLACEHOLDER, qr_rect)
            label = get_font(max(14, qr_size // 6)).render(f"QR {n}", True, (255, 255, 255))
            surface.blit(label, label.get_rect(center=qr_rect.center))
