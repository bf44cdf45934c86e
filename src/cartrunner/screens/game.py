"""The running round: simulation step and the playfield painter."""

import math
from typing import TYPE_CHECKING, Optional

import pygame

from cartrunner.core.state import Screen
from cartrunner.game.collision import resolve_collisions
from cartrunner.screens.base import ScreenHandler, get_font

if TYPE_CHECKING:
    from cartrunner.assets.store import AssetStore
    from cartrunner.game.collectible import Collectible
    from cartrunner.game.session import GameSession

SKY_COLOR = (249, 240, 211)
CART_COLOR = (139, 69, 19)
CART_INNER = (101, 67, 33)
WHEEL_COLOR = (51, 51, 51)
BOX_COLOR = (255, 215, 0)
RIBBON_COLOR = (255, 107, 107)


class GameScreen(ScreenHandler):
    screen = Screen.GAME

    def __init__(self) -> None:
        self._map_cache: Optional[tuple[tuple[int, int], pygame.Surface]] = None

    def on_enter(self, session: "GameSession") -> None:
        session.start_round()

    def on_tap(self, session: "GameSession") -> None:
        state = session.state
        if state.running and not state.paused:
            session.jump(source="tap")

    def update(self, session: "GameSession", dt: float, now_ms: float) -> None:
        state = session.state
        if not state.running or state.paused:
            return

        physics = state.physics
        state.scroll_offset += physics.scroll_speed * dt

        state.cart.update(dt, physics, state.layout)

        state.next_spawn_delay_ms = session.spawner.tick(
            state.next_spawn_delay_ms, dt, state.layout, state.collectibles
        )

        margin = session.settings.spawn.offscreen_margin
        items = state.collectibles
        for i in range(len(items) - 1, -1, -1):
            items[i].update(dt, physics.scroll_speed)
            if items[i].offscreen(margin):
                del items[i]

        earned = resolve_collisions(
            state.cart, items, session.settings.round.reward, on_collect=session.on_collect
        )
        session.timer.add_points(state, earned)

        if session.timer.advance(state, dt):
            session.end_round(now_ms)

    # ===== DRAWING =====

    def render(self, surface: pygame.Surface, session: "GameSession", assets: Optional["AssetStore"]) -> None:
        state = session.state
        W, H = surface.get_size()

        surface.fill(SKY_COLOR)
        self._draw_map(surface, state.scroll_offset, assets)

        for item in state.collectibles:
            self._draw_collectible(surface, item, assets)
        self._draw_cart(surface, session, assets)

        self._draw_score(surface, state.score)
        if state.finish_imminent:
            self._draw_finish_line(surface, state.layout.ground_y)

        if state.paused:
            overlay = pygame.Surface((W, H), pygame.SRCALPHA)
            overlay.fill((0, 0, 0, 178))
            surface.blit(overlay, (0, 0))

    def _draw_map(self, surface: pygame.Surface, offset: float, assets: Optional["AssetStore"]) -> None:
        image = assets.image("map") if assets else None
        if image is None:
            return

        W, H = surface.get_size()
        if self._map_cache is None or self._map_cache[0] != (W, H):
            target_h = int(H * 0.8)
            scale = target_h / image.get_height()
            scaled = pygame.transform.smoothscale(
                image, (max(1, int(image.get_width() * scale)), target_h)
            )
            self._map_cache = ((W, H), scaled)

        scaled = self._map_cache[1]
        map_w = scaled.get_width()
        y = H - scaled.get_height()
        cycles = math.ceil(W / map_w) + 1
        scroll = offset % map_w
        for cycle in range(cycles):
            x = cycle * map_w - scroll
            if x + map_w > 0 and x < W:
                surface.blit(scaled, (x, y))

    def _draw_collectible(self, surface: pygame.Surface, item: "Collectible", assets: Optional["AssetStore"]) -> None:
        w, h = item.w, item.h
        image = assets.image("box") if assets else None
        if image is not None:
            sprite = pygame.transform.smoothscale(image, (w, h))
        else:
            sprite = pygame.Surface((w, h), pygame.SRCALPHA)
            sprite.fill(BOX_COLOR)
            pygame.draw.rect(sprite, RIBBON_COLOR, (5, 5, w - 10, 12))
            pygame.draw.rect(sprite, RIBBON_COLOR, (w // 2 - 6, 5, 12, h - 10))
            pygame.draw.rect(sprite, (255, 255, 255), (w // 2 - 2, h // 2 - 2, 4, 4))

        sparkle = math.sin(item.sparkle_time) * 0.1 + 1
        sprite.set_alpha(int(255 * min(1.0, sparkle)))
        rotated = pygame.transform.rotate(sprite, -math.degrees(item.rotation))
        center = (item.x + w / 2, item.y + h / 2)
        surface.blit(rotated, rotated.get_rect(center=center))

    def _draw_cart(self, surface: pygame.Surface, session: "GameSession", assets: Optional["AssetStore"]) -> None:
        cart = session.state.cart
        image = assets.image("cart") if assets else None
        rect = pygame.Rect(int(cart.x), int(cart.y), cart.w, cart.h)
        if image is not None:
            surface.blit(pygame.transform.smoothscale(image, rect.size), rect)
            return

        pygame.draw.rect(surface, CART_COLOR, rect)
        pygame.draw.rect(surface, CART_INNER, rect.inflate(-20, -20))
        if cart.on_ground:
            wobble = math.sin(cart.anim_time) * 2
            pygame.draw.circle(surface, WHEEL_COLOR, (rect.left + 20, rect.bottom + wobble), 8)
            pygame.draw.circle(surface, WHEEL_COLOR, (rect.right - 20, rect.bottom - wobble), 8)

    def _draw_score(self, surface: pygame.Surface, score: int) -> None:
        W, H = surface.get_size()
        font = get_font(max(32, int(W * 0.04)))
        text = f"Score: {score}"
        shadow = font.render(text, True, (0, 0, 0))
        shadow.set_alpha(128)
        surface.blit(shadow, (W * 0.05 + 3, H * 0.04 + 3))
        surface.blit(font.render(text, True, (255, 255, 255)), (W * 0.05, H * 0.04))

    def _draw_finish_line(self, surface: pygame.Surface, ground_y: float) -> None:
        W, H = surface.get_size()
        cell = max(8, W // 54)
        x0 = W - cell * 2
        for row, y in enumerate(range(0, int(ground_y), cell)):
            for col in range(2):
                color = (0, 0, 0) if (row + col) % 2 else (255, 255, 255)
                pygame.draw.rect(surface, color, (x0 + col * cell, y, cell, cell))
