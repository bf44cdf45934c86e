"""Floating, rotating boxes the cart collects."""

import math
import random
from dataclasses import dataclass

from cartrunner.game.layout import Layout

MAX_ROTATION = math.radians(20)


def height_bands(layout: Layout, item_h: float) -> tuple[float, float]:
    """The two spawn heights: high above the cart, and moderately high."""
    return (
        layout.ground_y - item_h - layout.height * 0.8,
        layout.ground_y - item_h - layout.height * 0.5,
    )


@dataclass
class Collectible:
    x: float
    base_y: float
    w: int
    h: int
    float_phase: float = 0.0
    float_speed: float = 3.0
    float_amplitude: float = 0.0
    rotation: float = 0.0
    rotation_speed: float = 0.0
    sparkle_time: float = 0.0
    collected: bool = False

    def __post_init__(self) -> None:
        self.y = self.base_y

    @classmethod
    def spawn(cls, x: float, layout: Layout, rng: random.Random) -> "Collectible":
        w = round(layout.width * 0.185)
        h = round(layout.height * 0.104)
        base_y = rng.choice(height_bands(layout, h))
        return cls(
            x=x,
            base_y=base_y,
            w=w,
            h=h,
            float_phase=rng.random() * math.pi * 2,
            float_speed=2 + rng.random() * 2,
            float_amplitude=round((20 + rng.random() * 30) * layout.scale),
            rotation_speed=(rng.random() - 0.5) * 2,
        )

    def update(self, dt: float, scroll_speed: float) -> None:
        self.x -= scroll_speed * dt
        self.sparkle_time += dt * 5

        self.float_phase += dt * self.float_speed
        self.y = self.base_y + math.sin(self.float_phase) * self.float_amplitude

        # Swing between -20 and +20 degrees, reversing on the bound
        self.rotation += self.rotation_speed * dt
        self.rotation = max(-MAX_ROTATION, min(MAX_ROTATION, self.rotation))
        if self.rotation >= MAX_ROTATION or self.rotation <= -MAX_ROTATION:
            self.rotation_speed = -self.rotation_speed

    def offscreen(self, margin: float = 50.0) -> bool:
        return self.x + self.w < -margin

    @property
    def rect(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.w, self.h)
