"""The player's cart: a single gravity-driven body with flap control."""

from dataclasses import dataclass

from cartrunner.game.layout import Layout, PhysicsConstants


@dataclass
class Cart:
    x: float = 0.0
    y: float = 0.0
    w: int = 0
    h: int = 0
    vy: float = 0.0
    on_ground: bool = True
    anim_time: float = 0.0

    @classmethod
    def for_layout(cls, layout: Layout) -> "Cart":
        cart = cls()
        cart.reset(layout)
        return cart

    def reset(self, layout: Layout) -> None:
        """Resize for the layout and park the cart on the floor, centred."""
        self.w = round(layout.width * 0.46)
        self.h = round(layout.height * 0.26)
        self.x = round(layout.width / 2 - self.w / 2)
        self.y = layout.cart_floor - self.h
        self.vy = 0.0
        self.on_ground = True
        self.anim_time = 0.0

    def jump(self, physics: PhysicsConstants) -> None:
        """Flap: always available, grounded or not."""
        self.vy = physics.flap_velocity
        self.on_ground = False

    def update(self, dt: float, physics: PhysicsConstants, layout: Layout) -> None:
        self.vy += physics.gravity * dt
        self.y += self.vy * dt

        # Ceiling is a one-way stop: kill upward speed, let gravity take over
        if self.y <= 0:
            self.y = 0.0
            if self.vy < 0:
                self.vy = 0.0

        floor = layout.cart_floor
        if self.y + self.h >= floor:
            self.y = floor - self.h
            if self.vy > 0:
                self.vy = 0.0
            self.on_ground = True
        else:
            self.on_ground = False

        # Wheel animation phase
        self.anim_time += dt * 8

    @property
    def rect(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.w, self.h)
