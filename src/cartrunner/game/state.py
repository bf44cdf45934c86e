"""The single mutable state object threaded through a session."""

from dataclasses import dataclass, field
from typing import Optional

from cartrunner.config.settings import PhysicsSettings
from cartrunner.core.state import Screen
from cartrunner.game.cart import Cart
from cartrunner.game.collectible import Collectible
from cartrunner.game.layout import Layout, PhysicsConstants


@dataclass
class GameState:
    layout: Layout
    physics: PhysicsConstants
    cart: Cart
    screen: Screen = Screen.SPLASH

    running: bool = False
    paused: bool = False
    game_ended: bool = False

    score: int = 0
    high_score: int = 0
    round_duration: float = 30.0
    time_left: float = 30.0
    finish_imminent: bool = False

    scroll_offset: float = 0.0
    collectibles: list[Collectible] = field(default_factory=list)
    next_spawn_delay_ms: float = 800.0

    mic_enabled: bool = False
    selected_product: int = 0

    confetti_started_ms: Optional[float] = None
    confetti_frame: int = 0

    @classmethod
    def create(
        cls,
        layout: Layout,
        physics: PhysicsSettings,
        round_duration: float = 30.0,
        initial_spawn_delay_ms: float = 800.0,
        high_score: int = 0,
    ) -> "GameState":
        return cls(
            layout=layout,
            physics=PhysicsConstants.scaled(physics, layout.scale),
            cart=Cart.for_layout(layout),
            high_score=high_score,
            round_duration=round_duration,
            time_left=round_duration,
            next_spawn_delay_ms=initial_spawn_delay_ms,
        )

    def reset_round(self, initial_spawn_delay_ms: float) -> None:
        """Everything a fresh start would have, with the round running."""
        self.running = True
        self.paused = False
        self.game_ended = False
        self.score = 0
        self.time_left = self.round_duration
        self.finish_imminent = False
        self.scroll_offset = 0.0
        self.collectibles.clear()
        self.next_spawn_delay_ms = initial_spawn_delay_ms
        self.selected_product = 0
        self.confetti_started_ms = None
        self.confetti_frame = 0
        self.cart.reset(self.layout)

    def apply_layout(self, layout: Layout, physics: PhysicsSettings) -> None:
        """Re-derive viewport-scaled constants for a new canvas size."""
        self.layout = layout
        self.physics = PhysicsConstants.scaled(physics, layout.scale)
        self.cart.reset(layout)
