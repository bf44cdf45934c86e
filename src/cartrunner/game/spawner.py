"""Stochastic collectible spawner."""

import logging
import random

from cartrunner.config.settings import SpawnSettings
from cartrunner.game.collectible import Collectible
from cartrunner.game.layout import Layout

logger = logging.getLogger(__name__)


class Spawner:
    """Counts down in milliseconds and drops a box off the right edge."""

    def __init__(self, rng: random.Random, settings: SpawnSettings | None = None) -> None:
        self.rng = rng
        self.settings = settings or SpawnSettings()

    def initial_delay(self) -> float:
        return self.settings.initial_delay_ms

    def next_interval(self) -> float:
        lo = self.settings.min_interval_ms
        hi = self.settings.max_interval_ms
        return lo + self.rng.random() * (hi - lo)

    def spawn_x(self, layout: Layout) -> float:
        base_offset = layout.width * 0.46
        random_offset = self.rng.random() * layout.width * 0.28
        return layout.width + self.settings.margin + base_offset + random_offset

    def spawn(self, layout: Layout) -> Collectible:
        item = Collectible.spawn(self.spawn_x(layout), layout, self.rng)
        logger.debug(f"Spawned collectible at x={item.x:.0f} y={item.base_y:.0f}")
        return item

    def tick(
        self,
        delay_ms: float,
        dt: float,
        layout: Layout,
        collectibles: list[Collectible],
    ) -> float:
        """Advance the countdown; spawn into ``collectibles`` when it runs out.

        Returns the new countdown value.
        """
        delay_ms -= dt * 1000
        if delay_ms <= 0:
            collectibles.append(self.spawn(layout))
            delay_ms = self.next_interval()
        return delay_ms
