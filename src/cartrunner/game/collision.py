"""Axis-aligned overlap between the cart and the live boxes."""

from typing import Callable, Optional

from cartrunner.game.cart import Cart
from cartrunner.game.collectible import Collectible


def rects_overlap(
    ax: float, ay: float, aw: float, ah: float,
    bx: float, by: float, bw: float, bh: float,
) -> bool:
    """Strict overlap: rectangles that only share an edge do not overlap."""
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def resolve_collisions(
    cart: Cart,
    collectibles: list[Collectible],
    reward: int,
    on_collect: Optional[Callable[[Collectible], None]] = None,
) -> int:
    """Collect every overlapping box and return the points earned.

    Every box is tested; hits are removed from ``collectibles`` in place.
    """
    earned = 0
    for i in range(len(collectibles) - 1, -1, -1):
        item = collectibles[i]
        if item.collected:
            continue
        if rects_overlap(*cart.rect, *item.rect):
            item.collected = True
            earned += reward
            del collectibles[i]
            if on_collect:
                on_collect(item)
    return earned
