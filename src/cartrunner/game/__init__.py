"""Gameplay model: layout, cart, boxes and the voice trigger."""

from .cart import Cart
from .collectible import Collectible
from .collision import rects_overlap, resolve_collisions
from .layout import Layout, PhysicsConstants
from .spawner import Spawner
from .trigger import AudioLevelState, InputTrigger

__all__ = [
    "Cart",
    "Collectible",
    "rects_overlap",
    "resolve_collisions",
    "Layout",
    "PhysicsConstants",
    "Spawner",
    "AudioLevelState",
    "InputTrigger",
]
