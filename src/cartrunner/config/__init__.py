"""Configuration for Cart Runner."""

from .settings import (
    Settings,
    DisplaySettings,
    PhysicsSettings,
    RoundSettings,
    VoiceSettings,
    SpawnSettings,
    get_settings,
)

__all__ = [
    "Settings",
    "DisplaySettings",
    "PhysicsSettings",
    "RoundSettings",
    "VoiceSettings",
    "SpawnSettings",
    "get_settings",
]
