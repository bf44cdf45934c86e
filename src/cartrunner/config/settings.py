"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support,
e.g. ``CARTRUNNER_ROUND__DURATION=45``.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DisplaySettings(BaseSettings):
    """Canvas and window settings."""

    # Logical target canvas (9:16)
    target_width: int = 1080
    target_height: int = 1920
    min_width: int = 300

    # Desktop window
    window_width: int = 540
    window_height: int = 960
    fullscreen: bool = False
    fps: int = 60


class PhysicsSettings(BaseSettings):
    """Unscaled physics constants (for a 1080px wide canvas)."""

    gravity: float = 1200.0
    # Single flap constant; the legacy jump strength had the same value
    flap_velocity: float = -700.0
    scroll_speed: float = 316.0

    # Delta-time clamp in seconds
    min_dt: float = 0.008
    max_dt: float = 0.025


class RoundSettings(BaseSettings):
    """Round tuning."""

    duration: float = 30.0
    finish_warning: float = 2.0
    reward: int = Field(default=50, ge=0)
    product_count: int = Field(default=15, ge=1)

    # Confetti overlay
    confetti_frames: int = Field(default=22, ge=1)
    confetti_fps: float = Field(default=30.0, gt=0)


class VoiceSettings(BaseSettings):
    """Microphone trigger tuning."""

    threshold: float = Field(default=0.25, ge=0.0, le=1.0)
    cooldown_ms: float = Field(default=300.0, ge=0.0)
    smoothing: float = Field(default=0.3, gt=0.0, le=1.0)
    sample_rate: int = 44100
    block_size: int = 1024
    auto_enable: bool = True


class SpawnSettings(BaseSettings):
    """Collectible spawner tuning."""

    initial_delay_ms: float = 800.0
    min_interval_ms: float = 3000.0
    max_interval_ms: float = 4000.0
    margin: float = 500.0
    offscreen_margin: float = 50.0


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="CARTRUNNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    seed: int | None = None

    # Paths
    assets_path: Path = Field(default_factory=lambda: Path.cwd() / "assets")
    data_path: Path = Field(default_factory=lambda: Path.home() / ".cartrunner")

    # Nested settings
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    physics: PhysicsSettings = Field(default_factory=PhysicsSettings)
    round: RoundSettings = Field(default_factory=RoundSettings)
    voice: VoiceSettings = Field(default_factory=VoiceSettings)
    spawn: SpawnSettings = Field(default_factory=SpawnSettings)

    @property
    def highscore_file(self) -> Path:
        """Where the best score is persisted."""
        return self.data_path / "highscore.json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
