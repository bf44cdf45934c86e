"""Canvas layout and viewport-scaled physics constants."""

from dataclasses import dataclass

from cartrunner.config.settings import DisplaySettings, PhysicsSettings

ASPECT_RATIO = 9 / 16


@dataclass(frozen=True)
class Layout:
    """A 9:16 canvas fitted into the window.

    Everything the simulation needs from the viewport is derived here so
    that a resize produces one new Layout instead of ad hoc per-frame math.
    """

    width: int
    height: int
    target_width: int = 1080

    @classmethod
    def fit(
        cls,
        window_width: int,
        window_height: int,
        display: DisplaySettings | None = None,
    ) -> "Layout":
        """Largest 9:16 canvas that fits the window (capped at the target size)."""
        display = display or DisplaySettings()
        aspect = display.target_width / display.target_height
        window_aspect = window_width / max(1, window_height)

        if window_aspect > aspect:
            # Window wider than 9:16 - fit to height
            height = min(window_height, display.target_height)
            width = round(height * aspect)
        else:
            width = min(window_width, display.target_width)
            height = round(width / aspect)

        if width < display.min_width:
            width = display.min_width
            height = round(width / aspect)

        return cls(width=width, height=height, target_width=display.target_width)

    @property
    def scale(self) -> float:
        return self.width / self.target_width

    @property
    def ground_y(self) -> float:
        return self.height - max(50.0, self.height * 0.026)

    @property
    def cart_floor(self) -> float:
        """Lowest point the cart's bottom edge may reach."""
        return self.ground_y - self.height * 0.052

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)


@dataclass(frozen=True)
class PhysicsConstants:
    """Live physics constants for one layout."""

    gravity: float
    flap_velocity: float
    scroll_speed: float

    @classmethod
    def scaled(cls, base: PhysicsSettings, scale: float) -> "PhysicsConstants":
        return cls(
            gravity=base.gravity * scale,
            flap_velocity=base.flap_velocity * scale,
            scroll_speed=base.scroll_speed * scale,
        )
