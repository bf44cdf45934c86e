"""Voice-to-jump trigger with rising-edge detection and cooldown."""

from dataclasses import dataclass
from typing import Optional

from cartrunner.config.settings import VoiceSettings


@dataclass
class AudioLevelState:
    """Per-session loudness tracking. Reset only when the mic is (re)enabled."""

    smoothed: float = 0.0
    last_trigger_ms: Optional[float] = None
    was_above: bool = False

    def reset(self) -> None:
        self.smoothed = 0.0
        self.last_trigger_ms = None
        self.was_above = False


class InputTrigger:
    """Fires once per upward threshold crossing, at most once per cooldown.

    A sustained loud sound therefore produces a single jump. The
    above-threshold flag is refreshed every frame, so a crossing that
    lands inside the cooldown is consumed rather than deferred.
    """

    def __init__(self, level_state: AudioLevelState, settings: VoiceSettings | None = None) -> None:
        settings = settings or VoiceSettings()
        self.level_state = level_state
        self.threshold = settings.threshold
        self.cooldown_ms = settings.cooldown_ms

    def cooled_down(self, now_ms: float) -> bool:
        last = self.level_state.last_trigger_ms
        return last is None or (now_ms - last) >= self.cooldown_ms

    def process(self, level: float, now_ms: float) -> bool:
        """Feed one frame's level; True when a jump should fire."""
        state = self.level_state
        above = level >= self.threshold
        fired = False

        if above and not state.was_above and self.cooled_down(now_ms):
            state.last_trigger_ms = now_ms
            fired = True

        state.was_above = above
        return fired
