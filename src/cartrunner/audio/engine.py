"""
Cart Runner audio engine.

Plays the four short cues (jump, collect, win, lose) and the optional
background track. Cues come from sound files when present; otherwise a
small chiptune stand-in is synthesised so gameplay still has feedback.
"""

import pygame
import array
import math
import random
import logging
from pathlib import Path
from typing import Callable, Dict, Optional

from cartrunner.core.events import Event, EventBus, EventType

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100

CUE_FILES = {
    "jump": "Sounds/Jump.mp3",
    "collect": "Sounds/GetBox.mp3",
    "win": "Sounds/Win.mp3",
    "lose": "Sounds/Lose.mp3",
}
MUSIC_FILE = "Sounds/Music.mp3"


def square(t: float, freq: float) -> float:
    """Square wave oscillator."""
    return 1 if (t * freq) % 1 < 0.5 else -1


def sine(t: float, freq: float) -> float:
    """Sine wave oscillator."""
    return math.sin(2 * math.pi * freq * t)


def noise() -> float:
    """White noise generator."""
    return random.random() * 2 - 1


class AudioEngine:
    """Sound cue playback on pygame.mixer.

    Audio is optional: when the mixer cannot start every call is a
    silent no-op. Music that could not start yet is retried on the next
    user gesture (the Splash -> Game transition).
    """

    def __init__(self, assets_path: Optional[Path] = None) -> None:
        self.assets_path = Path(assets_path) if assets_path else None
        self._initialized = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._volume_sfx = 1.0
        self._volume_music = 0.3
        self._muted = True
        self._music_loaded = False
        self._music_pending = False
        self._unsubscribers: list[Callable[[], None]] = []

    @property
    def initialized(self) -> bool:
        return self._initialized

    def init(self) -> bool:
        """Initialize the mixer and prepare every cue."""
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 1024)
            pygame.mixer.init()
            self._initialized = True
            logger.info("Audio engine initialized")
        except pygame.error as e:
            logger.warning(f"Audio unavailable, continuing silently: {e}")
            return False

        for name in CUE_FILES:
            self._load_cue(name)
        self._load_music()
        return True

    def _create_sound(self, samples: array.array) -> pygame.mixer.Sound:
        """Create a pygame Sound from mono samples (duplicated to stereo)."""
        stereo = array.array('h')
        for s in samples:
            stereo.append(s)
            stereo.append(s)
        return pygame.mixer.Sound(buffer=stereo)

    def _load_cue(self, name: str) -> None:
        if self.assets_path is not None:
            path = self.assets_path / CUE_FILES[name]
            if path.exists():
                try:
                    self._sounds[name] = pygame.mixer.Sound(str(path))
                    return
                except pygame.error as e:
                    logger.warning(f"Failed to load sound {path}: {e}")

        generator = getattr(self, f"_gen_{name}")
        self._sounds[name] = self._create_sound(generator())
        logger.debug(f"Synthesised fallback cue: {name}")

    def _load_music(self) -> None:
        if self.assets_path is None:
            return
        path = self.assets_path / MUSIC_FILE
        if not path.exists():
            return
        try:
            pygame.mixer.music.load(str(path))
            pygame.mixer.music.set_volume(self._volume_music)
            self._music_loaded = True
        except pygame.error as e:
            logger.warning(f"Failed to load music {path}: {e}")

    # ===== FALLBACK CUES =====

    def _gen_jump(self) -> array.array:
        """Rising chirp."""
        samples = array.array('h')
        for i in range(int(SAMPLE_RATE * 0.12)):
            t = i / SAMPLE_RATE
            env = max(0, 1 - t * 8)
            freq = 300 + t * 3000
            samples.append(int(square(t, freq) * env * 32767 * 0.3))
        return samples

    def _gen_collect(self) -> array.array:
        """Two-tone coin pickup."""
        samples = array.array('h')
        for i in range(int(SAMPLE_RATE * 0.18)):
            t = i / SAMPLE_RATE
            freq = 988 if t < 0.06 else 1319
            env = max(0, 1 - t * 5.5)
            val = square(t, freq) * 0.5 + sine(t, freq * 2) * 0.2
            samples.append(int(val * env * 32767 * 0.4))
        return samples

    def _gen_win(self) -> array.array:
        """Major arpeggio fanfare."""
        samples = array.array('h')
        notes = [523, 659, 784, 1047]
        for i in range(int(SAMPLE_RATE * 0.8)):
            t = i / SAMPLE_RATE
            idx = min(len(notes) - 1, int(t / 0.15))
            local_t = t - idx * 0.15
            env = max(0, 1 - local_t * 4) if idx < len(notes) - 1 else max(0, 1 - (t - 0.45) * 2.8)
            val = square(t, notes[idx]) * 0.4 + sine(t, notes[idx] / 2) * 0.3
            samples.append(int(max(-1, min(1, val * env)) * 32767 * 0.5))
        return samples

    def _gen_lose(self) -> array.array:
        """Falling buzz with a little grit."""
        samples = array.array('h')
        for i in range(int(SAMPLE_RATE * 0.6)):
            t = i / SAMPLE_RATE
            freq = 330 - t * 300
            env = max(0, 1 - t * 1.7)
            val = square(t, freq) * 0.5 + noise() * 0.05
            samples.append(int(max(-1, min(1, val * env)) * 32767 * 0.5))
        return samples

    # ===== PLAYBACK API =====

    def play(self, name: str, volume: float = 1.0) -> Optional[pygame.mixer.Channel]:
        """Play a cue from the start."""
        if not self._initialized or self._muted:
            return None

        sound = self._sounds.get(name)
        if not sound:
            logger.warning(f"Sound not found: {name}")
            return None

        sound.stop()
        sound.set_volume(volume * self._volume_sfx)
        return sound.play()

    def start_music(self) -> None:
        """Start the background loop, or remember to try again later."""
        if not self._initialized or not self._music_loaded:
            return
        if pygame.mixer.music.get_busy():
            return
        try:
            pygame.mixer.music.play(loops=-1, fade_ms=500)
            self._music_pending = False
            logger.info("Background music started")
        except pygame.error as e:
            self._music_pending = True
            logger.warning(f"Music playback deferred: {e}")

    def is_muted(self) -> bool:
        return self._muted

    def unmute(self) -> None:
        if self._muted:
            self._muted = False
            if self._initialized:
                pygame.mixer.unpause()
            logger.info("Audio unmuted")

    # ===== EVENT WIRING =====

    def attach(self, event_bus: EventBus) -> None:
        """Play cues and start music in response to game events."""
        self._unsubscribers.append(event_bus.subscribe(EventType.SOUND_PLAY, self._on_sound))
        self._unsubscribers.append(event_bus.subscribe(EventType.MUSIC_START, self._on_music))
        # Playback refused earlier is retried on the next player gesture
        self._unsubscribers.append(event_bus.subscribe(EventType.TAP, self._on_gesture))
        self._unsubscribers.append(event_bus.subscribe(EventType.ACTION_KEY, self._on_gesture))

    def _on_sound(self, event: Event) -> None:
        cue = event.data.get("cue")
        if cue:
            self.play(cue)

    def _on_music(self, event: Event) -> None:
        self.unmute()
        self.start_music()

    def _on_gesture(self, event: Event) -> None:
        if self._music_pending and not self._muted:
            self.start_music()

    def cleanup(self) -> None:
        """Cleanup audio resources."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        if self._initialized:
            pygame.mixer.quit()
            self._initialized = False
            logger.info("Audio engine cleaned up")
