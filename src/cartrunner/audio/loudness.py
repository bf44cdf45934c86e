"""Microphone loudness sensor.

Captures mono input with sounddevice in the background and reports a
smoothed peak level in [0, 1] once per frame. Without a usable input
device the sensor stays disabled and always reports 0.
"""

import logging
import threading
from typing import Any, Callable, Optional

import numpy as np
from numpy.typing import NDArray

from cartrunner.config.settings import VoiceSettings
from cartrunner.core.exceptions import MicrophoneUnavailable
from cartrunner.game.trigger import AudioLevelState

logger = logging.getLogger(__name__)

StreamFactory = Callable[[Callable[..., None]], Any]


def peak_level(samples: NDArray, center: float = 0.0, half_range: float = 1.0) -> float:
    """Maximum absolute deviation from the centreline, normalised to [0, 1].

    Float input is centred on 0 with half range 1; for unsigned 8-bit
    buffers pass ``center=128, half_range=128``.
    """
    if samples.size == 0:
        return 0.0
    dev = float(np.max(np.abs(samples.astype(np.float32) - center)))
    return min(1.0, dev / half_range)


class LoudnessSensor:
    """Exponentially smoothed microphone level."""

    def __init__(
        self,
        level_state: AudioLevelState,
        settings: VoiceSettings | None = None,
        stream_factory: Optional[StreamFactory] = None,
    ) -> None:
        self.settings = settings or VoiceSettings()
        self.level_state = level_state
        self.alpha = self.settings.smoothing
        self._stream_factory = stream_factory or self._open_input_stream
        self._stream: Any = None
        self._lock = threading.Lock()
        self._block: NDArray[np.float32] = np.zeros(0, dtype=np.float32)
        self._enabled = False

    @property
    def enabled(self) -> bool:
        return self._enabled

    def _open_input_stream(self, callback: Callable[..., None]) -> Any:
        try:
            # PortAudio is loaded at import time and may be missing entirely
            import sounddevice as sd
        except OSError as e:
            raise MicrophoneUnavailable(f"PortAudio not available: {e}") from e

        try:
            return sd.InputStream(
                samplerate=self.settings.sample_rate,
                channels=1,
                blocksize=self.settings.block_size,
                callback=callback,
            )
        except Exception as e:
            raise MicrophoneUnavailable(str(e)) from e

    def _callback(self, indata, frames, time_info, status) -> None:
        if status:
            return
        self.feed(indata[:, 0])

    def feed(self, samples: NDArray) -> None:
        """Store the most recent waveform block."""
        block = np.array(samples, dtype=np.float32, copy=True)
        with self._lock:
            self._block = block

    def enable(self) -> bool:
        """Open the input stream. Returns False (and stays silent) on failure."""
        self.disable()
        self.level_state.reset()
        with self._lock:
            self._block = np.zeros(0, dtype=np.float32)

        try:
            stream = self._stream_factory(self._callback)
            stream.start()
        except MicrophoneUnavailable as e:
            logger.warning(f"Microphone unavailable: {e}")
            return False
        except Exception as e:
            logger.warning(f"Microphone access failed: {e}")
            return False

        self._stream = stream
        self._enabled = True
        logger.info("Microphone enabled")
        return True

    def disable(self) -> None:
        if self._stream is not None:
            try:
                self._stream.stop()
                self._stream.close()
            except Exception as e:
                logger.debug(f"Error closing input stream: {e}")
            self._stream = None
        self._enabled = False

    def read(self) -> float:
        """Current smoothed level; 0 while disabled."""
        if not self._enabled:
            return 0.0

        with self._lock:
            block = self._block
        raw = peak_level(block)

        state = self.level_state
        state.smoothed = self.alpha * raw + (1 - self.alpha) * state.smoothed
        return state.smoothed
