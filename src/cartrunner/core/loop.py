"""Frame timing and the self-rescheduling frame task."""

import asyncio
import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)

# Delta-time clamp (seconds)
MIN_DT = 0.008
MAX_DT = 0.025


def now_ms() -> float:
    """Monotonic wall clock in milliseconds."""
    return time.monotonic() * 1000.0


class FrameClock:
    """Turns frame timestamps into a clamped delta time.

    The baseline is dropped (not reused) whenever the window loses or
    regains focus, so the first frame afterwards gets the minimum step
    instead of one huge catch-up step.
    """

    def __init__(self, min_dt: float = MIN_DT, max_dt: float = MAX_DT) -> None:
        self.min_dt = min_dt
        self.max_dt = max_dt
        self._last_ms: Optional[float] = None

    @property
    def has_baseline(self) -> bool:
        return self._last_ms is not None

    def tick(self, timestamp_ms: float) -> float:
        """Advance to ``timestamp_ms`` and return dt in seconds."""
        if self._last_ms is None:
            self._last_ms = timestamp_ms
        raw = (timestamp_ms - self._last_ms) / 1000.0
        self._last_ms = timestamp_ms
        return max(self.min_dt, min(raw, self.max_dt))

    def invalidate(self) -> None:
        self._last_ms = None


class FrameScheduler:
    """Runs ``callback(now_ms)`` once per frame on the asyncio loop.

    Each tick re-submits itself with ``call_later``; stopping simply
    means the next tick is never submitted.
    """

    def __init__(
        self,
        callback: Callable[[float], None],
        fps: int = 60,
        clock: Callable[[], float] = now_ms,
    ) -> None:
        self._callback = callback
        self._interval = 1.0 / max(1, fps)
        self._clock = clock
        self._running = False
        self._handle: Optional[asyncio.TimerHandle] = None
        self._done: Optional[asyncio.Future] = None
        self.frame_count = 0

    @property
    def is_running(self) -> bool:
        return self._running

    async def run(self) -> None:
        """Start ticking and wait until stopped (or a tick raises)."""
        loop = asyncio.get_running_loop()
        self._done = loop.create_future()
        self._running = True
        self._schedule_next(loop, delay=0.0)
        logger.info(f"Frame scheduler started ({1.0 / self._interval:.0f} fps)")
        try:
            await self._done
        finally:
            self._running = False
            if self._handle is not None:
                self._handle.cancel()
                self._handle = None
            logger.info(f"Frame scheduler stopped after {self.frame_count} frames")

    def stop(self) -> None:
        self._running = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self._done is not None and not self._done.done():
            self._done.set_result(None)

    def _schedule_next(self, loop: asyncio.AbstractEventLoop, delay: float) -> None:
        self._handle = loop.call_later(delay, self._tick, loop)

    def _tick(self, loop: asyncio.AbstractEventLoop) -> None:
        if not self._running:
            return

        started = time.monotonic()
        try:
            self._callback(self._clock())
        except Exception as e:
            self._running = False
            if self._done is not None and not self._done.done():
                self._done.set_exception(e)
            return

        self.frame_count += 1
        if self._running:
            spent = time.monotonic() - started
            self._schedule_next(loop, delay=max(0.0, self._interval - spent))
