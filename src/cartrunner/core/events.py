"""
Event bus for Cart Runner.

Synchronous pub/sub between the window, the game session and the audio
engine. Handlers run in subscription order inside ``emit``.
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
import logging
import time
from collections import defaultdict

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Everything that travels over the bus."""
    # Player input, published by the window
    TAP = auto()             # Mouse click / finger tap
    ACTION_KEY = auto()      # Space / Enter
    PAUSE_TOGGLE = auto()
    RESTART = auto()
    MIC_REQUEST = auto()

    # Window state
    FOCUS_CHANGED = auto()
    RESIZE = auto()

    # Published by the session
    JUMP = auto()
    COLLECT = auto()
    ROUND_END = auto()
    SCREEN_CHANGED = auto()

    # Consumed by the audio engine
    SOUND_PLAY = auto()
    MUSIC_START = auto()

    # Notifications only; nothing is simulated from these
    TICK = auto()
    SHUTDOWN = auto()


@dataclass
class Event:
    """
    One bus message.

    Attributes:
        type: What happened
        data: Payload (cue name, scores, window size, ...)
        source: Component that published it
        timestamp: Monotonic seconds at creation
    """
    type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], None]


class EventBus:
    """
    Routes events to the handlers subscribed to their type.

    A failing handler is logged and skipped so one broken listener
    (a sound that will not play, say) cannot starve the others. Anything
    that must fail loudly is called directly, not through the bus.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)
        self._history: list[Event] = []
        self._history_limit = history_limit

    def subscribe(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        """
        Register ``handler`` for ``event_type``.

        Returns:
            A function that removes the subscription again
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type.name}")

        def unsubscribe() -> None:
            handlers = self._handlers[event_type]
            if handler in handlers:
                handlers.remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type.name}")

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Record ``event`` and deliver it to every subscriber now."""
        self._history.append(event)
        if len(self._history) > self._history_limit:
            del self._history[0]

        for handler in list(self._handlers.get(event.type, ())):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in {event.type.name} handler: {e}")

    def get_history(self, event_type: EventType | None = None, limit: int = 10) -> list[Event]:
        """Most recent events, optionally of one type only."""
        history = self._history
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]


def tap_event(source: str = "pointer") -> Event:
    return Event(EventType.TAP, source=source)


def sound_event(cue: str, source: str = "game") -> Event:
    """Ask the audio engine to play ``cue``."""
    return Event(EventType.SOUND_PLAY, data={"cue": cue}, source=source)


def tick_event(now_ms: float, frame: int) -> Event:
    return Event(EventType.TICK, data={"now_ms": now_ms, "frame": frame})
