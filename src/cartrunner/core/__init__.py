"""Core framework components for Cart Runner."""

from .state import Screen, ScreenStateMachine
from .events import EventBus, Event, EventType
from .loop import FrameClock, FrameScheduler

__all__ = [
    "Screen",
    "ScreenStateMachine",
    "EventBus",
    "Event",
    "EventType",
    "FrameClock",
    "FrameScheduler",
]
