"""
Game session: owns the state and wires input, simulation and screens.

The session is the only place that knows about every component. Screen
handlers receive it and use its helpers (jump, end_round, ...) so the
per-screen code never touches the event bus directly.
"""

import logging
import random
from typing import TYPE_CHECKING, Callable, Optional

from cartrunner.config.settings import Settings
from cartrunner.core.events import Event, EventBus, EventType, sound_event
from cartrunner.core.loop import FrameClock
from cartrunner.core.state import Screen, ScreenStateMachine
from cartrunner.game.collectible import Collectible
from cartrunner.game.layout import Layout
from cartrunner.game.round import RoundTimer, ScoreStore
from cartrunner.game.spawner import Spawner
from cartrunner.game.state import GameState
from cartrunner.game.trigger import AudioLevelState, InputTrigger

if TYPE_CHECKING:
    import pygame

    from cartrunner.assets.store import AssetStore
    from cartrunner.audio.loudness import LoudnessSensor
    from cartrunner.screens.base import ScreenHandler

logger = logging.getLogger(__name__)


class GameSession:
    """One player session: from the splash screen until the window closes."""

    def __init__(
        self,
        settings: Settings,
        event_bus: EventBus,
        store: ScoreStore,
        rng: Optional[random.Random] = None,
        sensor: Optional["LoudnessSensor"] = None,
        layout: Optional[Layout] = None,
        level_state: Optional[AudioLevelState] = None,
    ) -> None:
        # Imported here: the screens package depends on this module
        from cartrunner.screens import build_handlers

        self.settings = settings
        self.event_bus = event_bus
        self.store = store
        self.rng = rng or random.Random(settings.seed)
        self.sensor = sensor

        layout = layout or Layout(
            settings.display.target_width,
            settings.display.target_height,
            target_width=settings.display.target_width,
        )
        self.state = GameState.create(
            layout,
            settings.physics,
            round_duration=settings.round.duration,
            initial_spawn_delay_ms=settings.spawn.initial_delay_ms,
            high_score=store.load(),
        )

        self.machine = ScreenStateMachine(self.state)
        self.machine.add_listener(self._on_screen_change)

        self.clock = FrameClock(settings.physics.min_dt, settings.physics.max_dt)
        if level_state is None:
            level_state = sensor.level_state if sensor is not None else AudioLevelState()
        self.trigger = InputTrigger(level_state, settings.voice)
        self.spawner = Spawner(self.rng, settings.spawn)
        self.timer = RoundTimer(settings.round, store)
        self.handlers: dict[Screen, "ScreenHandler"] = build_handlers()

        self.now_ms = 0.0
        self.level = 0.0
        self._unsubscribers: list[Callable[[], None]] = []

        logger.info(f"Session ready (best score {self.state.high_score})")

    @property
    def screen(self) -> Screen:
        return self.state.screen

    @property
    def handler(self) -> "ScreenHandler":
        return self.handlers[self.state.screen]

    # ===== FRAME =====

    def step(self, now_ms: float) -> None:
        """Run one frame of simulation for the current screen."""
        self.now_ms = now_ms
        handler = self.handler
        if not handler.simulates:
            return

        dt = self.clock.tick(now_ms)
        state = self.state

        if self.sensor is not None:
            self.level = self.sensor.read()
        if state.mic_enabled and state.running and not state.paused:
            if self.trigger.process(self.level, now_ms):
                self.jump(source="voice")

        handler.update(self, dt, now_ms)

    def render(self, surface: "pygame.Surface", assets: Optional["AssetStore"] = None) -> None:
        self.handler.render(surface, self, assets)

    # ===== ACTIONS USED BY THE SCREENS =====

    def start_round(self) -> None:
        """Fresh round: state reset, clean frame baseline, audio on."""
        self.state.reset_round(self.settings.spawn.initial_delay_ms)
        self.clock.invalidate()
        self.event_bus.emit(Event(EventType.MUSIC_START, source="session"))
        logger.info("Round started")

    def jump(self, source: str = "tap") -> None:
        self.state.cart.jump(self.state.physics)
        self.event_bus.emit(Event(EventType.JUMP, data={"via": source}, source="session"))
        self.event_bus.emit(sound_event("jump"))

    def on_collect(self, item: Collectible) -> None:
        self.event_bus.emit(Event(
            EventType.COLLECT,
            data={"x": item.x, "y": item.y, "reward": self.settings.round.reward},
            source="session",
        ))
        self.event_bus.emit(sound_event("collect"))

    def end_round(self, now_ms: float) -> None:
        state = self.state
        won = state.score > 0
        self.event_bus.emit(Event(
            EventType.ROUND_END,
            data={"score": state.score, "high_score": state.high_score, "won": won},
            source="session",
        ))
        self.event_bus.emit(sound_event("win" if won else "lose"))
        state.confetti_started_ms = now_ms
        self.machine.transition(Screen.CONFETTI)

    # ===== INPUT =====

    def tap(self) -> None:
        self.handler.on_tap(self)

    def action_key(self) -> None:
        self.handler.on_action_key(self)

    def toggle_pause(self) -> bool:
        """Pause or resume; only meaningful while a round is running."""
        state = self.state
        if state.screen != Screen.GAME or not state.running:
            return False
        state.paused = not state.paused
        logger.info("Paused" if state.paused else "Resumed")
        return True

    def restart(self) -> bool:
        """Start over from any post-splash screen."""
        if self.state.screen == Screen.SPLASH or not self.machine.can_transition(Screen.GAME):
            return False
        return self.machine.transition(Screen.GAME)

    def request_mic(self) -> bool:
        if self.sensor is None:
            logger.warning("No microphone sensor configured")
            self.state.mic_enabled = False
            return False
        self.state.mic_enabled = self.sensor.enable()
        return self.state.mic_enabled

    def set_mic_enabled(self, enabled: bool) -> None:
        self.state.mic_enabled = enabled

    def on_focus_changed(self) -> None:
        self.clock.invalidate()

    def resize(self, layout: Layout) -> None:
        if layout == self.state.layout:
            return
        self.state.apply_layout(layout, self.settings.physics)
        logger.info(f"Canvas resized to {layout.width}x{layout.height}")

    # ===== EVENT WIRING =====

    def attach(self) -> None:
        """Route window input events from the bus into the session."""
        routes: dict[EventType, Callable[[Event], None]] = {
            EventType.TAP: lambda e: self.tap(),
            EventType.ACTION_KEY: lambda e: self.action_key(),
            EventType.PAUSE_TOGGLE: lambda e: self.toggle_pause(),
            EventType.RESTART: lambda e: self.restart(),
            EventType.MIC_REQUEST: lambda e: self.request_mic(),
            EventType.FOCUS_CHANGED: lambda e: self.on_focus_changed(),
            EventType.RESIZE: self._on_resize,
        }
        for event_type, handler in routes.items():
            self._unsubscribers.append(self.event_bus.subscribe(event_type, handler))

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    def _on_resize(self, event: Event) -> None:
        self.resize(Layout.fit(event.data["width"], event.data["height"], self.settings.display))

    def _on_screen_change(self, old: Screen, new: Screen) -> None:
        self.handlers[new].on_enter(self)
        self.event_bus.emit(Event(
            EventType.SCREEN_CHANGED,
            data={"from": old.name, "to": new.name},
            source="session",
        ))
