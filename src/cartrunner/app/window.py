"""
Desktop window for Cart Runner using pygame.

Translates pygame events into bus events, drives the frame scheduler
and letterboxes the 9:16 canvas into whatever window size is current.
"""

import asyncio
import logging
from typing import Optional

import pygame

from cartrunner.assets.store import AssetStore
from cartrunner.audio.loudness import LoudnessSensor
from cartrunner.config.settings import Settings
from cartrunner.core.events import Event, EventBus, EventType, tap_event, tick_event
from cartrunner.core.loop import FrameScheduler
from cartrunner.game.layout import Layout
from cartrunner.game.session import GameSession

logger = logging.getLogger(__name__)

LETTERBOX_COLOR = (0, 0, 0)

FOCUS_EVENTS = {
    pygame.WINDOWFOCUSLOST,
    pygame.WINDOWFOCUSGAINED,
    pygame.WINDOWMINIMIZED,
    pygame.WINDOWRESTORED,
}


class GameWindow:
    """
    Main game window.

    Keyboard Mapping:
        SPACE / RETURN: Start on the title screen, jump in game,
                        continue on the result screens
        P: Pause / resume
        R: Restart the round
        M: Request the microphone
        ESC: Quit
    """

    def __init__(
        self,
        settings: Settings,
        event_bus: EventBus,
        session: GameSession,
        assets: AssetStore,
        sensor: Optional[LoudnessSensor] = None,
    ) -> None:
        self.settings = settings
        self.event_bus = event_bus
        self.session = session
        self.assets = assets
        self.sensor = sensor

        self._screen: pygame.Surface | None = None
        self._canvas: pygame.Surface | None = None
        self._scheduler = FrameScheduler(self._frame, fps=settings.display.fps)
        self._frame_count = 0

        logger.info("GameWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create the window."""
        display = self.settings.display
        pygame.init()
        pygame.display.set_caption("Cart Runner")

        flags = pygame.RESIZABLE
        if display.fullscreen:
            flags = pygame.FULLSCREEN

        self._screen = pygame.display.set_mode((display.window_width, display.window_height), flags)
        self._apply_window_size(*self._screen.get_size())

        logger.info(f"Pygame initialized: {self._screen.get_width()}x{self._screen.get_height()}")

    def _apply_window_size(self, width: int, height: int) -> None:
        layout = Layout.fit(width, height, self.settings.display)
        if self._canvas is None or self._canvas.get_size() != layout.size:
            self._canvas = pygame.Surface(layout.size)
        self.event_bus.emit(Event(
            EventType.RESIZE, data={"width": width, "height": height}, source="window"
        ))

    # ===== STARTUP =====

    async def _enable_microphone(self) -> bool:
        if self.sensor is None or not self.settings.voice.auto_enable:
            return False
        enabled = await asyncio.to_thread(self.sensor.enable)
        self.session.set_mic_enabled(enabled)
        return enabled

    async def _load_resources(self) -> None:
        """Assets and microphone load side by side; either may fail alone."""
        results = await asyncio.gather(
            self.assets.load_all(),
            self._enable_microphone(),
            return_exceptions=True,
        )
        for name, result in zip(("assets", "microphone"), results):
            if isinstance(result, Exception):
                logger.warning(f"Startup task '{name}' failed: {result}")

    # ===== INPUT =====

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.stop()

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.MOUSEBUTTONDOWN:
                # Touch input also arrives as FINGERDOWN
                if event.button == 1 and not getattr(event, "touch", False):
                    self.event_bus.emit(tap_event("mouse"))

            elif event.type == pygame.FINGERDOWN:
                self.event_bus.emit(tap_event("touch"))

            elif event.type == pygame.VIDEORESIZE:
                self._apply_window_size(event.w, event.h)

            elif event.type in FOCUS_EVENTS:
                self.event_bus.emit(Event(EventType.FOCUS_CHANGED, source="window"))

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key == pygame.K_ESCAPE:
            self.stop()
        elif key in (pygame.K_SPACE, pygame.K_RETURN):
            self.event_bus.emit(Event(EventType.ACTION_KEY, source="keyboard"))
        elif key == pygame.K_p:
            self.event_bus.emit(Event(EventType.PAUSE_TOGGLE, source="keyboard"))
        elif key == pygame.K_r:
            self.event_bus.emit(Event(EventType.RESTART, source="keyboard"))
        elif key == pygame.K_m:
            self.event_bus.emit(Event(EventType.MIC_REQUEST, source="keyboard"))

    # ===== FRAME =====

    def _frame(self, now_ms: float) -> None:
        self._handle_events()
        if not self._scheduler.is_running:
            return

        # Called directly so a simulation error stops the scheduler
        self.session.step(now_ms)
        self.event_bus.emit(tick_event(now_ms, self._frame_count))
        self._render()
        self._frame_count += 1

    def _render(self) -> None:
        if not self._screen or not self._canvas:
            return

        self.session.render(self._canvas, self.assets)

        self._screen.fill(LETTERBOX_COLOR)
        rect = self._canvas.get_rect(center=self._screen.get_rect().center)
        self._screen.blit(self._canvas, rect)
        pygame.display.flip()

    # ===== LIFECYCLE =====

    async def run(self) -> None:
        """Main game loop."""
        self.session.attach()
        self._init_pygame()
        # Splash with fallbacks while images and the mic come up
        self._render()
        await self._load_resources()

        logger.info("Cart Runner started")
        try:
            await self._scheduler.run()
        finally:
            self.session.detach()
            self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame and the microphone."""
        if self.sensor is not None:
            self.sensor.disable()
        self.event_bus.emit(Event(EventType.SHUTDOWN, source="window"))
        pygame.quit()
        logger.info("Window closed")

    def stop(self) -> None:
        """Stop the game loop."""
        self._scheduler.stop()
