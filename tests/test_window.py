import asyncio

import pytest

from cartrunner.app.window import GameWindow
from cartrunner.assets.store import AssetStore
from cartrunner.core.events import EventType
from cartrunner.core.state import Screen


@pytest.fixture
def window(make_session, settings, bus, tmp_path):
    session = make_session()
    win = GameWindow(settings, bus, session, AssetStore(tmp_path, {}))
    # No pygame display in tests: skip the event pump, rendering is a no-op
    win._handle_events = lambda: None
    return win


def stop_after(window, bus, frames):
    def on_tick(event):
        if event.data["frame"] + 1 >= frames:
            window.stop()

    bus.subscribe(EventType.TICK, on_tick)


def test_frames_step_the_session(window, bus):
    window.session.tap()
    stop_after(window, bus, 3)

    asyncio.run(window._scheduler.run())

    assert window.session.screen == Screen.GAME
    assert window.session.state.time_left < window.settings.round.duration
    assert len(bus.get_history(EventType.TICK)) == 3


def test_simulation_error_stops_the_game(window, bus):
    session = window.session
    session.tap()

    def broken_update(session, dt, now_ms):
        raise ValueError("broken update")

    session.handlers[Screen.GAME].update = broken_update
    stop_after(window, bus, 100)

    with pytest.raises(ValueError):
        asyncio.run(window._scheduler.run())
    assert bus.get_history(EventType.TICK) == []
