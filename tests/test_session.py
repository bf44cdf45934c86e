import pytest

from cartrunner.core.events import Event, EventType, tap_event, tick_event
from cartrunner.core.state import Screen
from cartrunner.game.collectible import Collectible
from cartrunner.game.trigger import AudioLevelState

FRAME_MS = 20.0


class FakeSensor:
    def __init__(self, level=0.0):
        self.level = level
        self.level_state = AudioLevelState()
        self.enable_result = True

    def read(self):
        return self.level

    def enable(self):
        return self.enable_result


class Runner:
    """Steps a session with explicit timestamps."""

    def __init__(self, session):
        self.session = session
        self.now = 0.0

    def frame(self):
        self.now += FRAME_MS
        self.session.step(self.now)

    def until(self, screen, limit=5000):
        for _ in range(limit):
            if self.session.screen == screen:
                return
            self.frame()
        raise AssertionError(f"never reached {screen}")


def box_on_cart(session):
    cart = session.state.cart
    return Collectible(x=cart.x, base_y=cart.y, w=cart.w // 2, h=cart.h // 2)


def sounds(bus):
    return [e.data["cue"] for e in bus.get_history(EventType.SOUND_PLAY, limit=100)]


def test_session_starts_on_splash(make_session):
    session = make_session()
    assert session.screen == Screen.SPLASH
    assert not session.state.running


def test_splash_does_not_simulate(make_session):
    session = make_session()
    runner = Runner(session)
    for _ in range(10):
        runner.frame()
    assert session.state.time_left == session.settings.round.duration
    assert not session.clock.has_baseline


def test_tap_starts_round_and_music(make_session, bus):
    session = make_session()

    session.tap()

    assert session.screen == Screen.GAME
    assert session.state.running
    assert bus.get_history(EventType.MUSIC_START)


def test_action_key_starts_then_jumps(make_session):
    session = make_session()
    session.action_key()
    assert session.screen == Screen.GAME

    session.action_key()
    assert session.state.cart.vy == session.state.physics.flap_velocity


def test_lose_flow(make_session, store, bus):
    session = make_session()
    runner = Runner(session)
    session.tap()

    runner.until(Screen.CONFETTI)
    assert session.state.time_left == 0
    assert session.state.game_ended
    assert "lose" in sounds(bus)

    runner.until(Screen.LOSE)
    assert session.state.confetti_frame > session.settings.round.confetti_frames - 1
    assert store.writes == 0

    session.tap()
    assert session.screen == Screen.GAME
    assert session.state.running


def test_win_flow(make_session, store, bus):
    session = make_session()
    runner = Runner(session)
    session.tap()

    session.state.collectibles.append(box_on_cart(session))
    runner.frame()
    assert session.state.score == 50
    assert "collect" in sounds(bus)

    runner.until(Screen.CONFETTI)
    assert "win" in sounds(bus)
    assert store.value == 50
    assert store.writes == 1

    runner.until(Screen.WIN)
    session.tap()
    assert session.screen == Screen.FINAL
    assert 1 <= session.state.selected_product <= 15

    session.tap()
    assert session.screen == Screen.GAME
    assert session.state.score == 0
    assert session.state.high_score == 50


def test_round_end_is_reported_once(make_session, bus):
    session = make_session()
    runner = Runner(session)
    session.tap()

    runner.until(Screen.LOSE)

    assert len(bus.get_history(EventType.ROUND_END)) == 1


def test_confetti_ignores_taps(make_session):
    session = make_session()
    runner = Runner(session)
    session.tap()
    runner.until(Screen.CONFETTI)

    session.tap()
    session.action_key()

    assert session.screen == Screen.CONFETTI


def test_restart_matches_fresh_round(make_session):
    fresh = make_session()
    fresh.tap()

    session = make_session()
    runner = Runner(session)
    session.tap()
    session.state.collectibles.append(box_on_cart(session))
    for _ in range(300):
        runner.frame()
    assert session.state.score > 0

    assert session.restart()

    a, b = session.state, fresh.state
    assert a.screen == b.screen == Screen.GAME
    assert a.score == b.score == 0
    assert a.time_left == b.time_left
    assert a.collectibles == b.collectibles == []
    assert a.scroll_offset == b.scroll_offset == 0
    assert a.next_spawn_delay_ms == b.next_spawn_delay_ms
    assert a.cart == b.cart
    assert a.running and not a.paused and not a.game_ended
    assert not a.finish_imminent
    assert not session.clock.has_baseline


def test_restart_from_results(make_session):
    session = make_session()
    runner = Runner(session)
    session.tap()
    runner.until(Screen.LOSE)

    assert session.restart()
    assert session.screen == Screen.GAME


def test_restart_ignored_on_splash(make_session):
    session = make_session()
    assert not session.restart()
    assert session.screen == Screen.SPLASH


def test_pause_freezes_simulation(make_session):
    session = make_session()
    runner = Runner(session)
    session.tap()
    runner.frame()
    before = session.state.time_left

    assert session.toggle_pause()
    for _ in range(20):
        runner.frame()
    assert session.state.time_left == before

    session.tap()
    assert session.state.cart.on_ground

    assert session.toggle_pause()
    runner.frame()
    assert session.state.time_left < before


def test_pause_only_in_running_game(make_session):
    session = make_session()
    assert not session.toggle_pause()
    assert not session.state.paused


def test_voice_jump_when_mic_enabled(make_session, bus):
    sensor = FakeSensor(level=1.0)
    session = make_session(sensor=sensor)
    assert session.request_mic()
    runner = Runner(session)
    session.tap()

    runner.frame()

    assert not session.state.cart.on_ground
    assert session.state.cart.vy < 0
    jumps = bus.get_history(EventType.JUMP)
    assert [e.data["via"] for e in jumps] == ["voice"]


def test_sustained_voice_jumps_once(make_session, bus):
    session = make_session(sensor=FakeSensor(level=1.0))
    session.request_mic()
    runner = Runner(session)
    session.tap()

    for _ in range(50):
        runner.frame()

    assert len(bus.get_history(EventType.JUMP)) == 1


def test_voice_ignored_without_mic(make_session, bus):
    session = make_session(sensor=FakeSensor(level=1.0))
    runner = Runner(session)
    session.tap()

    runner.frame()

    assert bus.get_history(EventType.JUMP) == []


def test_failed_mic_request_keeps_mic_off(make_session):
    sensor = FakeSensor()
    sensor.enable_result = False
    session = make_session(sensor=sensor)

    assert not session.request_mic()
    assert not session.state.mic_enabled


def test_focus_change_resets_frame_baseline(make_session):
    session = make_session()
    runner = Runner(session)
    session.tap()
    runner.frame()
    before = session.state.time_left

    session.on_focus_changed()
    session.step(runner.now + 60_000)

    assert before - session.state.time_left == pytest.approx(session.settings.physics.min_dt)


def test_bus_drives_session(make_session, bus):
    session = make_session()
    session.attach()

    bus.emit(tap_event())
    assert session.screen == Screen.GAME

    # Ticks are notifications; the window steps the session itself
    bus.emit(tick_event(20.0, 0))
    assert session.state.time_left == session.settings.round.duration

    bus.emit(Event(EventType.PAUSE_TOGGLE))
    assert session.state.paused

    bus.emit(Event(EventType.RESIZE, data={"width": 540, "height": 960}))
    assert session.state.layout.size == (540, 960)

    session.detach()
    bus.emit(Event(EventType.PAUSE_TOGGLE))
    assert session.state.paused


def test_screen_changes_are_published(make_session, bus):
    session = make_session()
    session.tap()

    changes = bus.get_history(EventType.SCREEN_CHANGED)
    assert changes[-1].data == {"from": "SPLASH", "to": "GAME"}
