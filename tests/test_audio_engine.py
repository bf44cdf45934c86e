from cartrunner.audio.engine import AudioEngine
from cartrunner.core.events import Event, EventBus, EventType, sound_event


def test_uninitialized_engine_is_silent():
    engine = AudioEngine()
    assert engine.play("jump") is None
    engine.start_music()


def test_music_start_event_unmutes():
    bus = EventBus()
    engine = AudioEngine()
    engine.attach(bus)
    assert engine.is_muted()

    bus.emit(Event(EventType.MUSIC_START))
    bus.emit(sound_event("jump"))

    assert not engine.is_muted()


def test_cleanup_detaches_from_bus():
    bus = EventBus()
    engine = AudioEngine()
    engine.attach(bus)
    engine.cleanup()

    bus.emit(Event(EventType.MUSIC_START))

    assert engine.is_muted()


def test_refused_music_is_retried_on_next_gesture():
    bus = EventBus()
    engine = AudioEngine()
    attempts = []
    engine.start_music = lambda: attempts.append(True)
    engine._music_pending = True
    engine.attach(bus)

    bus.emit(Event(EventType.TAP))
    assert attempts == []

    bus.emit(Event(EventType.MUSIC_START))
    bus.emit(Event(EventType.TAP))
    bus.emit(Event(EventType.ACTION_KEY))

    assert len(attempts) == 3
