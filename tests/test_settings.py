from cartrunner.config.settings import RoundSettings, Settings


def test_defaults(tmp_path):
    settings = Settings(data_path=tmp_path)

    assert settings.round.duration == 30
    assert settings.round.reward == 50
    assert settings.round.confetti_frames == 22
    assert settings.voice.threshold == 0.25
    assert settings.voice.cooldown_ms == 300
    assert settings.spawn.initial_delay_ms == 800
    assert settings.physics.min_dt == 0.008
    assert settings.physics.max_dt == 0.025
    assert settings.highscore_file == tmp_path / "highscore.json"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CARTRUNNER_DEBUG", "true")
    monkeypatch.setenv("CARTRUNNER_SEED", "7")
    monkeypatch.setenv("CARTRUNNER_ROUND__DURATION", "45")

    settings = Settings()

    assert settings.debug is True
    assert settings.seed == 7
    assert settings.round.duration == 45


def test_explicit_groups():
    settings = Settings(round=RoundSettings(duration=10, reward=5))
    assert settings.round.duration == 10
    assert settings.round.reward == 5
