from bolly_beat.config import load_config


def test_defaults(monkeypatch):
    for name in ["RECOGNIZE_API_URL", "VIDEO_SEARCH_PROXY_URL", "USE_SQLITE", "QUEUE_LOOKAHEAD"]:
        monkeypatch.delenv(name, raising=False)

    config = load_config()

    assert config.recognition.api_url == ""
    assert config.scheduler.interval_seconds == 5.0
    assert config.scheduler.warmup_seconds == 1.0
    assert config.capture.min_sample_bytes == 1000
    assert config.transcription.emission_interval_seconds == 3.0
    assert config.search.keyword == "dance"
    assert config.search.fallback_enabled
    assert config.queue.lookahead == 5
    assert config.queue.history == 10
    assert config.database.url.startswith("postgresql+psycopg://")


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("RECOGNIZE_API_URL", "http://recognize.local")
    monkeypatch.setenv("VIDEO_SEARCH_FALLBACK", "false")
    monkeypatch.setenv("QUEUE_LOOKAHEAD", "3")
    monkeypatch.setenv("USE_SQLITE", "true")

    config = load_config()

    assert config.recognition.api_url == "http://recognize.local"
    assert not config.search.fallback_enabled
    assert config.queue.lookahead == 3
    assert config.database.url == "sqlite:///./bolly_beat.db"


def test_logging_settings(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.delenv("SERVICE_NAME", raising=False)

    config = load_config()

    assert config.logging.level == "DEBUG"
    assert config.logging.service_name == "bolly-beat"
