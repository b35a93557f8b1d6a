from pathlib import Path

from cardrank.config import Settings
from cardrank.config.settings import DEFAULT_MODEL_PATH


def test_defaults(monkeypatch):
    for name in (
        "CARDRANK_UPSTREAM_URL",
        "CARDRANK_CARD_TYPE",
        "CARDRANK_CACHE_TTL",
        "CARDRANK_CONCURRENCY",
        "CARDRANK_PER_POSITION_LIMIT",
        "CARDRANK_HTTP_TIMEOUT",
        "CARDRANK_MODEL_PATH",
    ):
        monkeypatch.delenv(name, raising=False)
    settings = Settings.from_env()
    assert settings.upstream_url == "https://mlb25.theshow.com/apis/items.json"
    assert settings.card_type == "mlb_card"
    assert settings.cache_ttl_seconds == 3600
    assert settings.concurrency == 10
    assert settings.per_position_limit == 250
    assert settings.model_path == DEFAULT_MODEL_PATH
    assert DEFAULT_MODEL_PATH.exists()


def test_env_overrides_and_invalid_values(monkeypatch, caplog):
    monkeypatch.setenv("CARDRANK_CACHE_TTL", "120")
    monkeypatch.setenv("CARDRANK_CONCURRENCY", "0")
    monkeypatch.setenv("CARDRANK_PER_POSITION_LIMIT", "lots")
    monkeypatch.setenv("CARDRANK_MODEL_PATH", "/tmp/model.json")
    settings = Settings.from_env()
    assert settings.cache_ttl_seconds == 120.0
    assert settings.concurrency == 1
    assert settings.per_position_limit == 250
    assert settings.model_path == Path("/tmp/model.json")
    assert "CARDRANK_PER_POSITION_LIMIT" in caplog.text

    explicit = Settings.from_env(model_path=Path("other.json"))
    assert explicit.model_path == Path("other.json")
