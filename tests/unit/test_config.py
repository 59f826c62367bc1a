# pylint: disable=missing-module-docstring,missing-function-docstring

import pytest

from config import AppConfig
from constants import DEFAULT_DB_PATH, DEFAULT_PORT


_ENV_VARS = (
    "ENV",
    "LOG_LEVEL",
    "HOST",
    "PORT",
    "COUNTER_DB_PATH",
    "ENABLE_JSON_LOGS",
    "CORS_ALLOW_ORIGINS",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure no env vars interfere with tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_config_defaults(clean_env: None) -> None:
    cfg = AppConfig.load_from_env()

    assert cfg.env == "dev"
    assert cfg.log_level == "INFO"
    assert cfg.port == DEFAULT_PORT
    assert cfg.db_path == DEFAULT_DB_PATH
    assert cfg.enable_json_logs is True
    assert cfg.cors_allow_origins == ("*",)


def test_override_with_env(clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "8081")
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("COUNTER_DB_PATH", "/tmp/other.db")
    monkeypatch.setenv("ENABLE_JSON_LOGS", "0")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test,")

    cfg = AppConfig.load_from_env()

    assert cfg.port == 8081
    assert cfg.host == "127.0.0.1"
    assert cfg.db_path == "/tmp/other.db"
    assert cfg.enable_json_logs is False
    assert cfg.cors_allow_origins == ("http://a.test", "http://b.test")


def test_invalid_port_is_rejected(clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "not-a-port")

    with pytest.raises(ValueError):
        AppConfig.load_from_env()


def test_config_is_immutable() -> None:
    cfg = AppConfig()

    with pytest.raises(AttributeError):
        cfg.port = 1  # type: ignore[misc]
