# pylint: disable=missing-module-docstring,missing-function-docstring

import json
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from config import AppConfig
from observability import logger
from server.app import create_app


@pytest.fixture(autouse=True)
def events(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    """Capture every JSONL event instead of writing to stdout."""
    captured: list[dict[str, Any]] = []

    def fake_print(line: str) -> None:
        captured.append(json.loads(line))

    monkeypatch.setattr(logger, "_print", fake_print)
    monkeypatch.setattr(logger, "_enabled", True)
    return captured


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "counter.db"


@pytest.fixture
def app_config(db_path: Path) -> AppConfig:
    return AppConfig(db_path=str(db_path))


@pytest.fixture
def client(app_config: AppConfig):
    # Entering the client runs the lifespan, which opens the store
    with TestClient(create_app(app_config)) as c:
        yield c
