# pylint: disable=missing-module-docstring,missing-function-docstring

from pathlib import Path
from typing import Any

import pytest

import server.main as main_mod


@pytest.fixture
def fake_uvicorn(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    calls: list[dict[str, Any]] = []

    def fake_run(app: str, **kwargs: Any) -> None:
        calls.append({"app": app, **kwargs})

    monkeypatch.setattr(main_mod.uvicorn, "run", fake_run)
    monkeypatch.setattr(main_mod, "load_dotenv", lambda: None)
    for name in ("HOST", "ENABLE_JSON_LOGS", "ENV"):
        monkeypatch.delenv(name, raising=False)
    return calls


def test_main_runs_uvicorn_with_config(
    monkeypatch: pytest.MonkeyPatch,
    fake_uvicorn: list[dict[str, Any]],
    db_path: Path,
) -> None:
    monkeypatch.setenv("COUNTER_DB_PATH", str(db_path))
    monkeypatch.setenv("PORT", "5055")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    assert main_mod.main() == 0

    assert fake_uvicorn == [{
        "app": "server.app:create_app",
        "factory": True,
        "host": "0.0.0.0",
        "port": 5055,
        "log_level": "warning",
    }]
    assert db_path.exists()


def test_main_refuses_to_start_without_storage(
    monkeypatch: pytest.MonkeyPatch,
    fake_uvicorn: list[dict[str, Any]],
    tmp_path: Path,
    events: list[dict[str, Any]],
) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("")
    monkeypatch.setenv("COUNTER_DB_PATH", str(blocker / "counter.db"))
    monkeypatch.delenv("PORT", raising=False)

    assert main_mod.main() == 1

    assert not fake_uvicorn
    assert events[-1]["event_type"] == "SERVER_START_ABORTED"

