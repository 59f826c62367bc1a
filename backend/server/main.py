"""
Command-line entry point for the counter server.

Responsibilities:
- Load .env and configuration
- Refuse to start when the counter store cannot be opened
- Hand the app factory to uvicorn
"""

from __future__ import annotations

import asyncio

import uvicorn
from dotenv import load_dotenv

from config import AppConfig
from observability.logger import configure_logging, log_event
from storage.counter_store import CounterStore, StorageUnavailableError


async def _check_storage(config: AppConfig) -> None:
    """Open and close the store once so a bad path fails before binding."""
    async with CounterStore(config.db_path):
        pass


def main() -> int:
    load_dotenv()

    config = AppConfig.load_from_env()
    configure_logging(enabled=config.enable_json_logs)

    try:
        asyncio.run(_check_storage(config))
    except StorageUnavailableError as exc:
        log_event({
            "event_type": "SERVER_START_ABORTED",
            "db_path": config.db_path,
            "message": str(exc),
        })
        return 1

    log_event({
        "event_type": "SERVER_STARTING",
        "env": config.env,
        "host": config.host,
        "port": config.port,
        "db_path": config.db_path,
    })

    uvicorn.run(
        "server.app:create_app",
        factory=True,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
