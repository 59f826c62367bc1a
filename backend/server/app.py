"""
FastAPI app factory.

Responsibilities:
- Create and configure FastAPI app
- Set up middleware
- Own the counter store lifecycle (open at startup, close at shutdown)
- Register routes
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import AppConfig
from observability.logger import configure_logging
from services.counter_service import CounterService
from storage.counter_store import CounterStore

from server.routes import register_routes


def create_app(config: AppConfig | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    This is the app factory pattern that allows:
    - Testing with different configurations (e.g. a temp database)
    - Environment-specific setup
    - ASGI server compatibility

    The store is opened inside the lifespan. If it cannot be opened,
    StorageUnavailableError escapes startup and the server never serves.
    """
    if config is None:
        config = AppConfig.load_from_env()

    configure_logging(enabled=config.enable_json_logs)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        store = CounterStore(config.db_path)
        await store.open()

        app.state.store = store
        app.state.counter_service = CounterService(store)
        try:
            yield
        finally:
            await store.close()

    app = FastAPI(title="Counter API", lifespan=lifespan)

    app.state.config = config

    # Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_allow_origins),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Routes
    register_routes(app)

    return app
