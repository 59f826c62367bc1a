"""
Route registration for the counter API.

Responsibilities:
- Define HTTP endpoints
- Translate storage failures into fixed 500 bodies
- Answer every unmatched route with a plain-text 404
- Pull dependencies from app.state
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from constants import (
    API_COUNTER_PATH,
    API_INCREMENT_PATH,
    INCREMENT_FAILED_MESSAGE,
    NOT_FOUND_BODY,
    READ_FAILED_MESSAGE,
)
from observability.logger import log_event
from services.counter_service import CounterService
from storage.counter_store import StorageError

from server.schemas import CounterValue, ErrorResponse


INDEX_HTML = Path(__file__).resolve().parent / "static" / "index.html"

# Method mismatch on a known path counts as an unmatched route
_NOT_FOUND_STATUSES = frozenset({404, 405})


def register_routes(app: FastAPI) -> None:
    """Register all routes, the 404 handler and request logging on the app."""

    @app.middleware("http")
    async def log_requests( # pyright: ignore[reportUnusedFunction]
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        start_ns = time.monotonic_ns()
        response = await call_next(request)
        log_event({
            "event_type": "HTTP_REQUEST",
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": (time.monotonic_ns() - start_ns) // 1_000_000,
        })
        return response

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler( # pyright: ignore[reportUnusedFunction]
        request: Request,
        exc: StarletteHTTPException,
    ) -> Response:
        if exc.status_code not in _NOT_FOUND_STATUSES:
            return await http_exception_handler(request, exc)

        log_event({
            "event_type": "HTTP_NOT_FOUND",
            "method": request.method,
            "path": request.url.path,
        })
        return PlainTextResponse(NOT_FOUND_BODY, status_code=404)

    @app.get("/health")
    async def health() -> dict[str, str]: # pyright: ignore[reportUnusedFunction]
        return {"status": "ok"}

    @app.get("/", response_class=FileResponse)
    async def index() -> FileResponse: # pyright: ignore[reportUnusedFunction]
        return FileResponse(INDEX_HTML, media_type="text/html")

    @app.get(
        API_COUNTER_PATH,
        response_model=CounterValue,
        responses={500: {"model": ErrorResponse}},
    )
    async def get_counter( # pyright: ignore[reportUnusedFunction]
        request: Request,
    ) -> CounterValue | JSONResponse:
        service = _counter_service(request)
        try:
            value = await service.read()
        except StorageError as exc:
            return _storage_failure(request, exc, READ_FAILED_MESSAGE)
        return CounterValue(value=value)

    # The request body, if any, is never read.
    @app.post(
        API_INCREMENT_PATH,
        response_model=CounterValue,
        responses={500: {"model": ErrorResponse}},
    )
    async def increment_counter( # pyright: ignore[reportUnusedFunction]
        request: Request,
    ) -> CounterValue | JSONResponse:
        service = _counter_service(request)
        try:
            value = await service.increment()
        except StorageError as exc:
            return _storage_failure(request, exc, INCREMENT_FAILED_MESSAGE)
        return CounterValue(value=value)


def _counter_service(request: Request) -> CounterService:
    return request.app.state.counter_service


def _storage_failure(
    request: Request,
    exc: StorageError,
    message: str,
) -> JSONResponse:
    log_event({
        "event_type": "STORAGE_OPERATION_ERROR",
        "method": request.method,
        "path": request.url.path,
        "exception": type(exc).__name__,
        "message": str(exc),
        "cause": repr(exc.__cause__) if exc.__cause__ else None,
    })
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=message).model_dump(),
    )
