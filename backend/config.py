"""
Application configuration.

Responsibilities:
- Load deployment-specific configuration
- Read environment variables
- Provide a typed, immutable config object

Non-responsibilities:
- No storage access
- No behavioral constants (see constants.py)
- No runtime mutation
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from constants import DEFAULT_DB_PATH, DEFAULT_HOST, DEFAULT_PORT


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable application configuration.

    Constructed once at process startup.
    Passed downward to the app factory and the store.
    """

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    env: str = "dev"
    log_level: str = "INFO"

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    cors_allow_origins: tuple[str, ...] = ("*",)

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    db_path: str = DEFAULT_DB_PATH

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    enable_json_logs: bool = True

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @staticmethod
    def load_from_env() -> AppConfig:
        """
        Load configuration from environment variables.

        Raises:
            ValueError if PORT is not an integer.
        """
        origins = os.environ.get("CORS_ALLOW_ORIGINS", "*")

        return AppConfig(
            env=os.environ.get("ENV", "dev"),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),

            host=os.environ.get("HOST", DEFAULT_HOST),
            port=int(os.environ.get("PORT", str(DEFAULT_PORT))),
            cors_allow_origins=tuple(
                o.strip() for o in origins.split(",") if o.strip()
            ),

            db_path=os.environ.get("COUNTER_DB_PATH", DEFAULT_DB_PATH),

            enable_json_logs=os.environ.get("ENABLE_JSON_LOGS", "1") == "1",
        )
