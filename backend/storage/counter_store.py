"""
SQLite-backed counter store.

Owns the single counter row:

    CREATE TABLE counter (id INTEGER PRIMARY KEY, value INTEGER NOT NULL)

Lifecycle is explicit: `open()` at startup, `close()` at shutdown.
Between the two, the store holds one aiosqlite connection.

Atomicity relies on SQLite alone: the increment is a single
UPDATE ... RETURNING statement, so concurrent increments never lose
an update. There is no application-level lock.

Usage:

    store = CounterStore("counter.db")
    await store.open()
    try:
        value = await store.increment_and_get()
    finally:
        await store.close()
"""

from __future__ import annotations

from pathlib import Path

import aiosqlite

from constants import (
    COUNTER_INCREMENT_STEP,
    COUNTER_ROW_ID,
    COUNTER_TABLE,
    INITIAL_COUNTER_VALUE,
)
from observability.logger import log_event


_CREATE_TABLE_SQL = f"""
CREATE TABLE IF NOT EXISTS {COUNTER_TABLE} (
    id INTEGER PRIMARY KEY,
    value INTEGER NOT NULL DEFAULT {INITIAL_COUNTER_VALUE}
)
"""
_SEED_SQL = f"INSERT OR IGNORE INTO {COUNTER_TABLE} (id, value) VALUES (?, ?)"
_SELECT_SQL = f"SELECT value FROM {COUNTER_TABLE} WHERE id = ?"
_INCREMENT_SQL = (
    f"UPDATE {COUNTER_TABLE} SET value = value + ? WHERE id = ? RETURNING value"
)


# -------------------------
# Exceptions
# -------------------------

class StorageError(Exception):
    """Base class for counter storage errors."""


class StorageUnavailableError(StorageError):
    """
    Raised when the store cannot be opened or initialized.

    Fatal at startup: the process must not begin serving.
    """


class StorageOperationError(StorageError):
    """
    Raised when a read or write fails after startup.

    Reported to the caller; never retried and never fatal to the process.
    """


class CounterRowMissingError(StorageOperationError):
    """Raised when an increment finds no counter row to update."""


# -------------------------
# Store
# -------------------------

class CounterStore:
    """
    Persistent store for the single counter row.

    One instance per process, constructed at startup and injected
    into the service layer.
    """

    def __init__(self, db_path: str | Path, *, timeout: float = 5.0) -> None:
        self._db_path = str(db_path)
        # Seconds to wait on a locked database before failing
        self._timeout = timeout
        self._conn: aiosqlite.Connection | None = None

    @property
    def db_path(self) -> str:
        return self._db_path

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def open(self) -> None:
        """
        Connect, create the table and seed the row if absent.

        Raises:
            StorageUnavailableError on any failure. The store stays closed.
        """
        if self._conn is not None:
            return

        try:
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
            # Autocommit: every statement is its own transaction
            conn = await aiosqlite.connect(
                self._db_path, timeout=self._timeout, isolation_level=None
            )
        except (aiosqlite.Error, OSError) as exc:
            log_event({
                "event_type": "STORAGE_UNAVAILABLE",
                "db_path": self._db_path,
                "exception": type(exc).__name__,
                "message": str(exc),
            })
            raise StorageUnavailableError(
                f"cannot open counter database at {self._db_path}"
            ) from exc

        try:
            await conn.execute(_CREATE_TABLE_SQL)
            cursor = await conn.execute(
                _SEED_SQL, (COUNTER_ROW_ID, INITIAL_COUNTER_VALUE)
            )
            seeded = cursor.rowcount == 1
            await cursor.close()
            await conn.commit()
        except aiosqlite.Error as exc:
            await conn.close()
            log_event({
                "event_type": "STORAGE_UNAVAILABLE",
                "db_path": self._db_path,
                "exception": type(exc).__name__,
                "message": str(exc),
            })
            raise StorageUnavailableError(
                f"cannot initialize counter table in {self._db_path}"
            ) from exc

        self._conn = conn

        if seeded:
            log_event({
                "event_type": "COUNTER_SEEDED",
                "row_id": COUNTER_ROW_ID,
                "value": INITIAL_COUNTER_VALUE,
            })

        log_event({
            "event_type": "STORAGE_OPENED",
            "db_path": self._db_path,
        })

    async def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        conn, self._conn = self._conn, None
        if conn is None:
            return

        await conn.close()
        log_event({
            "event_type": "STORAGE_CLOSED",
            "db_path": self._db_path,
        })

    async def __aenter__(self) -> CounterStore:
        await self.open()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def get_value(self) -> int | None:
        """
        Return the stored value, or None if the row is absent.

        Raises:
            StorageOperationError if the read fails.
        """
        conn = self._require_conn()
        try:
            rows = list(
                await conn.execute_fetchall(_SELECT_SQL, (COUNTER_ROW_ID,))
            )
        except aiosqlite.Error as exc:
            raise StorageOperationError("counter read failed") from exc

        if not rows:
            return None
        return int(rows[0][0])

    async def increment_and_get(self) -> int:
        """
        Add one to the stored value and return the new value.

        Raises:
            CounterRowMissingError if there is no row to update.
            StorageOperationError if the write fails.
        """
        conn = self._require_conn()
        # Execute and fetch in one call so the RETURNING row is drained
        # before the statement is reset. A failed write is rolled back
        # and never counted.
        try:
            rows = list(await conn.execute_fetchall(
                _INCREMENT_SQL, (COUNTER_INCREMENT_STEP, COUNTER_ROW_ID)
            ))
            await conn.commit()
        except aiosqlite.Error as exc:
            await self._rollback(conn, exc)
            raise StorageOperationError("counter increment failed") from exc

        if not rows:
            raise CounterRowMissingError(
                f"no counter row with id={COUNTER_ROW_ID}"
            )
        return int(rows[0][0])

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise StorageOperationError("counter store is not open")
        return self._conn

    async def _rollback(self, conn: aiosqlite.Connection, cause: Exception) -> None:
        """Discard a failed write so it is never committed later."""
        try:
            await conn.rollback()
        except aiosqlite.Error as exc:
            log_event({
                "event_type": "STORAGE_ROLLBACK_FAILED",
                "db_path": self._db_path,
                "cause": repr(cause),
                "exception": type(exc).__name__,
                "message": str(exc),
            })
