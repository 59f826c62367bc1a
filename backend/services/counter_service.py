"""
Counter service.

Responsibilities:
- Read the current counter value
- Increment it by exactly one
- Time both operations

Non-responsibilities:
- No retries (storage errors propagate unchanged)
- No HTTP concerns
"""

from __future__ import annotations

from constants import COUNTER_ROW_ID, INITIAL_COUNTER_VALUE
from observability.logger import log_event
from observability.metrics import timed
from storage.counter_store import CounterStore


class CounterService:
    """
    Read and increment operations over the counter store.

    The only permitted mutator of the counter row. Storage errors
    propagate unchanged; nothing is retried.
    """

    def __init__(self, store: CounterStore) -> None:
        self._store = store

    async def read(self) -> int:
        with timed("counter_read"):
            value = await self._store.get_value()

        if value is None:
            # Row should exist after startup; reads fall back to the initial value
            log_event({
                "event_type": "COUNTER_ROW_MISSING",
                "row_id": COUNTER_ROW_ID,
                "fallback_value": INITIAL_COUNTER_VALUE,
            })
            return INITIAL_COUNTER_VALUE

        return value

    async def increment(self) -> int:
        with timed("counter_increment"):
            return await self._store.increment_and_get()
