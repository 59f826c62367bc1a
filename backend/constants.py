"""
BEHAVIOR-AS-CONSTANTS
---------------------
Single source of truth for the counter's behavioral constants.

Rules:
- If changing a value changes runtime behavior, it belongs here.
- No magic numbers or literals elsewhere in the codebase.
"""

from __future__ import annotations

from typing import Final

# =============================================================================
# Counter row
# =============================================================================

# The table holds exactly one row, always addressed by this id.
COUNTER_ROW_ID: Final[int] = 1
INITIAL_COUNTER_VALUE: Final[int] = 0
COUNTER_INCREMENT_STEP: Final[int] = 1

COUNTER_TABLE: Final[str] = "counter"

# =============================================================================
# Storage
# =============================================================================

DEFAULT_DB_PATH: Final[str] = "counter.db"

# =============================================================================
# HTTP
# =============================================================================

DEFAULT_HOST: Final[str] = "0.0.0.0"
DEFAULT_PORT: Final[int] = 5000

API_COUNTER_PATH: Final[str] = "/api/counter"
API_INCREMENT_PATH: Final[str] = "/api/counter/increment"

READ_FAILED_MESSAGE: Final[str] = "Failed to retrieve counter value."
INCREMENT_FAILED_MESSAGE: Final[str] = "Failed to increment counter value."
NOT_FOUND_BODY: Final[str] = "Not Found"
