"""Pydantic schemas for API responses."""

from pydantic import BaseModel


class CounterValue(BaseModel):
    """Current counter value."""

    value: int


class ErrorResponse(BaseModel):
    """Fixed error body returned on storage failures."""

    error: str
