"""
Exercise Tracker — Exercise & Log Schemas
===========================================

What:  Pydantic models for POST /api/users/{id}/exercises and
       GET /api/users/{id}/logs.

Coercion policy:
    The request model only checks presence. `duration` is kept as the raw
    int/float/str the client sent and `date` as the raw string; the service
    coerces them and fails with InternalFailure when coercion is impossible.
    Rendered dates are calendar strings such as "Mon May 01 2023".
"""

import uuid
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ExerciseCreate(BaseModel):
    """Body of POST /api/users/{id}/exercises (JSON or form-encoded)."""

    description: str = Field(description="What was done")
    duration: Union[int, float, str] = Field(description="Minutes; parsed permissively")
    date: Optional[str] = Field(
        default=None,
        description="ISO 8601 date; defaults to today (UTC) when absent or empty",
    )

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("description must not be blank")
        return v

    @field_validator("duration")
    @classmethod
    def validate_duration_present(cls, v):
        if isinstance(v, str) and not v.strip():
            raise ValueError("duration must not be blank")
        return v

    @field_validator("date", mode="before")
    @classmethod
    def empty_date_is_absent(cls, v):
        # Form submissions send date="" when the field is left empty
        if isinstance(v, str) and not v.strip():
            return None
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ExerciseResponse(BaseModel):
    """The created exercise merged with its owner's id and username."""

    id: uuid.UUID = Field(description="Owning user's identifier")
    username: str
    date: str = Field(description="Calendar string, e.g. 'Mon May 01 2023'")
    duration: int = Field(description="Minutes")
    description: str


class LogEntry(BaseModel):
    """One exercise in a log; carries no identifiers."""

    description: str
    duration: int
    date: str


class LogResponse(BaseModel):
    """
    A user's filtered exercise log.

    `count` is the number of entries in `log` (after filtering and limiting),
    not the user's total.
    """

    id: uuid.UUID = Field(description="User identifier")
    username: str
    count: int
    log: List[LogEntry]
