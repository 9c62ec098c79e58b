"""
Exercise Tracker — User Request/Response Schemas
==================================================

What:  Pydantic models for the /api/users contract.
How:   Request models are validated by `routes.body.parse_body` before any
       service code runs; response models are serialized by FastAPI.
"""

import uuid

from pydantic import BaseModel, Field, field_validator


class UserCreate(BaseModel):
    """Body of POST /api/users (JSON or form-encoded)."""

    username: str = Field(description="Unique username")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("username must not be blank")
        return v


class UserResponse(BaseModel):
    """A user as returned by POST /api/users and GET /api/users."""

    username: str = Field(description="Unique username")
    id: uuid.UUID = Field(description="Store-assigned user identifier")

    model_config = {"from_attributes": True}
