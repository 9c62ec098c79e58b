"""
Exercise Tracker — Typed Request Bodies
=========================================

What:  Reads a request body (JSON, urlencoded or multipart form) into a
       pydantic request model before the route handler runs.
How:   `request_body(Model)` returns a FastAPI dependency. Any body that is
       malformed, or lacks a required field, fails with ClientInputError (400)
       instead of FastAPI's default 422 JSON.

Usage:
    @router.post("/api/users")
    async def create_user(payload: UserCreate = Depends(request_body(UserCreate))):
        ...
"""

import json
from typing import Any, Awaitable, Callable, Dict, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from exercise_tracker.exceptions import ClientInputError

ModelT = TypeVar("ModelT", bound=BaseModel)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_body(request: Request) -> Dict[str, Any]:
    """Decode the body into a flat dict; an empty body decodes to {}."""
    content_type = request.headers.get("content-type", "").lower()

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        # Uploaded files are not part of any request model
        return {key: value for key, value in form.items() if isinstance(value, str)}

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        raise ClientInputError(message="Malformed JSON body") from None
    if not isinstance(data, dict):
        raise ClientInputError(message="Request body must be a JSON object")
    return data


async def parse_body(request: Request, model: Type[ModelT]) -> ModelT:
    data = await read_body(request)
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        if first["type"] == "missing":
            message = f"Path `{field}` is required."
        else:
            message = f"Invalid `{field}`: {first['msg']}"
        raise ClientInputError(message=message, field=field or None) from None


def request_body(model: Type[ModelT]) -> Callable[[Request], Awaitable[ModelT]]:
    """Build a dependency that parses the body into `model`."""

    async def dependency(request: Request) -> ModelT:
        return await parse_body(request, model)

    return dependency
