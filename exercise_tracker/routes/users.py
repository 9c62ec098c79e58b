"""
Exercise Tracker — User & Exercise Route Handlers
===================================================

What:  The /api/users resource and its exercises/logs sub-resources.
How:   Parses the path/body/query, delegates to the services, returns the
       response model. Errors raised by services are rendered as plain text
       by the global handlers in main.py.

Routes:
    POST /api/users                      create a user
    GET  /api/users                      list all users
    POST /api/users/{user_id}/exercises  log an exercise
    GET  /api/users/{user_id}/logs       read a filtered log
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from exercise_tracker.database import get_db_session
from exercise_tracker.routes.body import request_body
from exercise_tracker.schemas.exercise import ExerciseCreate, ExerciseResponse, LogResponse
from exercise_tracker.schemas.user import UserCreate, UserResponse
from exercise_tracker.services.exercise_service import exercise_service
from exercise_tracker.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])


def _plain_text(description: str) -> dict:
    return {"description": description, "content": {"text/plain": {}}}


@router.post(
    "",
    response_model=UserResponse,
    responses={400: _plain_text("Missing or duplicate username")},
    summary="Create a user",
)
async def create_user(
    payload: UserCreate = Depends(request_body(UserCreate)),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.create_user(db, payload.username)


@router.get(
    "",
    response_model=List[UserResponse],
    responses={500: _plain_text("Store unavailable")},
    summary="List all users",
)
async def list_users(db: AsyncSession = Depends(get_db_session)) -> List[UserResponse]:
    return await user_service.list_users(db)


@router.post(
    "/{user_id}/exercises",
    response_model=ExerciseResponse,
    responses={
        400: _plain_text("Missing description or duration"),
        404: _plain_text("User not found"),
        500: _plain_text("Unparseable duration/date or store failure"),
    },
    summary="Log an exercise for a user",
)
async def create_exercise(
    user_id: str,
    payload: ExerciseCreate = Depends(request_body(ExerciseCreate)),
    db: AsyncSession = Depends(get_db_session),
) -> ExerciseResponse:
    """
    Log an exercise. `date` is optional (ISO 8601); when omitted the
    exercise is dated today (UTC).
    """
    return await exercise_service.create_exercise(db, user_id, payload)


@router.get(
    "/{user_id}/logs",
    response_model=LogResponse,
    responses={
        400: _plain_text("limit is not an integer"),
        404: _plain_text("User not found"),
        500: _plain_text("Unparseable date bound or store failure"),
    },
    summary="Read a user's exercise log",
)
async def get_log(
    user_id: str,
    date_from: Optional[str] = Query(
        default=None,
        alias="from",
        description="Only exercises on or after this date (ISO 8601)",
    ),
    date_to: Optional[str] = Query(
        default=None,
        alias="to",
        description="Only exercises on or before this date (ISO 8601)",
    ),
    limit: Optional[str] = Query(
        default=None,
        description="Maximum number of log entries; absent or 0 means all",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> LogResponse:
    """
    Both bounds are inclusive. `count` is the number of entries returned.
    Entry order is not guaranteed.
    """
    return await exercise_service.get_log(
        db,
        user_id,
        date_from=date_from,
        date_to=date_to,
        limit=limit,
    )
