"""
Exercise Tracker — Exercise Service
=====================================

What:  Business logic for logging exercises and reading a user's log.
How:   Each operation resolves the owning user first (UserNotFound → 404),
       then performs one store call and shapes the response.
Who:   Called by routes/users.py.

Flow (POST /api/users/{id}/exercises):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │  Lookup  │───▶│   Coerce    │───▶│   INSERT     │───▶│  Shape   │
    │  owner   │    │ dur + date  │    │  exercise    │    │ response │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────┘

The owner lookup and the insert are separate statements; nothing locks the
user row in between.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from exercise_tracker.exceptions import InternalFailure
from exercise_tracker.models.exercise import Exercise
from exercise_tracker.models.user import User
from exercise_tracker.schemas.exercise import (
    ExerciseCreate,
    ExerciseResponse,
    LogEntry,
    LogResponse,
)
from exercise_tracker.services.log_filter import LogFilter
from exercise_tracker.services.parsing import (
    coerce_duration,
    format_calendar_date,
    parse_calendar_date,
    today,
)
from exercise_tracker.services.user_service import user_service

logger = logging.getLogger(__name__)


class ExerciseService:

    async def create_exercise(
        self,
        db: AsyncSession,
        user_id: str,
        payload: ExerciseCreate,
    ) -> ExerciseResponse:
        """
        Log an exercise against an existing user.

        Duration is parsed permissively and truncated to whole minutes. A
        missing date means today (UTC); a date that does not parse is a
        failure, never replaced by a default.

        Raises:
            UserNotFound: user_id does not resolve
            InternalFailure: duration/date cannot be coerced, or the insert failed
        """
        user = await user_service.get_user(db, user_id)

        try:
            duration = coerce_duration(payload.duration)
            exercise_date = parse_calendar_date(payload.date) if payload.date else today()
        except ValueError as e:
            logger.warning(
                "Cannot store exercise for %s: duration=%r date=%r (%s)",
                user_id, payload.duration, payload.date, e,
            )
            raise InternalFailure(
                context={"duration": payload.duration, "date": payload.date},
            ) from e

        exercise = Exercise(
            user_id=user.id,
            description=payload.description,
            duration=duration,
            date=exercise_date,
        )
        db.add(exercise)
        try:
            await db.flush()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error creating exercise for %s: %s", user_id, str(e))
            raise InternalFailure(context={"error_type": type(e).__name__}) from e

        logger.info("Exercise logged for user %s on %s", user.id, exercise_date)
        return ExerciseResponse(
            id=user.id,
            username=user.username,
            date=format_calendar_date(exercise.date),
            duration=exercise.duration,
            description=exercise.description,
        )

    async def get_log(
        self,
        db: AsyncSession,
        user_id: str,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> LogResponse:
        """
        Return a user's exercises, filtered by inclusive date bounds and
        capped by limit. The user is resolved before the query string is
        parsed, so an unknown user is always a 404.

        Raises:
            UserNotFound: user_id does not resolve
            InternalFailure: a date bound does not parse, or the query failed
            ClientInputError: limit is not an integer
        """
        user = await user_service.get_user(db, user_id)
        log_filter = LogFilter.from_query(date_from, date_to, limit)
        exercises = await self._query_log(db, user, log_filter)

        log = [
            LogEntry(
                description=exercise.description,
                duration=exercise.duration,
                date=format_calendar_date(exercise.date),
            )
            for exercise in exercises
        ]
        return LogResponse(id=user.id, username=user.username, count=len(log), log=log)

    async def _query_log(self, db: AsyncSession, user: User, log_filter: LogFilter):
        stmt = log_filter.apply(select(Exercise).where(Exercise.user_id == user.id))
        try:
            result = await db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error reading log for %s: %s", user.id, str(e), exc_info=True)
            raise InternalFailure(context={"user_id": str(user.id)}) from e


exercise_service = ExerciseService()
