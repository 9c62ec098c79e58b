"""
Exercise Tracker — User Service
=================================

What:  Business logic for users: creation, listing, and owner lookup.
How:   Works on the request's AsyncSession; translates SQLAlchemy failures into
       application exceptions at this boundary.
Who:   Called by routes/users.py and by ExerciseService (owner lookups).

Error translation:
    IntegrityError on insert   → DuplicateUsername (400)
    missing / malformed id     → UserNotFound (404)
    any other SQLAlchemyError  → InternalFailure (500)
"""

import logging
import uuid
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from exercise_tracker.exceptions import DuplicateUsername, InternalFailure, UserNotFound
from exercise_tracker.models.user import User
from exercise_tracker.schemas.user import UserResponse

logger = logging.getLogger(__name__)


class UserService:
    """
    Stateless; receives the session on every call.

    Responsibilities:
        - create_user(): insert, relying on the unique constraint for duplicates
        - list_users(): every user, store-native order
        - get_user(): resolve a path id to a User or raise UserNotFound
    """

    async def create_user(self, db: AsyncSession, username: str) -> UserResponse:
        """
        Insert a new user.

        Raises:
            DuplicateUsername: username already exists (no row is written)
            InternalFailure: the insert failed for any other reason
        """
        user = User(username=username)
        db.add(user)
        try:
            # Flush emits the INSERT so the unique constraint fires here
            await db.flush()
        except IntegrityError as e:
            await db.rollback()
            logger.info("Rejected duplicate username '%s'", username)
            raise DuplicateUsername(username) from e
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error creating user '%s': %s", username, str(e))
            raise InternalFailure(context={"error_type": type(e).__name__}) from e

        logger.info("User created: %s (%s)", user.id, username)
        return UserResponse.model_validate(user)

    async def list_users(self, db: AsyncSession) -> List[UserResponse]:
        """Return every user. Order is whatever the store yields."""
        try:
            result = await db.execute(select(User))
            users = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing users: %s", str(e), exc_info=True)
            raise InternalFailure(context={"error_type": type(e).__name__}) from e

        return [UserResponse.model_validate(user) for user in users]

    async def get_user(self, db: AsyncSession, user_id: str) -> User:
        """
        Resolve a user id from the URL.

        A string that is not a UUID cannot name any user, so it is reported
        the same way as a well-formed id with no matching row.

        Raises:
            UserNotFound: no such user
            InternalFailure: the lookup itself failed
        """
        try:
            key = uuid.UUID(user_id)
        except ValueError:
            raise UserNotFound(user_id) from None

        try:
            result = await db.execute(select(User).where(User.id == key))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching user %s: %s", user_id, str(e))
            raise InternalFailure(context={"user_id": user_id}) from e

        if user is None:
            raise UserNotFound(user_id)
        return user


user_service = UserService()
