"""
Exercise Tracker — Exercise SQLAlchemy Model
==============================================

What:  ORM model for the `exercises` table.
Who:   Used by ExerciseService for inserts and log queries, and by Alembic.

Table Design:
    - user_id references users.id; the service checks the owner exists
      before inserting, so the 404 never depends on the constraint
    - date is a calendar date (no time of day); inclusive range filters
      compare whole days
    - Index on (user_id, date) serves the log query: WHERE user_id = :id
      AND date BETWEEN :from AND :to
"""

import datetime
import uuid

from sqlalchemy import Date, ForeignKey, Index, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from exercise_tracker.database import Base


class Exercise(Base):
    """
    A single logged exercise, owned by exactly one User.

    Lifecycle: created by POST /api/users/{id}/exercises; immutable.
    """

    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Store-assigned unique identifier",
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=False,
        comment="Owning user",
    )

    description: Mapped[str] = mapped_column(Text, nullable=False)

    duration: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Duration in minutes",
    )

    date: Mapped[datetime.date] = mapped_column(
        Date,
        nullable=False,
        comment="Calendar date of the exercise (UTC)",
    )

    __table_args__ = (
        Index("idx_exercises_user_date", "user_id", "date"),
    )

    def __repr__(self) -> str:
        return (
            f"<Exercise(id={self.id}, user_id={self.user_id}, "
            f"duration={self.duration}, date='{self.date}')>"
        )
