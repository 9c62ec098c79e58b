"""
Exercise Tracker — User SQLAlchemy Model
==========================================

What:  ORM model for the `users` table.
Who:   Used by UserService and ExerciseService (owner lookups), and by Alembic.

Table Design:
    - UUID primary key assigned on insert
    - username carries a UNIQUE constraint; duplicate inserts surface as
      IntegrityError on flush and are translated to DuplicateUsername
"""

import uuid

from sqlalchemy import String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from exercise_tracker.database import Base


class User(Base):
    """
    An identity that exercises are logged against.

    Lifecycle: created by POST /api/users, never mutated, never deleted.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Store-assigned unique identifier",
    )

    username: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Unique display name",
    )

    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
