"""Create users and exercises tables

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates `users` (unique username) and `exercises` (owned by a user,
       calendar-date column, index on user_id + date for log queries).

Rollback: downgrade() drops both tables (all data lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.Uuid(),
            nullable=False,
            comment="Store-assigned unique identifier",
        ),
        sa.Column(
            "username",
            sa.String(255),
            nullable=False,
            comment="Unique display name",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_users_username"),
    )

    op.create_table(
        "exercises",
        sa.Column(
            "id",
            sa.Uuid(),
            nullable=False,
            comment="Store-assigned unique identifier",
        ),
        sa.Column("user_id", sa.Uuid(), nullable=False, comment="Owning user"),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False, comment="Duration in minutes"),
        sa.Column("date", sa.Date(), nullable=False, comment="Calendar date of the exercise (UTC)"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index("idx_exercises_user_date", "exercises", ["user_id", "date"])


def downgrade() -> None:
    op.drop_index("idx_exercises_user_date", table_name="exercises")
    op.drop_table("exercises")
    op.drop_table("users")
