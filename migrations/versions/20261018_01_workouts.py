"""Workouts and exercises."""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20261018_01"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "workouts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("is_shared", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=True,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    )
    op.create_index("ix_workouts_user_id", "workouts", ["user_id"], unique=False)
    op.create_index("ix_workouts_user_id_date", "workouts", ["user_id", "date"], unique=False)

    op.create_table(
        "exercises",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "workout_id",
            sa.Uuid(),
            sa.ForeignKey("workouts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("sets", sa.Integer(), nullable=False),
        sa.Column("reps", sa.Integer(), nullable=False),
        sa.Column("weight", sa.Numeric(precision=10, scale=2), nullable=False),
    )
    op.create_index("ix_exercises_workout_id", "exercises", ["workout_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_exercises_workout_id", table_name="exercises")
    op.drop_table("exercises")
    op.drop_index("ix_workouts_user_id_date", table_name="workouts")
    op.drop_index("ix_workouts_user_id", table_name="workouts")
    op.drop_table("workouts")
