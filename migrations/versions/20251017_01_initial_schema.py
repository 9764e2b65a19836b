"""Initial fitness platform schema."""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20251017_01"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column(
            "trainer_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"], unique=False)
    op.create_index("ix_users_trainer_id", "users", ["trainer_id"], unique=False)

    op.create_table(
        "exercise_templates",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("target_muscle", sa.String(length=50), nullable=False),
        sa.Column("equipment", sa.String(length=50), nullable=False),
        sa.Column("instructions", sa.Text(), nullable=False),
        sa.Column("difficulty_level", sa.String(length=20), nullable=False),
        sa.Column("tips", sa.JSON(), nullable=False),
        sa.Column("video_url", sa.String(length=500), nullable=True),
        sa.Column(
            "created_by",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("is_custom", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_index("ix_exercise_templates_name", "exercise_templates", ["name"], unique=False)
    op.create_index("ix_exercise_templates_category", "exercise_templates", ["category"], unique=False)

    op.create_table(
        "trainings",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column(
            "trainee_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "trainer_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("scheduled_date", sa.DateTime(), nullable=False),
        sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.Column("difficulty", sa.String(length=20), nullable=False),
        sa.Column("estimated_duration", sa.Integer(), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("recurrence_group_id", sa.String(length=36), nullable=True),
        sa.Column("recurrence_index", sa.Integer(), nullable=True),
        sa.Column("total_recurrences", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_index("ix_trainings_trainee_id", "trainings", ["trainee_id"], unique=False)
    op.create_index("ix_trainings_trainer_id", "trainings", ["trainer_id"], unique=False)
    op.create_index("ix_trainings_scheduled_date", "trainings", ["scheduled_date"], unique=False)
    op.create_index("ix_trainings_recurrence_group_id", "trainings", ["recurrence_group_id"], unique=False)

    op.create_table(
        "training_exercises",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "training_id",
            sa.String(length=36),
            sa.ForeignKey("trainings.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("sets", sa.Integer(), nullable=False),
        sa.Column("reps", sa.Integer(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("actual_weight", sa.Float(), nullable=True),
        sa.Column("actual_reps", sa.Integer(), nullable=True),
        sa.Column("actual_sets", sa.JSON(), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("target_muscle", sa.String(length=50), nullable=False),
        sa.Column("equipment", sa.String(length=50), nullable=False),
        sa.Column("instructions", sa.Text(), nullable=False),
        sa.Column("rest_time_seconds", sa.Integer(), nullable=False),
    )
    op.create_index("ix_training_exercises_training_id", "training_exercises", ["training_id"], unique=False)

    op.create_table(
        "exercise_history",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("exercise_name", sa.String(length=200), nullable=False),
        sa.Column("trainee_id", sa.String(length=36), nullable=False),
        sa.Column("training_id", sa.String(length=36), nullable=False),
        sa.Column("completed_at", sa.DateTime(), nullable=False),
        sa.Column("actual_sets", sa.JSON(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
    )
    op.create_index("ix_exercise_history_training_id", "exercise_history", ["training_id"], unique=False)
    op.create_index(
        "ix_exercise_history_trainee_exercise",
        "exercise_history",
        ["trainee_id", "exercise_name"],
        unique=False,
    )

    op.create_table(
        "workout_templates",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("exercises", sa.JSON(), nullable=False),
        sa.Column("difficulty", sa.String(length=20), nullable=False),
        sa.Column("estimated_duration", sa.Integer(), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "created_by",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_index("ix_workout_templates_created_by", "workout_templates", ["created_by"], unique=False)

    op.create_table(
        "nutrition_plans",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "trainee_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "trainer_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("daily_calories", sa.Integer(), nullable=False),
        sa.Column("macros", sa.JSON(), nullable=False),
        sa.Column("meals", sa.JSON(), nullable=False),
        sa.Column("recipes", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_index("ix_nutrition_plans_trainee_id", "nutrition_plans", ["trainee_id"], unique=False)

    op.create_table(
        "nutrition_entries",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "trainee_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("consumed_foods", sa.JSON(), nullable=False),
        sa.Column("total_calories", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_index("ix_nutrition_entries_trainee_id", "nutrition_entries", ["trainee_id"], unique=False)
    op.create_index("ix_nutrition_entries_date", "nutrition_entries", ["date"], unique=False)

    op.create_table(
        "goals",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "trainee_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "trainer_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("target_value", sa.Float(), nullable=False),
        sa.Column("current_value", sa.Float(), nullable=False),
        sa.Column("unit", sa.String(length=20), nullable=False),
        sa.Column("deadline", sa.DateTime(), nullable=False),
        sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_index("ix_goals_trainee_id", "goals", ["trainee_id"], unique=False)
    op.create_index("ix_goals_trainer_id", "goals", ["trainer_id"], unique=False)

    op.create_table(
        "measurements",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "trainee_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=False),
        sa.Column("body_measurements", sa.JSON(), nullable=False),
    )
    op.create_index("ix_measurements_trainee_id", "measurements", ["trainee_id"], unique=False)
    op.create_index("ix_measurements_date", "measurements", ["date"], unique=False)

    op.create_table(
        "step_entries",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "trainee_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("steps", sa.Integer(), nullable=False),
        sa.Column("is_manual", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.UniqueConstraint("trainee_id", "date", name="uq_step_entries_trainee_date"),
    )
    op.create_index("ix_step_entries_trainee_id", "step_entries", ["trainee_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_step_entries_trainee_id", table_name="step_entries")
    op.drop_table("step_entries")
    op.drop_index("ix_measurements_date", table_name="measurements")
    op.drop_index("ix_measurements_trainee_id", table_name="measurements")
    op.drop_table("measurements")
    op.drop_index("ix_goals_trainer_id", table_name="goals")
    op.drop_index("ix_goals_trainee_id", table_name="goals")
    op.drop_table("goals")
    op.drop_index("ix_nutrition_entries_date", table_name="nutrition_entries")
    op.drop_index("ix_nutrition_entries_trainee_id", table_name="nutrition_entries")
    op.drop_table("nutrition_entries")
    op.drop_index("ix_nutrition_plans_trainee_id", table_name="nutrition_plans")
    op.drop_table("nutrition_plans")
    op.drop_index("ix_workout_templates_created_by", table_name="workout_templates")
    op.drop_table("workout_templates")
    op.drop_index("ix_exercise_history_trainee_exercise", table_name="exercise_history")
    op.drop_index("ix_exercise_history_training_id", table_name="exercise_history")
    op.drop_table("exercise_history")
    op.drop_index("ix_training_exercises_training_id", table_name="training_exercises")
    op.drop_table("training_exercises")
    op.drop_index("ix_trainings_recurrence_group_id", table_name="trainings")
    op.drop_index("ix_trainings_scheduled_date", table_name="trainings")
    op.drop_index("ix_trainings_trainer_id", table_name="trainings")
    op.drop_index("ix_trainings_trainee_id", table_name="trainings")
    op.drop_table("trainings")
    op.drop_index("ix_exercise_templates_category", table_name="exercise_templates")
    op.drop_index("ix_exercise_templates_name", table_name="exercise_templates")
    op.drop_table("exercise_templates")
    op.drop_index("ix_users_trainer_id", table_name="users")
    op.drop_index("ix_users_role", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
