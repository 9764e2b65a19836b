"""SQLAlchemy ORM models for the platform's volatile data store."""
import enum
import uuid
import datetime as dt
from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitness_platform.database import Base


def new_id() -> str:
    return str(uuid.uuid4())


class UserRole(str, enum.Enum):
    admin = "admin"
    trainer = "trainer"
    trainee = "trainee"


class GoalType(str, enum.Enum):
    weight = "weight"
    measurement = "measurement"
    performance = "performance"


class User(Base):
    """Platform account for an admin, trainer or trainee."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False, index=True)
    role: Mapped[UserRole] = mapped_column(Enum(UserRole, native_enum=False, length=20), nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Only set for trainees
    trainer_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    trainer: Mapped["User | None"] = relationship("User", remote_side=[id], back_populates="trainees")
    trainees: Mapped[list["User"]] = relationship("User", back_populates="trainer")

    @property
    def trainee_ids(self) -> list[str]:
        return [trainee.id for trainee in self.trainees]


class ExerciseTemplate(Base):
    """Exercise library entry, either system-provided or a trainer's custom exercise."""

    __tablename__ = "exercise_templates"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)  # strength, cardio, flexibility
    target_muscle: Mapped[str] = mapped_column(String(50), nullable=False)
    equipment: Mapped[str] = mapped_column(String(50), nullable=False)
    instructions: Mapped[str] = mapped_column(Text, nullable=False, default="")
    difficulty_level: Mapped[str] = mapped_column(String(20), nullable=False)  # beginner, intermediate, advanced
    tips: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    video_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_by: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    is_custom: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class Training(Base):
    """A scheduled workout assigned to one trainee by one trainer."""

    __tablename__ = "trainings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    trainee_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    trainer_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    scheduled_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)

    # Completion tracking
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    difficulty: Mapped[str] = mapped_column(String(20), default="beginner", nullable=False)
    estimated_duration: Mapped[int] = mapped_column(Integer, default=60, nullable=False)  # minutes
    category: Mapped[str] = mapped_column(String(50), default="strength", nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Recurrence: every occurrence of a series shares the group id
    recurrence_group_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    recurrence_index: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 0-based
    total_recurrences: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    exercises: Mapped[list["TrainingExercise"]] = relationship(
        "TrainingExercise",
        back_populates="training",
        cascade="all, delete-orphan",
        order_by="TrainingExercise.position",
    )
    trainee: Mapped["User"] = relationship("User", foreign_keys=[trainee_id])

    @property
    def is_recurring(self) -> bool:
        return self.recurrence_group_id is not None

    @property
    def recurrence_display_text(self) -> str:
        if not self.is_recurring:
            return ""
        return f"{(self.recurrence_index or 0) + 1} of {self.total_recurrences or 1}"


class TrainingExercise(Base):
    """Exercise as planned (and later performed) within one training."""

    __tablename__ = "training_exercises"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    training_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("trainings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Plan
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    sets: Mapped[int] = mapped_column(Integer, nullable=False)
    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)  # kg, null for bodyweight
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Performance
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    actual_weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    actual_reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    actual_sets: Mapped[list] = mapped_column(JSON, nullable=False, default=list)  # [{"reps": int, "kg": float}]

    # Metadata copied from the library template
    category: Mapped[str] = mapped_column(String(50), default="strength", nullable=False)
    target_muscle: Mapped[str] = mapped_column(String(50), default="general", nullable=False)
    equipment: Mapped[str] = mapped_column(String(50), default="bodyweight", nullable=False)
    instructions: Mapped[str] = mapped_column(Text, default="", nullable=False)
    rest_time_seconds: Mapped[int] = mapped_column(Integer, default=60, nullable=False)

    training: Mapped["Training"] = relationship("Training", back_populates="exercises")


class ExerciseHistoryEntry(Base):
    """Performance record of one exercise from one completed training."""

    __tablename__ = "exercise_history"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    exercise_name: Mapped[str] = mapped_column(String(200), nullable=False)
    trainee_id: Mapped[str] = mapped_column(String(36), nullable=False)
    # Kept as plain ids so history outlives deleted trainings
    training_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    completed_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    actual_sets: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_exercise_history_trainee_exercise", "trainee_id", "exercise_name"),
    )

    @property
    def max_weight(self) -> float:
        return max((float(s["kg"]) for s in self.actual_sets), default=0.0)

    @property
    def max_reps(self) -> int:
        return max((int(s["reps"]) for s in self.actual_sets), default=0)

    @property
    def total_volume(self) -> float:
        return sum(float(s["kg"]) * int(s["reps"]) for s in self.actual_sets)

    @property
    def total_reps(self) -> int:
        return sum(int(s["reps"]) for s in self.actual_sets)


class WorkoutTemplate(Base):
    """Reusable training program a trainer can instantiate for trainees."""

    __tablename__ = "workout_templates"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # Snapshot of exercise-template payloads, each with its own id
    exercises: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    difficulty: Mapped[str] = mapped_column(String(20), default="beginner", nullable=False)
    estimated_duration: Mapped[int] = mapped_column(Integer, default=60, nullable=False)
    category: Mapped[str] = mapped_column(String(50), default="strength", nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class NutritionPlan(Base):
    """Meal plan a trainer assigns to a trainee."""

    __tablename__ = "nutrition_plans"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    trainee_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    trainer_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    daily_calories: Mapped[int] = mapped_column(Integer, nullable=False)
    macros: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)  # {"protein": g, "carbs": g, "fat": g}
    meals: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    recipes: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class NutritionEntry(Base):
    """Foods a trainee logged for one calendar day."""

    __tablename__ = "nutrition_entries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    trainee_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    consumed_foods: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    total_calories: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class Goal(Base):
    """Target a trainer sets for a trainee."""

    __tablename__ = "goals"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    trainee_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    trainer_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[GoalType] = mapped_column(Enum(GoalType, native_enum=False, length=20), nullable=False)
    target_value: Mapped[float] = mapped_column(Float, nullable=False)
    current_value: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    unit: Mapped[str] = mapped_column(String(20), nullable=False)
    deadline: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    @property
    def progress_percentage(self) -> float:
        if self.target_value == 0:
            return 0.0
        return min(max(self.current_value / self.target_value * 100, 0.0), 100.0)


class Measurement(Base):
    """Body weight and circumference measurements, at most one per trainee per day."""

    __tablename__ = "measurements"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    trainee_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    weight: Mapped[float] = mapped_column(Float, nullable=False)  # kg
    body_measurements: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)  # cm per body part


class StepEntry(Base):
    """Daily step count."""

    __tablename__ = "step_entries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    trainee_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    steps: Mapped[int] = mapped_column(Integer, nullable=False)
    is_manual: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    __table_args__ = (
        UniqueConstraint("trainee_id", "date", name="uq_step_entries_trainee_date"),
    )
