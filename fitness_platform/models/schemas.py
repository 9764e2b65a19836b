"""Pydantic models describing API payloads."""
import enum
import datetime as dt
from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field, field_validator

from fitness_platform.models.database_models import GoalType, UserRole

EMAIL_PATTERN = r"^[\w\-\.]+@([\w-]+\.)+[\w-]{2,4}$"


def _as_naive_utc(value: datetime) -> datetime:
    # Stored timestamps are naive UTC
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


UtcDateTime = Annotated[datetime, AfterValidator(_as_naive_utc)]


# User Schemas
class UserBase(BaseModel):
    """Base schema for platform users."""

    name: str = Field(min_length=2, max_length=200)
    email: str = Field(pattern=EMAIL_PATTERN)

    @field_validator("name", "email", mode="before")
    @classmethod
    def strip_whitespace(cls, value):
        return value.strip() if isinstance(value, str) else value


class UserCreate(UserBase):
    """Schema for an admin creating a user of any role."""

    password: str = Field(min_length=6)
    role: UserRole
    trainer_id: str | None = None


class RegisterRequest(UserBase):
    """Schema for self-service registration."""

    password: str = Field(min_length=6)
    role: UserRole = UserRole.trainee


class UserUpdate(BaseModel):
    """Schema for an admin editing a user. Omitted fields keep their value."""

    name: str | None = Field(default=None, min_length=2, max_length=200)
    email: str | None = Field(default=None, pattern=EMAIL_PATTERN)
    password: str | None = None
    role: UserRole | None = None
    trainer_id: str | None = None

    @field_validator("name", "email", mode="before")
    @classmethod
    def strip_whitespace(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str | None) -> str | None:
        # An empty password means "keep the current one"
        if value and len(value) < 6:
            raise ValueError("Password must be at least 6 characters")
        return value or None


class UserResponse(BaseModel):
    """Schema for user API response."""

    id: str
    name: str
    email: str
    role: UserRole
    trainer_id: str | None = None
    trainee_ids: list[str] = []
    created_at: datetime

    class Config:
        from_attributes = True


class TrainerAssignment(BaseModel):
    """Schema for moving a trainee to a trainer; ``None`` unassigns."""

    trainer_id: str | None = None


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    """Schema returned after a successful login or registration."""

    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserResponse


# Exercise Library Schemas
class ExerciseTemplateBase(BaseModel):
    """Base schema for exercise library entries."""

    name: str = Field(min_length=1, max_length=200)
    category: str = "strength"
    target_muscle: str = "general"
    equipment: str = "bodyweight"
    instructions: str = ""
    difficulty_level: str = "beginner"
    tips: list[str] = []
    video_url: str | None = None


class ExerciseTemplateCreate(ExerciseTemplateBase):
    """Schema for a trainer adding a custom exercise."""


class ExerciseTemplateResponse(ExerciseTemplateBase):
    """Schema for exercise library API response."""

    id: str
    created_by: str | None = None
    is_custom: bool

    class Config:
        from_attributes = True


# Training Schemas
class ActualSet(BaseModel):
    """Reps and load of one performed set."""

    reps: int = Field(ge=0)
    kg: float = Field(default=0.0, ge=0)


class ExerciseIn(BaseModel):
    """Exercise as configured for a workout, optionally derived from a library entry."""

    template_id: str | None = Field(
        default=None,
        description="Exercise library id; when set, metadata is copied from the library entry.",
    )
    name: str | None = None
    sets: int = Field(default=3, ge=1, le=50)
    reps: int = Field(default=10, ge=0, le=1000)
    weight: float | None = Field(default=None, ge=0)
    notes: str | None = None
    category: str = "strength"
    target_muscle: str = "general"
    equipment: str = "bodyweight"
    instructions: str = ""
    rest_time_seconds: int = Field(default=60, ge=0)


class ExerciseResponse(BaseModel):
    """Schema for an exercise within a training."""

    id: str
    name: str
    sets: int
    reps: int
    weight: float | None = None
    notes: str | None = None
    is_completed: bool
    actual_weight: float | None = None
    actual_reps: int | None = None
    actual_sets: list[ActualSet] = []
    category: str
    target_muscle: str
    equipment: str
    instructions: str
    rest_time_seconds: int

    class Config:
        from_attributes = True


class TrainingBase(BaseModel):
    """Base schema for trainings."""

    name: str = Field(min_length=1, max_length=200)
    description: str = ""
    scheduled_date: UtcDateTime
    difficulty: str = "beginner"
    estimated_duration: int = Field(default=60, ge=1, le=600)
    category: str = "strength"
    notes: str | None = None


class TrainingCreate(TrainingBase):
    """Schema for creating a single, non-recurring training."""

    trainee_id: str
    exercises: list[ExerciseIn] = []


class TrainingUpdate(BaseModel):
    """Schema for editing a training or its whole recurrence group."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    scheduled_date: UtcDateTime | None = None
    difficulty: str | None = None
    estimated_duration: int | None = Field(default=None, ge=1, le=600)
    category: str | None = None
    notes: str | None = None
    exercises: list[ExerciseIn] | None = None


class TrainingResponse(TrainingBase):
    """Schema for training API response."""

    id: str
    trainee_id: str
    trainer_id: str | None = None
    exercises: list[ExerciseResponse] = []
    is_completed: bool
    completed_at: datetime | None = None
    recurrence_group_id: str | None = None
    recurrence_index: int | None = None
    total_recurrences: int | None = None
    is_recurring: bool
    recurrence_display_text: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ExercisePerformance(BaseModel):
    """Actual sets a trainee performed for one exercise."""

    exercise_id: str
    actual_sets: list[ActualSet] = []
    notes: str | None = None


class TrainingCompletion(BaseModel):
    """Schema for marking a training as complete."""

    exercises: list[ExercisePerformance] = []
    completed_at: UtcDateTime | None = None


class ChangeScope(str, enum.Enum):
    """Whether an edit or deletion targets one occurrence or its whole series."""

    this = "this"
    all = "all"


class DeletionResult(BaseModel):
    deleted_ids: list[str]


# Workout Creation Wizard Schemas
class RecurrenceFrequency(str, enum.Enum):
    none = "none"
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"


class WorkoutDraft(BaseModel):
    """Everything the workout creation wizard collects across its steps."""

    name: str = ""
    description: str = ""
    category: str = "strength"
    difficulty: str = "beginner"
    estimated_duration: int = Field(default=30, ge=1, le=600)
    notes: str | None = None
    trainee_ids: list[str] = []
    scheduled_date: UtcDateTime | None = Field(
        default=None,
        description="First occurrence; defaults to this time tomorrow.",
    )
    exercises: list[ExerciseIn] = []
    frequency: RecurrenceFrequency = RecurrenceFrequency.none
    count: int = Field(default=1, ge=1, le=52)


class WizardValidation(BaseModel):
    """Result of checking a draft against the wizard steps."""

    valid: bool
    failed_step: int | None = None
    step_title: str | None = None
    errors: list[str] = []


class WorkoutCreationResult(BaseModel):
    total_created: int
    trainings: list[TrainingResponse]


# Workout Template Schemas
class TemplateExercise(ExerciseTemplateBase):
    """Exercise-library payload embedded in a workout template."""

    id: str | None = None


class ExerciseOverride(BaseModel):
    sets: int | None = Field(default=None, ge=1)
    reps: int | None = Field(default=None, ge=0)
    weight: float | None = Field(default=None, ge=0)
    notes: str | None = None
    rest_time_seconds: int | None = Field(default=None, ge=0)


class WorkoutTemplateBase(BaseModel):
    """Base schema for workout templates."""

    name: str = Field(min_length=1, max_length=200)
    description: str = ""
    exercises: list[TemplateExercise] = []
    difficulty: str = "beginner"
    estimated_duration: int = Field(default=60, ge=1, le=600)
    category: str = "strength"
    notes: str | None = None
    is_public: bool = False
    tags: list[str] = []


class WorkoutTemplateCreate(WorkoutTemplateBase):
    """Schema for creating or replacing a workout template."""


class WorkoutTemplateResponse(WorkoutTemplateBase):
    """Schema for workout template API response."""

    id: str
    created_by: str
    created_at: datetime

    class Config:
        from_attributes = True


class TemplateInstantiation(BaseModel):
    """Schema for turning a template into a training for a trainee."""

    trainee_id: str
    scheduled_date: UtcDateTime
    exercise_overrides: dict[str, ExerciseOverride] = {}


# Exercise History & Progress Schemas
class HistoryEntryResponse(BaseModel):
    id: str
    exercise_name: str
    trainee_id: str
    training_id: str
    completed_at: datetime
    actual_sets: list[ActualSet]
    notes: str | None = None
    max_weight: float
    max_reps: int
    total_volume: float
    total_reps: int

    class Config:
        from_attributes = True


class ExerciseStatsResponse(BaseModel):
    total_sessions: int
    max_weight: float
    max_reps: int
    average_volume: float
    last_performed: datetime | None = None
    first_performed: datetime | None = None


class ProgressComparisonResponse(BaseModel):
    exercise_name: str
    status: str  # improved, new, same
    previous: HistoryEntryResponse | None = None
    current: list[ActualSet]
    current_date: datetime
    weight_progress: float
    reps_progress: int
    volume_progress: float
    weight_progress_percentage: float
    has_improved: bool
    progress_description: str


class ProgressReportResponse(BaseModel):
    training_id: str
    training_name: str
    trainee_id: str
    trainee_name: str
    completed_at: datetime
    exercise_comparisons: list[ProgressComparisonResponse]
    total_exercises: int
    exercises_with_improvement: int
    improvement_percentage: float
    total_volume_increase: float
    overall_progress_summary: str


# Nutrition Schemas
class FoodItem(BaseModel):
    name: str = Field(min_length=1)
    quantity: float = Field(ge=0)
    unit: str
    calories: int = Field(ge=0)


class Meal(BaseModel):
    id: str | None = None
    name: str
    foods: list[FoodItem] = []
    calories: int = Field(default=0, ge=0)


class Recipe(BaseModel):
    id: str | None = None
    name: str
    description: str = ""
    ingredients: list[str] = []
    instructions: list[str] = []
    calories: int = Field(default=0, ge=0)
    prep_time_minutes: int = Field(default=0, ge=0)


class NutritionPlanCreate(BaseModel):
    """Schema for a trainer assigning a nutrition plan."""

    trainee_id: str
    name: str = Field(min_length=1, max_length=200)
    daily_calories: int = Field(gt=0)
    macros: dict[str, int] = {}
    meals: list[Meal] = []
    recipes: list[Recipe] = []


class NutritionPlanResponse(BaseModel):
    id: str
    trainee_id: str
    trainer_id: str | None = None
    name: str
    daily_calories: int
    macros: dict[str, int]
    meals: list[Meal]
    recipes: list[Recipe]
    created_at: datetime

    class Config:
        from_attributes = True


class NutritionEntryCreate(BaseModel):
    """Schema for a trainee logging food."""

    date: dt.date | None = None
    consumed_foods: list[FoodItem] = Field(min_length=1)


class NutritionEntryResponse(BaseModel):
    id: str
    trainee_id: str
    date: dt.date
    consumed_foods: list[FoodItem]
    total_calories: int

    class Config:
        from_attributes = True


class DailyNutritionSummary(BaseModel):
    date: dt.date
    consumed_calories: int
    target_calories: int | None = None
    remaining_calories: int | None = None
    entries: list[NutritionEntryResponse]


# Goal Schemas
class GoalCreate(BaseModel):
    trainee_id: str
    name: str = Field(min_length=1, max_length=200)
    type: GoalType
    target_value: float
    current_value: float = 0.0
    unit: str = Field(min_length=1, max_length=20)
    deadline: UtcDateTime


class GoalUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    type: GoalType | None = None
    target_value: float | None = None
    current_value: float | None = None
    unit: str | None = Field(default=None, min_length=1, max_length=20)
    deadline: UtcDateTime | None = None
    is_completed: bool | None = None


class GoalProgressUpdate(BaseModel):
    current_value: float


class GoalResponse(BaseModel):
    id: str
    trainee_id: str
    trainer_id: str | None = None
    name: str
    type: GoalType
    target_value: float
    current_value: float
    unit: str
    deadline: datetime
    is_completed: bool
    progress_percentage: float
    created_at: datetime

    class Config:
        from_attributes = True


# Measurement Schemas
class MeasurementCreate(BaseModel):
    weight: float = Field(gt=0, description="Body weight in kg")
    body_measurements: dict[str, float] = {}


class BodyMeasurementsUpdate(BaseModel):
    body_measurements: dict[str, float]


class MeasurementResponse(BaseModel):
    id: str
    trainee_id: str
    date: datetime
    weight: float
    body_measurements: dict[str, float]

    class Config:
        from_attributes = True


class LatestWeightResponse(BaseModel):
    trainee_id: str
    weight: float | None = None


# Steps Schemas
class StepsLog(BaseModel):
    date: dt.date
    steps: int = Field(ge=0, le=200_000)


class StepEntryResponse(BaseModel):
    id: str
    trainee_id: str
    date: dt.date
    steps: int
    is_manual: bool

    class Config:
        from_attributes = True


# Dashboard Schemas
class AdminDashboard(BaseModel):
    user_counts: dict[str, int]
    users: list[UserResponse]


class TrainerDashboard(BaseModel):
    trainer: UserResponse
    trainees: list[UserResponse]
    upcoming_trainings: list[TrainingResponse]
    recently_completed: list[TrainingResponse]
    goals: list[GoalResponse]


class TraineeDashboard(BaseModel):
    trainee: UserResponse
    upcoming_trainings: list[TrainingResponse]
    completed_trainings: list[TrainingResponse]
    goals: list[GoalResponse]
    latest_weight: float | None = None
    today_steps: int | None = None
    nutrition_plans: list[NutritionPlanResponse]
