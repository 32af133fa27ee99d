"""Request bodies for the JSON API."""

from datetime import datetime

from pydantic import BaseModel, Field

from ..models.client import EquipmentAccess, ExperienceLevel, TrainingGoal


class ClientBody(BaseModel):
    name: str = Field(min_length=1)
    age: int = Field(ge=0, le=120)
    gender: str
    experience: ExperienceLevel
    goals: TrainingGoal
    training_frequency: int = Field(ge=2, le=6)
    equipment: EquipmentAccess
    time_per_session: int = Field(default=60, gt=0)
    height: int | None = Field(default=None, gt=0)
    weight: float | None = Field(default=None, gt=0)
    injuries: str | None = None


class CheckInBody(BaseModel):
    """Levels are free text; unknown values score as no deduction."""

    date: datetime | None = None
    sleep_hours: float = Field(ge=0, allow_inf_nan=False)
    stress_level: str
    muscle_soreness: str
    energy_level: str


class ProgramGenerateBody(BaseModel):
    weeks: int | None = Field(default=None, ge=4, le=16)
    notes: str = ""


class NutritionGenerateBody(BaseModel):
    activity_level: str = "moderate"
    goal: str | None = None
    weight: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    age: int | None = Field(default=None, ge=0)
    gender: str | None = None


class NutritionUpdateBody(BaseModel):
    calories: int | None = Field(default=None, gt=0)
    protein: int | None = Field(default=None, ge=0)
    carbohydrates: int | None = Field(default=None, ge=0)
    fats: int | None = Field(default=None, ge=0)
    notes: str | None = None


class SwapBody(BaseModel):
    original_exercise_name: str = Field(min_length=1)
    client_id: str
    muscle_group: str | None = None
    equipment: str | None = None
    injuries: str | None = None


class SessionBody(BaseModel):
    program_id: str
    week_number: int = Field(ge=1)
    day_name: str
    session_date: datetime | None = None
    notes: str | None = None


class SessionUpdateBody(BaseModel):
    completed: bool | None = None
    notes: str | None = None


class ExerciseLogBody(BaseModel):
    exercise_name: str = Field(min_length=1)
    sets_completed: int = Field(ge=0)
    reps_completed: str
    weight_used: str
    rpe: int | None = Field(default=None, ge=1, le=10)
    notes: str | None = None
