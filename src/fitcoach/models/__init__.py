"""Data models for fitcoach."""

from .client import Client, EquipmentAccess, ExperienceLevel, TrainingGoal
from .exercises import ExerciseAlternative
from .nutrition import Meal, NutritionData, NutritionPlan
from .program import Program, ProgramData, ProgramExercise, ProgramWeek, Workout
from .readiness import (
    EnergyLevel,
    MuscleSoreness,
    ReadinessInput,
    ReadinessResult,
    ReadinessScore,
    StressLevel,
)
from .session import ExerciseLog, WorkoutSession

__all__ = [
    "Client",
    "EnergyLevel",
    "EquipmentAccess",
    "ExerciseAlternative",
    "ExerciseLog",
    "ExperienceLevel",
    "Meal",
    "MuscleSoreness",
    "NutritionData",
    "NutritionPlan",
    "Program",
    "ProgramData",
    "ProgramExercise",
    "ProgramWeek",
    "ReadinessInput",
    "ReadinessResult",
    "ReadinessScore",
    "StressLevel",
    "TrainingGoal",
    "Workout",
    "WorkoutSession",
]
