"""Database layer for fitcoach."""

from .engine import get_db_path, init_db
from .repositories import (
    ClientRepository,
    NutritionPlanRepository,
    ProgramRepository,
    ReadinessRepository,
    SessionRepository,
)

__all__ = [
    "ClientRepository",
    "get_db_path",
    "init_db",
    "NutritionPlanRepository",
    "ProgramRepository",
    "ReadinessRepository",
    "SessionRepository",
]
