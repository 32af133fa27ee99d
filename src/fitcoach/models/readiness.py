"""Readiness check-in data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class StressLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MuscleSoreness(str, Enum):
    NONE = "none"
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class EnergyLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class ReadinessInput:
    """One daily check-in before scoring.

    Levels are kept as plain strings so that unexpected values reach the
    scoring engine, which normalizes them instead of rejecting them.
    """

    date: datetime
    sleep_hours: float
    stress_level: str
    muscle_soreness: str
    energy_level: str

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "date": self.date.isoformat(),
            "sleep_hours": self.sleep_hours,
            "stress_level": self.stress_level,
            "muscle_soreness": self.muscle_soreness,
            "energy_level": self.energy_level,
        }


@dataclass(frozen=True)
class ReadinessResult:
    """Output of the scoring engine."""

    score: int
    recommendation: str


@dataclass(frozen=True)
class ReadinessScore:
    """A persisted, immutable readiness score."""

    client_id: str
    trainer_id: str
    date: datetime
    sleep_hours: float
    stress_level: str
    muscle_soreness: str
    energy_level: str
    score: int
    recommendation: str
    id: str | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "client_id": self.client_id,
            "date": self.date.isoformat(),
            "sleep_hours": self.sleep_hours,
            "stress_level": self.stress_level,
            "muscle_soreness": self.muscle_soreness,
            "energy_level": self.energy_level,
            "score": self.score,
            "recommendation": self.recommendation,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
