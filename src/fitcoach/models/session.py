"""Workout session logging models."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class ExerciseLog:
    """What the client actually did for one exercise."""

    session_id: str
    exercise_name: str
    sets_completed: int
    reps_completed: str  # e.g. "10,10,8"
    weight_used: str  # e.g. "60kg"
    rpe: int | None = None  # Rate of Perceived Exertion (1-10)
    notes: str | None = None
    id: str | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "session_id": self.session_id,
            "exercise_name": self.exercise_name,
            "sets_completed": self.sets_completed,
            "reps_completed": self.reps_completed,
            "weight_used": self.weight_used,
            "rpe": self.rpe,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class WorkoutSession:
    """A logged training session for one program day."""

    client_id: str
    program_id: str
    trainer_id: str
    session_date: datetime
    week_number: int
    day_name: str
    completed: bool = False
    notes: str | None = None
    exercise_logs: list[ExerciseLog] = field(default_factory=list)
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "client_id": self.client_id,
            "program_id": self.program_id,
            "session_date": self.session_date.isoformat(),
            "week_number": self.week_number,
            "day_name": self.day_name,
            "completed": self.completed,
            "notes": self.notes,
            "exercise_logs": [log.to_dict() for log in self.exercise_logs],
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
