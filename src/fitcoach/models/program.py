"""Workout program data models."""

from dataclasses import dataclass, field
from datetime import datetime

from .versioning import PROGRAM_SCHEMA_VERSION, upgrade_program_document


@dataclass
class ProgramExercise:
    """An exercise prescription within a workout."""

    name: str
    sets: int
    reps: str  # "8" or a range like "8-10"
    rest: int  # seconds
    tempo: str = ""  # e.g. "3-0-1-0"
    notes: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "sets": self.sets,
            "reps": self.reps,
            "rest": self.rest,
            "tempo": self.tempo,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProgramExercise":
        """Create from dictionary."""
        return cls(
            name=str(data["name"]),
            sets=int(data["sets"]),
            reps=str(data["reps"]),
            rest=int(data["rest"]),
            tempo=data.get("tempo") or "",
            notes=data.get("notes") or "",
        )


@dataclass
class Workout:
    """A single training day."""

    day: str
    exercises: list[ProgramExercise]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "day": self.day,
            "exercises": [ex.to_dict() for ex in self.exercises],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Workout":
        """Create from dictionary."""
        return cls(
            day=str(data["day"]),
            exercises=[ProgramExercise.from_dict(ex) for ex in data["exercises"]],
        )


@dataclass
class ProgramWeek:
    """A week in the program (for periodization)."""

    week_number: int
    phase: str  # hypertrophy, strength, power, deload, endurance
    workouts: list[Workout]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "week_number": self.week_number,
            "phase": self.phase,
            "workouts": [w.to_dict() for w in self.workouts],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProgramWeek":
        """Create from dictionary."""
        return cls(
            week_number=int(data["week_number"]),
            phase=str(data.get("phase", "")),
            workouts=[Workout.from_dict(w) for w in data["workouts"]],
        )


@dataclass
class ProgramData:
    """The generated program document."""

    split: str
    weeks_duration: int
    weeks: list[ProgramWeek]
    exercises: list[ProgramExercise] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to a current-schema document."""
        return {
            "schema_version": PROGRAM_SCHEMA_VERSION,
            "split": self.split,
            "weeks_duration": self.weeks_duration,
            "weeks": [week.to_dict() for week in self.weeks],
            "exercises": [ex.to_dict() for ex in self.exercises],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProgramData":
        """Create from a current-schema document.

        Raises KeyError, TypeError or ValueError if the document does not
        match the schema.
        """
        weeks = [ProgramWeek.from_dict(week) for week in data["weeks"]]
        if not weeks:
            raise ValueError("Program has no weeks")
        return cls(
            split=str(data["split"]),
            weeks_duration=int(data["weeks_duration"]),
            weeks=weeks,
            exercises=[ProgramExercise.from_dict(ex) for ex in data.get("exercises", [])],
        )

    @classmethod
    def from_stored(cls, document: dict | str) -> "ProgramData":
        """Create from a stored document of any supported schema version."""
        return cls.from_dict(upgrade_program_document(document))


@dataclass
class Program:
    """A persisted workout program artifact."""

    client_id: str
    trainer_id: str
    data: ProgramData
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def split(self) -> str:
        return self.data.split

    @property
    def weeks_duration(self) -> int:
        return self.data.weeks_duration

    @property
    def days_per_week(self) -> int:
        """Get the number of training days per week."""
        if not self.data.weeks:
            return 0
        return len(self.data.weeks[0].workouts)

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "client_id": self.client_id,
            "split": self.split,
            "weeks_duration": self.weeks_duration,
            "program": self.data.to_dict(),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def get_summary(self) -> str:
        """Generate a summary of the program."""
        summary = f"Split: {self.split}\n"
        summary += f"Duration: {self.weeks_duration} weeks, {self.days_per_week} days/week\n\n"

        for week in self.data.weeks:
            week_label = f"Week {week.week_number}"
            if week.phase:
                week_label += f" ({week.phase})"
            summary += f"{week_label}:\n"

            for workout in week.workouts:
                summary += f"  {workout.day}:\n"
                for ex in workout.exercises:
                    summary += f"    - {ex.name}: {ex.sets}x{ex.reps}, rest {ex.rest}s"
                    if ex.tempo:
                        summary += f", tempo {ex.tempo}"
                    summary += "\n"

            summary += "\n"

        return summary
