"""Client profile data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ExperienceLevel(str, Enum):
    """Training experience level."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class TrainingGoal(str, Enum):
    """Primary training goal."""

    FAT_LOSS = "fat_loss"
    HYPERTROPHY = "hypertrophy"
    STRENGTH = "strength"
    REHAB = "rehab"
    SPORT_SPECIFIC = "sport_specific"


class EquipmentAccess(str, Enum):
    """Where and with what the client trains."""

    HOME_GYM = "home_gym"
    COMMERCIAL_GYM = "commercial_gym"
    DUMBBELLS_ONLY = "dumbbells_only"
    BODYWEIGHT = "bodyweight"


@dataclass
class Client:
    """A trainer's client."""

    trainer_id: str
    name: str
    age: int
    gender: str
    experience: ExperienceLevel
    goals: TrainingGoal
    training_frequency: int  # 2-6 days per week
    equipment: EquipmentAccess
    time_per_session: int = 60  # 45, 60 or 90 minutes
    height: int | None = None  # cm
    weight: float | None = None  # kg
    injuries: str | None = None
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "name": self.name,
            "age": self.age,
            "gender": self.gender,
            "height": self.height,
            "weight": self.weight,
            "experience": self.experience.value,
            "goals": self.goals.value,
            "training_frequency": self.training_frequency,
            "equipment": self.equipment.value,
            "injuries": self.injuries,
            "time_per_session": self.time_per_session,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        trainer_id: str,
        id: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "Client":
        """Create from dictionary."""
        return cls(
            id=id,
            trainer_id=trainer_id,
            name=data["name"],
            age=data["age"],
            gender=data["gender"],
            height=data.get("height"),
            weight=data.get("weight"),
            experience=ExperienceLevel(data["experience"]),
            goals=TrainingGoal(data["goals"]),
            training_frequency=data["training_frequency"],
            equipment=EquipmentAccess(data["equipment"]),
            injuries=data.get("injuries"),
            time_per_session=data.get("time_per_session", 60),
            created_at=created_at,
            updated_at=updated_at,
        )

    def get_summary(self) -> str:
        """Generate a summary for AI context."""
        summary = f"Client: {self.age} year old {self.gender}, {self.experience.value} level\n"
        summary += f"Goals: {self.goals.value}\n"
        summary += f"Training frequency: {self.training_frequency} days/week\n"
        summary += f"Equipment: {self.equipment.value}\n"
        summary += f"Injuries/limitations: {self.injuries or 'None'}\n"
        summary += f"Time per session: {self.time_per_session} minutes\n"

        if self.height:
            summary += f"Height: {self.height}cm\n"
        if self.weight:
            summary += f"Weight: {self.weight}kg\n"

        return summary
