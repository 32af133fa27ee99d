"""Parameters for generation requests."""

from dataclasses import dataclass

from .client import Client


@dataclass
class ProgramRequest:
    """Optional constraints on top of the client's profile."""

    weeks: int | None = None  # None lets the model pick 8-12 weeks
    notes: str = ""


@dataclass
class NutritionRequest:
    """Inputs for a nutrition plan."""

    goal: str
    weight: float  # kg
    height: float  # cm
    age: int
    gender: str
    activity_level: str

    @classmethod
    def from_client(cls, client: Client, activity_level: str = "moderate", **overrides) -> "NutritionRequest":
        """Fill missing values from the client profile.

        Raises:
            ValueError: weight or height is neither on file nor overridden
        """
        weight = overrides.get("weight") or client.weight
        height = overrides.get("height") or client.height
        if weight is None or height is None:
            raise ValueError("Weight and height are required for a nutrition plan")
        return cls(
            goal=overrides.get("goal") or client.goals.value,
            weight=float(weight),
            height=float(height),
            age=overrides.get("age") or client.age,
            gender=overrides.get("gender") or client.gender,
            activity_level=activity_level,
        )


@dataclass
class SwapRequest:
    """An exercise to replace and the constraints on its replacement."""

    original_exercise_name: str
    client_id: str
    muscle_group: str | None = None
    equipment: str | None = None
    injuries: str | None = None
