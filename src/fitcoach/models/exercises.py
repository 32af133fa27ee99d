"""Exercise substitution models."""

from dataclasses import dataclass


@dataclass
class ExerciseAlternative:
    """A suggested replacement for an exercise."""

    name: str
    muscle_group: str
    equipment: str
    difficulty: str
    reason: str
    description: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "muscle_group": self.muscle_group,
            "equipment": self.equipment,
            "difficulty": self.difficulty,
            "reason": self.reason,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseAlternative":
        """Create from dictionary."""
        return cls(
            name=str(data["name"]),
            muscle_group=str(data["muscle_group"]),
            equipment=str(data["equipment"]),
            difficulty=str(data["difficulty"]),
            reason=str(data["reason"]),
            description=data.get("description") or "",
        )


def parse_alternatives(document: dict) -> list[ExerciseAlternative]:
    """Parse a generated ``{"alternatives": [...]}`` document."""
    alternatives = [ExerciseAlternative.from_dict(a) for a in document["alternatives"]]
    if not alternatives:
        raise ValueError("No alternatives returned")
    return alternatives
