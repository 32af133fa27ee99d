"""Nutrition plan data models."""

from dataclasses import dataclass, field, replace
from datetime import datetime

from .versioning import NUTRITION_SCHEMA_VERSION, upgrade_nutrition_document


@dataclass
class Meal:
    """A suggested meal with its macros."""

    name: str
    protein: int
    carbs: int
    fats: int
    calories: int
    ingredients: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "protein": self.protein,
            "carbs": self.carbs,
            "fats": self.fats,
            "calories": self.calories,
            "ingredients": self.ingredients,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Meal":
        """Create from dictionary."""
        return cls(
            name=str(data["name"]),
            protein=int(round(data["protein"])),
            carbs=int(round(data["carbs"])),
            fats=int(round(data["fats"])),
            calories=int(round(data["calories"])),
            ingredients=[str(i) for i in data.get("ingredients") or []],
        )


@dataclass
class MacroBreakdown:
    """Share of daily calories per macro, in percent."""

    protein_percentage: int
    carbs_percentage: int
    fats_percentage: int

    def to_dict(self) -> dict:
        return {
            "protein_percentage": self.protein_percentage,
            "carbs_percentage": self.carbs_percentage,
            "fats_percentage": self.fats_percentage,
        }


@dataclass
class NutritionData:
    """The generated nutrition plan document."""

    calories: int
    protein: int
    carbohydrates: int
    fats: int
    meal_suggestions: list[Meal] = field(default_factory=list)
    macro_breakdown: MacroBreakdown | None = None
    notes: str = ""

    def to_dict(self) -> dict:
        """Convert to a current-schema document."""
        return {
            "schema_version": NUTRITION_SCHEMA_VERSION,
            "calories": self.calories,
            "protein": self.protein,
            "carbohydrates": self.carbohydrates,
            "fats": self.fats,
            "meal_suggestions": [meal.to_dict() for meal in self.meal_suggestions],
            "macro_breakdown": self.macro_breakdown.to_dict() if self.macro_breakdown else None,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "NutritionData":
        """Create from a current-schema document.

        Raises KeyError, TypeError or ValueError if the document does not
        match the schema.
        """
        breakdown = data.get("macro_breakdown")
        plan = cls(
            calories=int(round(data["calories"])),
            protein=int(round(data["protein"])),
            carbohydrates=int(round(data["carbohydrates"])),
            fats=int(round(data["fats"])),
            meal_suggestions=[Meal.from_dict(m) for m in data.get("meal_suggestions") or []],
            macro_breakdown=(
                MacroBreakdown(
                    protein_percentage=int(round(breakdown["protein_percentage"])),
                    carbs_percentage=int(round(breakdown["carbs_percentage"])),
                    fats_percentage=int(round(breakdown["fats_percentage"])),
                )
                if breakdown
                else None
            ),
            notes=data.get("notes") or "",
        )
        if plan.calories <= 0:
            raise ValueError("Nutrition plan must have positive calories")
        return plan

    @classmethod
    def from_stored(cls, document: dict | str) -> "NutritionData":
        """Create from a stored document of any supported schema version."""
        return cls.from_dict(upgrade_nutrition_document(document))

    def with_targets(
        self,
        calories: int | None = None,
        protein: int | None = None,
        carbohydrates: int | None = None,
        fats: int | None = None,
        notes: str | None = None,
    ) -> "NutritionData":
        """Return a copy with the trainer's manual adjustments applied."""
        changes = {
            "calories": calories,
            "protein": protein,
            "carbohydrates": carbohydrates,
            "fats": fats,
            "notes": notes,
        }
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


@dataclass
class NutritionPlan:
    """A persisted nutrition plan artifact (one current plan per client)."""

    client_id: str
    trainer_id: str
    data: NutritionData
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "client_id": self.client_id,
            **{k: v for k, v in self.data.to_dict().items() if k != "schema_version"},
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def get_summary(self) -> str:
        """Generate a summary of the plan."""
        d = self.data
        summary = f"Daily target: {d.calories} kcal\n"
        summary += f"Protein: {d.protein}g, Carbs: {d.carbohydrates}g, Fats: {d.fats}g\n"
        if d.macro_breakdown:
            mb = d.macro_breakdown
            summary += (
                f"Split: {mb.protein_percentage}% protein / {mb.carbs_percentage}% carbs / "
                f"{mb.fats_percentage}% fats\n"
            )
        if d.meal_suggestions:
            summary += "\nMeal suggestions:\n"
            for meal in d.meal_suggestions:
                summary += (
                    f"  - {meal.name}: {meal.calories} kcal "
                    f"(P {meal.protein}g / C {meal.carbs}g / F {meal.fats}g)\n"
                )
        if d.notes:
            summary += f"\nNotes: {d.notes}\n"
        return summary
