"""Interactive questionnaires for client profiles and readiness check-ins."""

from datetime import datetime, timezone

import questionary
from questionary import Style

from ..models.client import Client, EquipmentAccess, ExperienceLevel, TrainingGoal
from ..models.readiness import (
    EnergyLevel,
    MuscleSoreness,
    ReadinessInput,
    StressLevel,
)

# Custom style for questionnaire
custom_style = Style(
    [
        ("qmark", "fg:#673ab7 bold"),
        ("question", "bold"),
        ("answer", "fg:#f44336 bold"),
        ("pointer", "fg:#673ab7 bold"),
        ("highlighted", "fg:#673ab7 bold"),
        ("selected", "fg:#cc5454"),
        ("separator", "fg:#cc5454"),
        ("instruction", ""),
        ("text", ""),
    ]
)


def _optional_number(text: str | None, kind: type = float):
    try:
        return kind(text) if text else None
    except (TypeError, ValueError):
        return None


class ClientQuestionnaire:
    """Collects a new client's profile."""

    async def collect_client(self, trainer_id: str) -> Client:
        """Run the client intake questionnaire."""
        print("\n=== New Client ===\n")

        name = await questionary.text(
            "Client name:",
            validate=lambda text: bool(text.strip()) or "Name is required",
            style=custom_style,
        ).ask_async()

        age = await questionary.text(
            "Age:",
            validate=lambda text: text.isdigit() or "Enter a whole number",
            style=custom_style,
        ).ask_async()

        gender = await questionary.select(
            "Gender:",
            choices=["male", "female", "other"],
            style=custom_style,
        ).ask_async()

        experience = await questionary.select(
            "Training experience:",
            choices=[
                questionary.Choice("Beginner (less than 1 year)", ExperienceLevel.BEGINNER),
                questionary.Choice("Intermediate (1-3 years)", ExperienceLevel.INTERMEDIATE),
                questionary.Choice("Advanced (3+ years)", ExperienceLevel.ADVANCED),
            ],
            style=custom_style,
        ).ask_async()

        goals = await questionary.select(
            "Primary goal:",
            choices=[
                questionary.Choice("Fat loss", TrainingGoal.FAT_LOSS),
                questionary.Choice("Build muscle (hypertrophy)", TrainingGoal.HYPERTROPHY),
                questionary.Choice("Build strength", TrainingGoal.STRENGTH),
                questionary.Choice("Rehab", TrainingGoal.REHAB),
                questionary.Choice("Sport specific", TrainingGoal.SPORT_SPECIFIC),
            ],
            style=custom_style,
        ).ask_async()

        training_frequency = await questionary.select(
            "Training days per week:",
            choices=["2", "3", "4", "5", "6"],
            default="3",
            style=custom_style,
        ).ask_async()

        equipment = await questionary.select(
            "Equipment access:",
            choices=[
                questionary.Choice("Commercial gym", EquipmentAccess.COMMERCIAL_GYM),
                questionary.Choice("Home gym", EquipmentAccess.HOME_GYM),
                questionary.Choice("Dumbbells only", EquipmentAccess.DUMBBELLS_ONLY),
                questionary.Choice("Bodyweight", EquipmentAccess.BODYWEIGHT),
            ],
            style=custom_style,
        ).ask_async()

        time_per_session = await questionary.select(
            "Time per session:",
            choices=[
                questionary.Choice("45 minutes", 45),
                questionary.Choice("60 minutes", 60),
                questionary.Choice("90 minutes", 90),
            ],
            style=custom_style,
        ).ask_async()

        height = await questionary.text(
            "Height in cm (optional):",
            default="",
            style=custom_style,
        ).ask_async()

        weight = await questionary.text(
            "Weight in kg (optional):",
            default="",
            style=custom_style,
        ).ask_async()

        injuries = await questionary.text(
            "Injuries or limitations (optional):",
            default="",
            style=custom_style,
        ).ask_async()

        return Client(
            trainer_id=trainer_id,
            name=name.strip(),
            age=int(age),
            gender=gender,
            experience=experience,
            goals=goals,
            training_frequency=int(training_frequency),
            equipment=equipment,
            time_per_session=time_per_session,
            height=_optional_number(height, int),
            weight=_optional_number(weight, float),
            injuries=injuries or None,
        )


class CheckInQuestionnaire:
    """Collects a daily readiness check-in."""

    async def collect_check_in(
        self,
        date: datetime | None = None,
        sleep_hours: float | None = None,
        stress: str | None = None,
        soreness: str | None = None,
        energy: str | None = None,
    ) -> ReadinessInput:
        """Ask the readiness questions not already answered."""
        if sleep_hours is None:
            answer = await questionary.text(
                "Hours slept last night:",
                default="8",
                validate=lambda text: _optional_number(text) is not None or "Enter a number",
                style=custom_style,
            ).ask_async()
            sleep_hours = float(answer)

        if stress is None:
            stress = await questionary.select(
                "Stress level:",
                choices=[level.value for level in StressLevel],
                default=StressLevel.LOW.value,
                style=custom_style,
            ).ask_async()

        if soreness is None:
            soreness = await questionary.select(
                "Muscle soreness:",
                choices=[level.value for level in MuscleSoreness],
                default=MuscleSoreness.NONE.value,
                style=custom_style,
            ).ask_async()

        if energy is None:
            energy = await questionary.select(
                "Energy level:",
                choices=[level.value for level in EnergyLevel],
                default=EnergyLevel.HIGH.value,
                style=custom_style,
            ).ask_async()

        return ReadinessInput(
            date=date or datetime.now(timezone.utc),
            sleep_hours=sleep_hours,
            stress_level=stress,
            muscle_soreness=soreness,
            energy_level=energy,
        )
