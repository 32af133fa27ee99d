"""Pytest configuration and fixtures."""

import asyncio
import copy
from pathlib import Path

import pytest

from fitcoach.agents.provider import GenerationPrompt
from fitcoach.db import init_db
from fitcoach.models.client import Client, EquipmentAccess, ExperienceLevel, TrainingGoal

TRAINER = "trainer-1"
OTHER_TRAINER = "trainer-2"

HANG = "hang"


class ScriptedProvider:
    """Generation provider double that plays back a list of outcomes.

    Each outcome is a document to return, an exception to raise, or
    ``"hang"`` to block until cancelled. The last outcome repeats.
    """

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls: list[GenerationPrompt] = []
        self.finished_hangs = 0

    async def generate(self, prompt: GenerationPrompt) -> dict:
        self.calls.append(prompt)
        outcome = self.outcomes[min(len(self.calls), len(self.outcomes)) - 1]
        if outcome == HANG:
            await asyncio.sleep(60)
            self.finished_hangs += 1
            return {}
        if isinstance(outcome, BaseException):
            raise outcome
        return copy.deepcopy(outcome)


class RecordingSleep:
    """Stand-in for asyncio.sleep that records delays without waiting."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def scripted_provider():
    """Factory for ScriptedProvider."""
    return ScriptedProvider


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
async def db_path(tmp_path: Path) -> Path:
    """Initialized temporary database."""
    path = tmp_path / "test.db"
    await init_db(path)
    return path


@pytest.fixture
def sample_client():
    """Create a sample client for testing."""
    return Client(
        trainer_id=TRAINER,
        name="Jordan Test",
        age=32,
        gender="female",
        experience=ExperienceLevel.INTERMEDIATE,
        goals=TrainingGoal.STRENGTH,
        training_frequency=4,
        equipment=EquipmentAccess.COMMERCIAL_GYM,
        time_per_session=60,
        height=170,
        weight=65.0,
        injuries="Left shoulder impingement",
    )


@pytest.fixture
def program_document():
    """A generated program document in the current schema."""
    squat = {
        "name": "Back Squat",
        "sets": 4,
        "reps": "6-8",
        "rest": 150,
        "tempo": "3-0-1-0",
        "notes": "Brace before descending",
    }
    row = {
        "name": "Chest Supported Row",
        "sets": 3,
        "reps": "10",
        "rest": 90,
        "tempo": "2-1-1-0",
        "notes": "Pause at the top",
    }
    return {
        "weeks_duration": 2,
        "split": "Upper/Lower",
        "weeks": [
            {
                "week_number": 1,
                "phase": "hypertrophy",
                "workouts": [
                    {"day": "Lower A", "exercises": [squat]},
                    {"day": "Upper A", "exercises": [row]},
                ],
            },
            {
                "week_number": 2,
                "phase": "strength",
                "workouts": [
                    {"day": "Lower A", "exercises": [squat]},
                    {"day": "Upper A", "exercises": [row]},
                ],
            },
        ],
        "exercises": [squat, row],
    }


@pytest.fixture
def nutrition_document():
    """A generated nutrition document in the current schema."""
    return {
        "calories": 2150,
        "protein": 140,
        "carbohydrates": 230,
        "fats": 70,
        "meal_suggestions": [
            {
                "name": "Greek yogurt bowl",
                "protein": 35,
                "carbs": 45,
                "fats": 10,
                "calories": 410,
                "ingredients": ["greek yogurt", "oats", "berries"],
            }
        ],
        "macro_breakdown": {
            "protein_percentage": 26,
            "carbs_percentage": 44,
            "fats_percentage": 30,
        },
    }


@pytest.fixture
def swap_document():
    return {
        "alternatives": [
            {
                "name": "Goblet Squat",
                "muscle_group": "quads",
                "equipment": "dumbbell",
                "difficulty": "beginner",
                "reason": "Upright torso with less spinal loading",
            },
            {
                "name": "Bulgarian Split Squat",
                "muscle_group": "quads",
                "equipment": "dumbbell",
                "difficulty": "intermediate",
                "reason": "Unilateral loading with a light total load",
                "description": "Rear foot elevated on a bench",
            },
        ]
    }
