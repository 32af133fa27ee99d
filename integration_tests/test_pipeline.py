"""Integration tests for the full generation pipeline.

These tests call the live Anthropic API and are skipped unless
FITCOACH_ANTHROPIC_API_KEY is set.
"""

import os

import pytest

from fitcoach.agents.orchestrator import GenerationOrchestrator, GenerationPolicy
from fitcoach.agents.prompts import build_nutrition_prompt, build_program_prompt, build_swap_prompt
from fitcoach.agents.provider import AnthropicProvider
from fitcoach.models.client import Client, EquipmentAccess, ExperienceLevel, TrainingGoal
from fitcoach.models.exercises import parse_alternatives
from fitcoach.models.nutrition import NutritionData
from fitcoach.models.program import ProgramData
from fitcoach.models.requests import NutritionRequest, ProgramRequest, SwapRequest

API_KEY = os.environ.get("FITCOACH_ANTHROPIC_API_KEY")

pytestmark = pytest.mark.skipif(not API_KEY, reason="FITCOACH_ANTHROPIC_API_KEY not set")


@pytest.fixture
def client_profile():
    return Client(
        trainer_id="integration",
        name="Integration Client",
        age=29,
        gender="male",
        experience=ExperienceLevel.BEGINNER,
        goals=TrainingGoal.HYPERTROPHY,
        training_frequency=3,
        equipment=EquipmentAccess.DUMBBELLS_ONLY,
        time_per_session=45,
        height=180,
        weight=78.0,
        injuries="Lower back tightness",
        id="integration-client",
    )


@pytest.fixture
def orchestrator():
    provider = AnthropicProvider(api_key=API_KEY, model=os.environ.get("FITCOACH_MODEL", "claude-sonnet-4-5"))
    return GenerationOrchestrator(provider, GenerationPolicy())


class TestPipelineIntegration:
    """Integration tests against the live provider."""

    async def test_program_generation(self, orchestrator, client_profile):
        """Test a generated program parses into the current schema."""
        program = await orchestrator.generate(
            "program",
            client_profile.id,
            build_program_prompt(client_profile, ProgramRequest(weeks=4)),
            ProgramData.from_dict,
        )

        assert program.weeks
        assert all(week.workouts for week in program.weeks)
        for week in program.weeks:
            for workout in week.workouts:
                assert all(ex.sets > 0 for ex in workout.exercises)

    async def test_nutrition_generation(self, orchestrator, client_profile):
        plan = await orchestrator.generate(
            "nutrition_plan",
            client_profile.id,
            build_nutrition_prompt(NutritionRequest.from_client(client_profile)),
            NutritionData.from_dict,
        )

        assert 1200 <= plan.calories <= 5000
        assert plan.protein > 0

    async def test_exercise_swap(self, orchestrator, client_profile):
        alternatives = await orchestrator.generate(
            "exercise_swap",
            client_profile.id,
            build_swap_prompt(
                SwapRequest(
                    original_exercise_name="Barbell Back Squat",
                    client_id=client_profile.id,
                    equipment="dumbbells",
                    injuries=client_profile.injuries,
                )
            ),
            parse_alternatives,
        )

        assert 1 <= len(alternatives) <= 10
        assert all(a.reason for a in alternatives)
