"""Prompt templates for program, nutrition and substitution generation."""

from ..models.client import Client
from ..models.requests import NutritionRequest, ProgramRequest, SwapRequest
from .output_specs import EXERCISE_SWAP_SPEC, NUTRITION_SPEC, PROGRAM_SPEC
from .provider import GenerationPrompt

PROGRAM_COACH_SYSTEM = """You are an expert strength and conditioning coach. Generate a periodized workout program based on:
{client_summary}
Return the program through the submit_workout_program tool:
- weeks_duration: integer ({duration})
- split: e.g. 'Push/Pull/Legs', 'Upper/Lower', 'Full Body'
- weeks: one object per week with week_number, phase (hypertrophy/strength/power/deload/endurance) and workouts
- each workout has a day and exercises with name, sets, reps, rest (seconds), tempo and notes
- exercises: every unique exercise in the program with the same fields

IMPORTANT: Every exercise MUST have notes with coaching cues, form tips or modifications.
Progressive overload should increase across weeks. Avoid exercises conflicting with injuries.
Balance volume across muscle groups. Match intensity and volume to experience level."""

NUTRITION_EXPERT_SYSTEM = """You are a nutrition expert. Generate a personalized nutrition plan based on:
- Goal: {goal}
- Weight: {weight}kg
- Height: {height}cm
- Age: {age}
- Gender: {gender}
- Activity Level: {activity_level}

Return the plan through the submit_nutrition_plan tool:
- calories: daily caloric intake
- protein, carbohydrates, fats: grams per day
- meal_suggestions: 5-7 meal options with name, protein, carbs, fats, calories and ingredients
- macro_breakdown: percentage of calories from each macro"""

SWAP_COACH_SYSTEM = """You are a strength and conditioning coach. Suggest 3-5 alternative exercises that:
- Target the same muscle group as the original exercise
- Match the available equipment{equipment}
- Avoid injury contraindications{injuries}
- Maintain similar difficulty level
- Progress strength and muscle development

For each exercise, explain why it's a good alternative."""


def build_program_prompt(client: Client, request: ProgramRequest) -> GenerationPrompt:
    """Build the program generation prompt for a client."""
    duration = f"exactly {request.weeks}" if request.weeks else "4-12 based on goals"
    system = PROGRAM_COACH_SYSTEM.format(client_summary=client.get_summary(), duration=duration)

    weeks_text = f"{request.weeks} weeks" if request.weeks else "8-12 weeks"
    prompt = (
        f"Generate a complete {client.training_frequency} day/week periodized workout program "
        f"for a {client.experience.value} level client who trains {client.time_per_session} minutes "
        f"per session with access to {client.equipment.value} equipment. "
        f"Goal: {client.goals.value}. Duration: {weeks_text} with progressive overload."
    )
    if request.notes:
        prompt += f"\nAdditional trainer notes: {request.notes}"

    return GenerationPrompt(
        system=system,
        prompt=prompt,
        schema_name="submit_workout_program",
        schema_description="Complete periodized workout program with progressive overload",
        schema=PROGRAM_SPEC,
    )


def build_nutrition_prompt(request: NutritionRequest) -> GenerationPrompt:
    """Build the nutrition plan prompt."""
    return GenerationPrompt(
        system=NUTRITION_EXPERT_SYSTEM.format(
            goal=request.goal,
            weight=request.weight,
            height=request.height,
            age=request.age,
            gender=request.gender,
            activity_level=request.activity_level,
        ),
        prompt=f"Create a personalized nutrition plan for {request.goal} goal.",
        schema_name="submit_nutrition_plan",
        schema_description="Personalized nutrition plan with macros and meal suggestions",
        schema=NUTRITION_SPEC,
    )


def build_swap_prompt(request: SwapRequest) -> GenerationPrompt:
    """Build the exercise substitution prompt."""
    system = SWAP_COACH_SYSTEM.format(
        equipment=f" ({request.equipment})" if request.equipment else "",
        injuries=f" ({request.injuries})" if request.injuries else "",
    )

    prompt = f"Find 3-5 alternatives to {request.original_exercise_name}"
    if request.muscle_group:
        prompt += f" (primary muscle: {request.muscle_group})"
    if request.equipment:
        prompt += f" with access to {request.equipment}"
    if request.injuries:
        prompt += f" while avoiding movements that aggravate {request.injuries}"
    prompt += (
        ". Provide exercises that target the same muscle group "
        "with varying equipment and difficulty options."
    )

    return GenerationPrompt(
        system=system,
        prompt=prompt,
        schema_name="submit_exercise_alternatives",
        schema_description="Alternative exercises with reasoning",
        schema=EXERCISE_SWAP_SPEC,
    )
