"""Nutrition plan commands."""

import click

from ..db import ClientRepository, NutritionPlanRepository
from ..models.requests import NutritionRequest
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    get_trainer_id,
)
from .generate import generation_service, run_generation

ACTIVITY_LEVELS = ["sedentary", "light", "moderate", "active", "very_active"]


@click.group()
@click.pass_context
def nutrition(ctx):
    """Generate and adjust client nutrition plans."""
    ensure_initialized(ctx)


@nutrition.command(name="generate")
@click.argument("client_id")
@click.option(
    "--activity",
    type=click.Choice(ACTIVITY_LEVELS),
    default="moderate",
    help="Daily activity level (default: moderate)",
)
@click.option("--goal", help="Override the client's goal")
@click.option("--weight", type=float, help="Override weight in kg")
@click.option("--height", type=float, help="Override height in cm")
@click.pass_context
@async_command
async def generate_plan(
    ctx,
    client_id: str,
    activity: str,
    goal: str | None,
    weight: float | None,
    height: float | None,
):
    """Generate a nutrition plan, replacing the client's current one."""
    trainer_id = get_trainer_id(ctx)

    client = await ClientRepository().get(trainer_id, client_id)
    if not client:
        echo_error(f"Client {client_id} not found")
        ctx.exit(1)

    try:
        request = NutritionRequest.from_client(
            client, activity_level=activity, goal=goal, weight=weight, height=height
        )
    except ValueError as e:
        echo_error(f"{e}. Pass --weight and --height or update the client profile.")
        ctx.exit(1)

    service = generation_service(ctx)
    echo_info("Generating nutrition plan...")
    plan = await run_generation(
        ctx, service, service.generate_nutrition_plan(trainer_id, client_id, request)
    )

    click.echo()
    echo_success(f"Nutrition plan generated (ID: {plan.id})")
    click.echo()
    click.echo(plan.get_summary())


@nutrition.command()
@click.argument("client_id")
@click.pass_context
@async_command
async def show(ctx, client_id: str):
    """Show a client's current nutrition plan."""
    plan = await NutritionPlanRepository().get_for_client(get_trainer_id(ctx), client_id)
    if not plan:
        echo_info("No nutrition plan yet. Generate one with 'fitcoach nutrition generate'")
        return

    click.echo()
    click.echo(f"Nutrition plan {plan.id} (updated {plan.updated_at})")
    click.echo("-" * 40)
    click.echo(plan.get_summary())


@nutrition.command()
@click.argument("client_id")
@click.option("--calories", type=click.IntRange(min=1))
@click.option("--protein", type=click.IntRange(min=0))
@click.option("--carbs", "carbohydrates", type=click.IntRange(min=0))
@click.option("--fats", type=click.IntRange(min=0))
@click.option("--notes")
@click.pass_context
@async_command
async def update(
    ctx,
    client_id: str,
    calories: int | None,
    protein: int | None,
    carbohydrates: int | None,
    fats: int | None,
    notes: str | None,
):
    """Manually adjust a client's targets."""
    trainer_id = get_trainer_id(ctx)
    repo = NutritionPlanRepository()

    plan = await repo.get_for_client(trainer_id, client_id)
    if not plan:
        echo_error(f"No nutrition plan for client {client_id}")
        ctx.exit(1)

    plan.data = plan.data.with_targets(
        calories=calories,
        protein=protein,
        carbohydrates=carbohydrates,
        fats=fats,
        notes=notes,
    )
    plan = await repo.update(plan)
    echo_success("Nutrition plan updated")
    click.echo(plan.get_summary())
