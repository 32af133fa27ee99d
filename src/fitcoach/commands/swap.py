"""Exercise substitution command."""

import click

from ..models.requests import SwapRequest
from .base import async_command, echo_info, ensure_initialized, get_trainer_id
from .generate import generation_service, run_generation


@click.command()
@click.argument("client_id")
@click.argument("exercise")
@click.option("--muscle", "muscle_group", help="Primary muscle group")
@click.option("--equipment", help="Available equipment")
@click.option("--injuries", help="Injuries to work around (default: from the client profile)")
@click.pass_context
@async_command
async def swap(
    ctx,
    client_id: str,
    exercise: str,
    muscle_group: str | None,
    equipment: str | None,
    injuries: str | None,
):
    """Suggest alternatives to EXERCISE for a client.

    Example:

        fitcoach swap <client-id> "Barbell Back Squat" --equipment dumbbells
    """
    ensure_initialized(ctx)
    service = generation_service(ctx)

    echo_info(f"Finding alternatives to {exercise}...")
    alternatives = await run_generation(
        ctx,
        service,
        service.suggest_alternatives(
            get_trainer_id(ctx),
            SwapRequest(
                original_exercise_name=exercise,
                client_id=client_id,
                muscle_group=muscle_group,
                equipment=equipment,
                injuries=injuries,
            ),
        ),
    )

    click.echo()
    for i, alt in enumerate(alternatives, 1):
        click.echo(click.style(f"{i}. {alt.name}", bold=True))
        click.echo(f"   {alt.muscle_group} | {alt.equipment} | {alt.difficulty}")
        click.echo(f"   {alt.reason}")
        if alt.description:
            click.echo(f"   {alt.description}")
        click.echo()
