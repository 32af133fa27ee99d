"""Client management commands."""

import click

from ..db import ClientRepository
from ..models.client import Client, EquipmentAccess, ExperienceLevel, TrainingGoal
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_date,
    format_table,
    get_trainer_id,
)
from .questionnaire import ClientQuestionnaire


@click.group()
@click.pass_context
def clients(ctx):
    """Manage your clients."""
    ensure_initialized(ctx)


@clients.command(name="add")
@click.option("--name", help="Client name (omit for the interactive questionnaire)")
@click.option("--age", type=int)
@click.option("--gender", type=click.Choice(["male", "female", "other"]))
@click.option("--experience", type=click.Choice([e.value for e in ExperienceLevel]))
@click.option("--goal", type=click.Choice([g.value for g in TrainingGoal]))
@click.option("--days", "training_frequency", type=click.IntRange(2, 6), help="Training days per week")
@click.option("--equipment", type=click.Choice([e.value for e in EquipmentAccess]))
@click.option("--minutes", "time_per_session", type=click.Choice(["45", "60", "90"]), default="60")
@click.option("--height", type=int, help="Height in cm")
@click.option("--weight", type=float, help="Weight in kg")
@click.option("--injuries", help="Injuries or limitations")
@click.pass_context
@async_command
async def add_client(
    ctx,
    name: str | None,
    age: int | None,
    gender: str | None,
    experience: str | None,
    goal: str | None,
    training_frequency: int | None,
    equipment: str | None,
    time_per_session: str,
    height: int | None,
    weight: float | None,
    injuries: str | None,
):
    """Add a client.

    Without --name the full intake questionnaire runs interactively.

    Examples:

        fitcoach clients add

        fitcoach clients add --name "Sam" --age 34 --gender female \\
            --experience intermediate --goal strength --days 4 \\
            --equipment commercial_gym
    """
    trainer_id = get_trainer_id(ctx)

    if name is None:
        client = await ClientQuestionnaire().collect_client(trainer_id)
    else:
        required = {
            "--age": age,
            "--gender": gender,
            "--experience": experience,
            "--goal": goal,
            "--days": training_frequency,
            "--equipment": equipment,
        }
        missing = [opt for opt, value in required.items() if value is None]
        if missing:
            echo_error(f"Missing options: {', '.join(missing)}")
            ctx.exit(1)
        client = Client(
            trainer_id=trainer_id,
            name=name,
            age=age,
            gender=gender,
            experience=ExperienceLevel(experience),
            goals=TrainingGoal(goal),
            training_frequency=training_frequency,
            equipment=EquipmentAccess(equipment),
            time_per_session=int(time_per_session),
            height=height,
            weight=weight,
            injuries=injuries,
        )

    client = await ClientRepository().create(client)
    echo_success(f"Client {client.name} added (ID: {client.id})")


@clients.command(name="list")
@click.pass_context
@async_command
async def list_clients(ctx):
    """List your clients."""
    all_clients = await ClientRepository().list_all(get_trainer_id(ctx))

    if not all_clients:
        echo_info("No clients found. Add one with 'fitcoach clients add'")
        return

    headers = ["ID", "Name", "Goal", "Experience", "Days", "Created"]
    rows = [
        [
            c.id,
            c.name,
            c.goals.value,
            c.experience.value,
            str(c.training_frequency),
            format_date(c.created_at),
        ]
        for c in all_clients
    ]

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(all_clients)} client(s)")


@clients.command()
@click.argument("client_id")
@click.pass_context
@async_command
async def show(ctx, client_id: str):
    """Show a client's profile."""
    client = await ClientRepository().get(get_trainer_id(ctx), client_id)
    if not client:
        echo_error(f"Client {client_id} not found")
        ctx.exit(1)

    click.echo()
    click.echo("=" * 60)
    click.echo(f"{client.name} (ID: {client.id})")
    click.echo("=" * 60)
    click.echo(client.get_summary())


@clients.command()
@click.argument("client_id")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete(ctx, client_id: str, force: bool):
    """Delete a client with all their programs, plans, scores and sessions."""
    trainer_id = get_trainer_id(ctx)
    repo = ClientRepository()

    client = await repo.get(trainer_id, client_id)
    if not client:
        echo_error(f"Client {client_id} not found")
        ctx.exit(1)

    if not force:
        click.echo(f"Client: {client.name}")
        if not click.confirm("Delete this client and all of their data?"):
            echo_info("Cancelled")
            return

    await repo.delete(trainer_id, client_id)
    echo_success(f"Client {client_id} deleted")
