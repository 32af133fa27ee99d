"""Program management commands."""

import click

from ..db import ProgramRepository
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


@click.group()
@click.pass_context
def programs(ctx):
    """Manage generated programs.

    Commands for listing, viewing, and deleting programs.
    """
    ensure_initialized(ctx)


@programs.command(name="list")
@click.option("--client", "client_id", help="Only show this client's programs")
@click.pass_context
@async_command
async def list_programs(ctx, client_id: str | None):
    """List generated programs."""
    trainer_id = get_trainer_id(ctx)
    repo = ProgramRepository()

    if client_id:
        all_programs = await repo.list_for_client(trainer_id, client_id)
    else:
        all_programs = await repo.list_all(trainer_id)

    if not all_programs:
        echo_info("No programs found. Generate one with 'fitcoach generate'")
        return

    headers = ["ID", "Client", "Split", "Days", "Weeks", "Created"]
    rows = []

    for prog in all_programs:
        split = prog.split[:30] + "..." if len(prog.split) > 30 else prog.split
        rows.append([
            prog.id,
            prog.client_id,
            split,
            str(prog.days_per_week),
            str(prog.weeks_duration),
            format_date(prog.created_at),
        ])

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(all_programs)} program(s)")


@programs.command()
@click.argument("program_id")
@click.option("--exercises", "-e", is_flag=True, help="List every unique exercise with notes")
@click.pass_context
@async_command
async def show(ctx, program_id: str, exercises: bool):
    """Show details of a specific program."""
    program = await ProgramRepository().get(get_trainer_id(ctx), program_id)
    if not program:
        echo_error(f"Program {program_id} not found")
        ctx.exit(1)

    click.echo()
    click.echo("=" * 60)
    click.echo(f"Program: {program.split} (ID: {program.id})")
    click.echo("=" * 60)
    click.echo()
    click.echo(f"Client: {program.client_id}")
    click.echo(f"Created: {program.created_at}")
    click.echo()

    click.echo("Structure:")
    click.echo("-" * 40)
    click.echo(program.get_summary())

    if exercises and program.data.exercises:
        click.echo("Exercises:")
        click.echo("-" * 40)
        for ex in program.data.exercises:
            click.echo(f"  {ex.name}: {ex.sets}x{ex.reps}, rest {ex.rest}s")
            if ex.notes:
                click.echo(f"    {ex.notes}")


@programs.command()
@click.argument("program_id")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete(ctx, program_id: str, force: bool):
    """Delete a program and its logged sessions."""
    trainer_id = get_trainer_id(ctx)
    repo = ProgramRepository()

    program = await repo.get(trainer_id, program_id)
    if not program:
        echo_error(f"Program {program_id} not found")
        ctx.exit(1)

    if not force:
        click.echo(f"Program: {program.split}, {program.weeks_duration} weeks")
        if not click.confirm("Are you sure you want to delete this program?"):
            echo_info("Cancelled")
            return

    await repo.delete(trainer_id, program_id)
    echo_success(f"Program {program_id} deleted")
