"""Readiness check-in commands."""

from datetime import datetime, timezone

import click

from ..db import ClientRepository, ReadinessRepository
from ..errors import ClientNotFoundError
from ..models.readiness import (
    EnergyLevel,
    MuscleSoreness,
    ReadinessScore,
    StressLevel,
)
from ..services.readiness import ReadinessService
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
from .questionnaire import CheckInQuestionnaire


def _service() -> ReadinessService:
    return ReadinessService(ClientRepository(), ReadinessRepository())


def _echo_score(score: ReadinessScore) -> None:
    color = "green" if score.score >= 60 else "yellow" if score.score >= 40 else "red"
    click.echo()
    click.echo(click.style(f"Readiness: {score.score}/100", fg=color, bold=True))
    click.echo(score.recommendation)


@click.group()
@click.pass_context
def readiness(ctx):
    """Record and review daily readiness check-ins."""
    ensure_initialized(ctx)


@readiness.command(name="check-in")
@click.argument("client_id")
@click.option("--sleep", "sleep_hours", type=float, help="Hours slept last night")
@click.option("--stress", type=click.Choice([s.value for s in StressLevel]))
@click.option("--soreness", type=click.Choice([s.value for s in MuscleSoreness]))
@click.option("--energy", type=click.Choice([e.value for e in EnergyLevel]))
@click.option(
    "--date",
    "check_in_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Check-in date (default: now)",
)
@click.pass_context
@async_command
async def check_in(
    ctx,
    client_id: str,
    sleep_hours: float | None,
    stress: str | None,
    soreness: str | None,
    energy: str | None,
    check_in_date: datetime | None,
):
    """Score a client's daily check-in.

    Any value not given as an option is asked interactively.

    Example:

        fitcoach readiness check-in <client-id> --sleep 7.5 --stress low \\
            --soreness mild --energy high
    """
    date = check_in_date.replace(tzinfo=timezone.utc) if check_in_date else None

    check_in_data = await CheckInQuestionnaire().collect_check_in(
        date, sleep_hours, stress, soreness, energy
    )

    try:
        score = await _service().submit_check_in(get_trainer_id(ctx), client_id, check_in_data)
    except ClientNotFoundError as e:
        echo_error(str(e))
        ctx.exit(1)

    _echo_score(score)
    click.echo()
    echo_success(f"Check-in saved (ID: {score.id})")


@readiness.command()
@click.argument("client_id")
@click.option("--days", type=click.IntRange(1, 365), default=30, help="Window in days (default: 30)")
@click.pass_context
@async_command
async def history(ctx, client_id: str, days: int):
    """Show a client's recent scores, newest first."""
    try:
        scores = await _service().history(get_trainer_id(ctx), client_id, days=days)
    except ClientNotFoundError as e:
        echo_error(str(e))
        ctx.exit(1)

    if not scores:
        echo_info(f"No check-ins in the last {days} days")
        return

    headers = ["Date", "Score", "Sleep", "Stress", "Soreness", "Energy"]
    rows = [
        [
            format_date(s.date),
            str(s.score),
            f"{s.sleep_hours:g}h",
            s.stress_level,
            s.muscle_soreness,
            s.energy_level,
        ]
        for s in scores
    ]

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    average = sum(s.score for s in scores) / len(scores)
    click.echo(f"Average: {average:.0f} over {len(scores)} check-in(s)")


@readiness.command()
@click.argument("client_id")
@click.pass_context
@async_command
async def latest(ctx, client_id: str):
    """Show a client's most recent score."""
    try:
        score = await _service().latest(get_trainer_id(ctx), client_id)
    except ClientNotFoundError as e:
        echo_error(str(e))
        ctx.exit(1)

    if score is None:
        echo_info("No check-ins recorded yet")
        return

    click.echo(f"Date: {format_date(score.date)}")
    _echo_score(score)
