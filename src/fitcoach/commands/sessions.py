"""Workout session logging commands."""

from datetime import datetime, timezone

import click

from ..db import ProgramRepository, SessionRepository
from ..models.session import ExerciseLog, WorkoutSession
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
def sessions(ctx):
    """Log and review training sessions."""
    ensure_initialized(ctx)


@sessions.command(name="log")
@click.argument("client_id")
@click.argument("program_id")
@click.option("--week", "week_number", type=click.IntRange(min=1), default=1, help="Program week")
@click.option("--day", "day_name", help="Program day (default: first day of the week)")
@click.option("--date", "session_date", type=click.DateTime(formats=["%Y-%m-%d"]))
@click.option("--notes")
@click.pass_context
@async_command
async def log_session(
    ctx,
    client_id: str,
    program_id: str,
    week_number: int,
    day_name: str | None,
    session_date: datetime | None,
    notes: str | None,
):
    """Start a session for one day of a client's program."""
    trainer_id = get_trainer_id(ctx)

    program = await ProgramRepository().get(trainer_id, program_id)
    if not program or program.client_id != client_id:
        echo_error(f"Program {program_id} not found for client {client_id}")
        ctx.exit(1)

    if day_name is None:
        week = next((w for w in program.data.weeks if w.week_number == week_number), None)
        if week is None or not week.workouts:
            echo_error(f"Week {week_number} is not part of this program")
            ctx.exit(1)
        day_name = week.workouts[0].day

    session = await SessionRepository().create(
        WorkoutSession(
            client_id=client_id,
            program_id=program_id,
            trainer_id=trainer_id,
            session_date=(
                session_date.replace(tzinfo=timezone.utc)
                if session_date
                else datetime.now(timezone.utc)
            ),
            week_number=week_number,
            day_name=day_name,
            notes=notes,
        )
    )
    echo_success(f"Session logged (ID: {session.id}): week {week_number}, {day_name}")


@sessions.command(name="list")
@click.argument("client_id")
@click.pass_context
@async_command
async def list_sessions(ctx, client_id: str):
    """List a client's sessions, most recent first."""
    all_sessions = await SessionRepository().list_for_client(get_trainer_id(ctx), client_id)

    if not all_sessions:
        echo_info("No sessions logged yet")
        return

    headers = ["ID", "Date", "Week", "Day", "Completed"]
    rows = [
        [
            s.id,
            format_date(s.session_date),
            str(s.week_number),
            s.day_name,
            "yes" if s.completed else "no",
        ]
        for s in all_sessions
    ]

    click.echo()
    click.echo(format_table(headers, rows))


@sessions.command()
@click.argument("session_id")
@click.pass_context
@async_command
async def show(ctx, session_id: str):
    """Show a session with its exercise logs."""
    session = await SessionRepository().get(get_trainer_id(ctx), session_id)
    if not session:
        echo_error(f"Session {session_id} not found")
        ctx.exit(1)

    status = "completed" if session.completed else "in progress"
    click.echo()
    click.echo(f"{format_date(session.session_date)}: week {session.week_number}, {session.day_name} ({status})")
    if session.notes:
        click.echo(f"Notes: {session.notes}")
    click.echo()

    if not session.exercise_logs:
        echo_info("No exercises logged")
        return

    headers = ["Exercise", "Sets", "Reps", "Weight", "RPE"]
    rows = [
        [
            log.exercise_name,
            str(log.sets_completed),
            log.reps_completed,
            log.weight_used,
            str(log.rpe) if log.rpe is not None else "-",
        ]
        for log in session.exercise_logs
    ]
    click.echo(format_table(headers, rows))


@sessions.command(name="add-exercise")
@click.argument("session_id")
@click.argument("exercise_name")
@click.option("--sets", "sets_completed", type=click.IntRange(min=0), required=True)
@click.option("--reps", "reps_completed", required=True, help='Reps per set, e.g. "10,10,8"')
@click.option("--weight", "weight_used", required=True, help='e.g. "60kg"')
@click.option("--rpe", type=click.IntRange(1, 10))
@click.option("--notes")
@click.pass_context
@async_command
async def add_exercise(
    ctx,
    session_id: str,
    exercise_name: str,
    sets_completed: int,
    reps_completed: str,
    weight_used: str,
    rpe: int | None,
    notes: str | None,
):
    """Record what was done for one exercise."""
    log = await SessionRepository().add_exercise_log(
        get_trainer_id(ctx),
        ExerciseLog(
            session_id=session_id,
            exercise_name=exercise_name,
            sets_completed=sets_completed,
            reps_completed=reps_completed,
            weight_used=weight_used,
            rpe=rpe,
            notes=notes,
        ),
    )
    if log is None:
        echo_error(f"Session {session_id} not found")
        ctx.exit(1)

    echo_success(f"Logged {exercise_name}: {sets_completed} sets, {reps_completed} @ {weight_used}")


@sessions.command()
@click.argument("session_id")
@click.option("--notes")
@click.pass_context
@async_command
async def complete(ctx, session_id: str, notes: str | None):
    """Mark a session as completed."""
    session = await SessionRepository().update(
        get_trainer_id(ctx), session_id, completed=True, notes=notes
    )
    if not session:
        echo_error(f"Session {session_id} not found")
        ctx.exit(1)

    echo_success(f"Session completed ({len(session.exercise_logs)} exercise(s) logged)")


@sessions.command()
@click.argument("session_id")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete(ctx, session_id: str, force: bool):
    """Delete a session and its exercise logs."""
    if not force and not click.confirm("Are you sure you want to delete this session?"):
        echo_info("Cancelled")
        return

    if not await SessionRepository().delete(get_trainer_id(ctx), session_id):
        echo_error(f"Session {session_id} not found")
        ctx.exit(1)

    echo_success(f"Session {session_id} deleted")
