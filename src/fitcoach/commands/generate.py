"""Generate program command."""

import click

from ..config import get_settings
from ..errors import ClientNotFoundError, GenerationFailed, PersistenceFailure, StaleArtifactError
from ..models.requests import ProgramRequest
from ..services.generation import GenerationService, create_generation_service
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    get_trainer_id,
)


def generation_service(ctx: click.Context) -> GenerationService:
    """Build the generation service, failing early without an API key."""
    settings = get_settings()
    if not settings.anthropic_api_key:
        echo_error("FITCOACH_ANTHROPIC_API_KEY is not set")
        ctx.exit(1)
    return create_generation_service(settings)


async def run_generation(ctx: click.Context, service: GenerationService, pending):
    """Await a generation, offering to retry the save if only persistence failed."""
    try:
        return await pending
    except ClientNotFoundError as e:
        echo_error(str(e))
        ctx.exit(1)
    except GenerationFailed as e:
        echo_error(e.user_message)
        ctx.exit(1)
    except PersistenceFailure as e:
        failure = e

    while True:
        echo_warning(failure.user_message)
        if not click.confirm("Retry saving?", default=True):
            echo_error("Generated result discarded")
            ctx.exit(1)
        try:
            return await service.retry_save(failure)
        except PersistenceFailure as e:
            failure = e
        except StaleArtifactError as e:
            echo_error(e.user_message)
            ctx.exit(1)


@click.command()
@click.argument("client_id")
@click.option(
    "--weeks",
    "-w",
    type=click.IntRange(4, 16),
    help="Program length in weeks (default: let the coach decide, 8-12)",
)
@click.option("--notes", "-n", default="", help="Extra instructions for the coach")
@click.pass_context
@async_command
async def generate(ctx, client_id: str, weeks: int | None, notes: str):
    """Generate a periodized workout program for a client.

    Examples:

        # Let the coach pick the duration
        fitcoach generate <client-id>

        # A 6-week block with extra instructions
        fitcoach generate <client-id> --weeks 6 --notes "Prioritize posterior chain"
    """
    ensure_initialized(ctx)
    service = generation_service(ctx)

    echo_info("Generating program... this can take a minute or two.")
    program = await run_generation(
        ctx,
        service,
        service.generate_program(
            get_trainer_id(ctx), client_id, ProgramRequest(weeks=weeks, notes=notes)
        ),
    )

    click.echo()
    echo_success(f"Program generated successfully! (ID: {program.id})")
    click.echo()

    click.echo("=" * 60)
    click.echo(program.get_summary())
    click.echo("=" * 60)

    click.echo()
    click.echo("Next steps:")
    click.echo(f"  - View full program: fitcoach programs show {program.id}")
    click.echo(f"  - Log a session: fitcoach sessions log {client_id} {program.id}")
