"""CLI entry point for fitcoach."""

import click

from . import __version__
from .commands import clients, generate, init, nutrition, programs, readiness, serve, sessions, swap
from .config import get_settings
from .log import setup_logger


@click.group()
@click.version_option(version=__version__, prog_name="fitcoach")
@click.option("--trainer", "trainer_id", envvar="FITCOACH_TRAINER_ID", help="Trainer identity (default: local)")
@click.option("--log-level", help="Override FITCOACH_LOG_LEVEL")
@click.pass_context
def main(ctx, trainer_id: str | None, log_level: str | None):
    """fitcoach: AI-assisted coaching for personal trainers.

    Manage clients, score daily readiness, and generate workout programs
    and nutrition plans.

    Example usage:

        # Initialize the project
        fitcoach init

        # Add a client and record today's check-in
        fitcoach clients add
        fitcoach readiness check-in <client-id>

        # Generate a program and a nutrition plan
        fitcoach generate <client-id> --weeks 8
        fitcoach nutrition generate <client-id>
    """
    settings = get_settings()
    setup_logger(level=(log_level or settings.log_level).upper(), log_file=settings.log_file)
    ctx.ensure_object(dict)
    ctx.obj["trainer_id"] = trainer_id or settings.trainer_id


# Register commands
main.add_command(init)
main.add_command(clients)
main.add_command(readiness)
main.add_command(generate)
main.add_command(programs)
main.add_command(nutrition)
main.add_command(swap)
main.add_command(sessions)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
