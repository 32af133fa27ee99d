"""Initialize project command."""

import click

from ..config import get_settings
from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Initialize the fitcoach data directory and database.

    This creates the data directory and the SQLite database with the
    required schema. Running it again is harmless.
    """
    data_dir = get_settings().data_dir
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing fitcoach in {data_dir}")

    await init_db(db_path)
    echo_success("Database initialized")

    click.echo()
    click.echo("fitcoach is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Add a client:")
    click.echo("     fitcoach clients add")
    click.echo()
    click.echo("  2. Record a readiness check-in:")
    click.echo("     fitcoach readiness check-in <client-id>")
    click.echo()
    click.echo("  3. Generate a program (needs FITCOACH_ANTHROPIC_API_KEY):")
    click.echo("     fitcoach generate <client-id> --weeks 8")
