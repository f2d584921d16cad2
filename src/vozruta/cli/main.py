"""Main CLI entry point."""

import logging

import click

from vozruta.capture.session import DEFAULT_LOCALE
from vozruta.database.factories import create_sqlite_database
from vozruta.domain.trip_store import TripStore

# Import and register all commands at module level
from vozruta.cli.commands import export, listen, parse, summary, trip


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides VOZRUTA_DB_PATH environment variable)",
    envvar="VOZRUTA_DB_PATH",
)
@click.option(
    "--locale",
    default=DEFAULT_LOCALE,
    show_default=True,
    help="Capture locale (overrides VOZRUTA_LOCALE environment variable)",
    envvar="VOZRUTA_LOCALE",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, locale: str, verbose: bool):
    """VozRuta - Voice trip ledger for drivers.

    Dictate or type a sentence such as "Maria viaje a Saenz 30000 a las 14:30"
    and it is stored as a trip of the day, with totals per section.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["locale"] = locale

    # The store opens the database on first use, so help never touches it
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        ctx.obj["db"] = db
        ctx.obj["store"] = TripStore(db)
        ctx.call_on_close(db.disconnect)


# Register all commands
parse.register_commands(cli)
trip.register_commands(cli)
listen.register_commands(cli)
summary.register_commands(cli)
export.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
