"""Export command."""

import click

from vozruta.cli.date_options import resolve_cli_date
from vozruta.cli.error_handling import handle_domain_error
from vozruta.domain.errors import DomainError
from vozruta.domain.export import daily_csv, daily_summary_text, daily_table_text


@click.command("export")
@click.option("--date", help="Date to export (default: today)")
@click.option(
    "--format",
    "export_format",
    type=click.Choice(["summary", "table", "csv"]),
    default="summary",
    show_default=True,
    help="Output format",
)
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write to a file instead of stdout")
@click.pass_context
def export(ctx, date: str | None, export_format: str, output: str | None):
    """Export one day of trips as share-ready text or CSV.

    Examples:
        vozruta export --date hoy
        vozruta export --format csv -o viajes.csv
    """
    store = ctx.obj["store"]
    trip_date = resolve_cli_date(ctx, date)
    try:
        trips = store.load_trips(trip_date)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if export_format == "csv":
        text = daily_csv(trip_date, trips)
    elif export_format == "table":
        text = daily_table_text(trip_date, trips, store.total_revenue)
    else:
        text = daily_summary_text(trip_date, trips, store.total_revenue)

    if output:
        with open(output, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        click.echo(f"Exported {len(trips)} trips to {output}")
    else:
        click.echo(text.rstrip("\n"))


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export)
