"""Trip commands: add, add-manual, list, delete and totals."""

import click

from vozruta.cli.date_options import resolve_cli_date, section_option
from vozruta.cli.error_handling import handle_domain_error
from vozruta.cli.trip_output import format_trip_line, store_trip_or_exit
from vozruta.domain.entities import Section, Trip
from vozruta.domain.errors import DomainError
from vozruta.domain.export import format_currency, format_long_date
from vozruta.domain.sentence_parser import SentenceParser
from vozruta.utils.amount_parser import parse_amount
from vozruta.utils.package_type import PACKAGE_LABELS

SECTION_TITLES = {
    Section.OUTBOUND: "Ida",
    Section.RETURN: "Vuelta",
    Section.PARCEL: "Encomienda",
}


@click.command("add")
@click.argument("sentence")
@section_option()
@click.option("--date", help="Trip date when the sentence names none (default: today)")
@click.option("--no-reminder", is_flag=True, help="Do not schedule a reminder")
@click.pass_context
def add_trip(ctx, sentence: str, section: str, date: str | None, no_reminder: bool):
    """Parse a sentence and store it as a trip.

    Examples:
        vozruta add "Maria viaje a Saenz 30000"
        vozruta add "Lopez a Retiro mañana a las 9:00 $12.500" --section vuelta
    """
    default_date = resolve_cli_date(ctx, date)
    result = SentenceParser().parse(sentence, base_date=default_date)
    draft = result.to_trip(default_date, Section.parse(section))
    store_trip_or_exit(ctx, draft, reminder=not no_reminder)


@click.command("add-manual")
@click.option("--description", required=True, help="Trip description")
@click.option("--amount", required=True, help="Amount in pesos (e.g., 35.000 or 1.250,50)")
@click.option("--passenger", help="Passenger or recipient")
@click.option("--destination", help="Destination")
@click.option("--time", help="Trip time (HH:MM)")
@click.option(
    "--package-type",
    type=click.Choice(list(PACKAGE_LABELS), case_sensitive=False),
    help="Package type (parcel trips only)",
)
@section_option()
@click.option("--date", help="Trip date (default: today)")
@click.option("--no-reminder", is_flag=True, help="Do not schedule a reminder")
@click.pass_context
def add_manual(
    ctx,
    description: str,
    amount: str,
    passenger: str | None,
    destination: str | None,
    time: str | None,
    package_type: str | None,
    section: str,
    date: str | None,
    no_reminder: bool,
):
    """Store a trip from explicit fields.

    Examples:
        vozruta add-manual --description "Maria a Saenz" --amount 30000
        vozruta add-manual --description "Caja" --amount 5.000 --section encomienda --package-type caja
    """
    trip_date = resolve_cli_date(ctx, date)

    try:
        trip_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    trip_section = Section.parse(section)
    draft = Trip(
        date=trip_date,
        section=trip_section,
        description=description,
        amount=trip_amount,
        passenger=passenger,
        destination=destination,
        time=time,
        package_type=package_type if trip_section == Section.PARCEL else None,
    )
    store_trip_or_exit(ctx, draft, reminder=not no_reminder)


@click.command("list")
@click.option("--date", help="Date to show (default: today)")
@click.pass_context
def list_trips(ctx, date: str | None):
    """List the trips of a day, grouped by section."""
    store = ctx.obj["store"]
    trip_date = resolve_cli_date(ctx, date)
    try:
        trips = store.load_trips(trip_date)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(format_long_date(trip_date).capitalize())
    if not trips:
        click.echo("No trips found.")
        return

    for section in Section:
        section_trips = [trip for trip in trips if trip.section == section]
        if not section_trips:
            continue
        click.echo(f"\n{SECTION_TITLES[section]} ({len(section_trips)})")
        for trip in section_trips:
            click.echo(format_trip_line(trip))

    click.echo(f"\nTotal: {format_currency(store.total_revenue)}")


@click.command("delete")
@click.argument("trip_id", type=int)
@click.option("--date", help="Date to reload afterwards (default: today)")
@click.pass_context
def delete_trip(ctx, trip_id: int, date: str | None):
    """Delete a trip by id."""
    store = ctx.obj["store"]
    trip_date = resolve_cli_date(ctx, date)
    try:
        store.delete_trip(trip_id, trip_date)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted trip {trip_id}")


@click.command("totals")
@click.option("--date", help="Date to total (default: today)")
@click.pass_context
def totals(ctx, date: str | None):
    """Show the day's totals per section."""
    store = ctx.obj["store"]
    trip_date = resolve_cli_date(ctx, date)
    try:
        store.load_trips(trip_date)
    except DomainError as e:
        handle_domain_error(ctx, e)

    aggregate = store.day_aggregate
    click.echo(format_long_date(trip_date).capitalize())
    for section in Section:
        label = SECTION_TITLES[section]
        click.echo(
            f"  {label:<12}{aggregate.counts[section]:>4}  {format_currency(aggregate.totals[section]):>16}"
        )
    click.echo(f"  {'Total':<12}{aggregate.count:>4}  {format_currency(aggregate.total):>16}")


def register_commands(cli):
    """Register trip commands with main CLI."""
    cli.add_command(add_trip)
    cli.add_command(add_manual)
    cli.add_command(list_trips)
    cli.add_command(delete_trip)
    cli.add_command(totals)
