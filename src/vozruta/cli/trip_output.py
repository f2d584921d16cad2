"""CLI helpers for showing and storing trips."""

from datetime import date

import click

from vozruta.cli.error_handling import handle_domain_error
from vozruta.domain.entities import ParseResult, Section, Trip
from vozruta.domain.errors import DomainError
from vozruta.domain.export import format_currency
from vozruta.domain.reminders import LogNotifier, ReminderScheduler
from vozruta.domain.trip_store import TripStore


def format_trip_line(trip: Trip) -> str:
    """One-line rendering used by list and add."""
    time = trip.time or "--:--"
    where = f" a {trip.destination}" if trip.destination else ""
    kind = f" [{trip.package_type}]" if trip.package_type else ""
    return f"{trip.id:>5}  {time}  {trip.who}{where}{kind}  {format_currency(trip.amount)}"


def echo_parse_result(result: ParseResult) -> None:
    click.echo(f"  Description: {result.description}")
    click.echo(f"  Amount: {format_currency(result.amount)}")
    click.echo(f"  Passenger: {result.passenger or '-'}")
    click.echo(f"  Destination: {result.destination or '-'}")
    click.echo(f"  Time: {result.time or '-'}")
    click.echo(f"  Date: {result.date or '-'}")
    click.echo(f"  Package type: {result.package_type or '-'}")


def store_trip_or_exit(ctx, draft: Trip, reminder: bool = True) -> int:
    """Add a trip through the store, echo it and schedule its reminder.

    Exits with failure on any domain error.
    """
    store: TripStore = ctx.obj["store"]
    try:
        trip_id = store.add_trip(draft)
    except DomainError as e:
        handle_domain_error(ctx, e)

    trip = store.get_trip(trip_id)
    click.echo(f"Created trip {trip_id}")
    click.echo(f"  Date: {trip.date}")
    click.echo(f"  Section: {trip.section.value}")
    click.echo(f"  Description: {trip.description}")
    click.echo(f"  Amount: {format_currency(trip.amount)}")
    if trip.time:
        click.echo(f"  Time: {trip.time}")
    if trip.package_type:
        click.echo(f"  Package type: {trip.package_type}")

    if reminder and trip.time:
        _schedule_reminder(ctx, trip.date, trip.time, trip.description, trip.section)
    return trip_id


def _schedule_reminder(ctx, trip_date: date, time: str, description: str, section: Section) -> None:
    scheduler = ctx.obj.get("reminders")
    if scheduler is None:
        scheduler = ReminderScheduler(LogNotifier())
        ctx.obj["reminders"] = scheduler
    notify_at = scheduler.schedule_one_hour_before(trip_date, time, description, section)
    if notify_at is not None:
        click.echo(f"  Reminder: {notify_at:%Y-%m-%d %H:%M}")
