"""Summary commands: monthly counts and the month calendar."""

import click

from vozruta.cli.error_handling import handle_domain_error
from vozruta.domain.errors import DomainError
from vozruta.domain.export import MONTHS
from vozruta.domain.history import MonthView
from vozruta.utils.date_parser import parse_month

WEEKDAY_HEADER = ("Lu", "Ma", "Mi", "Ju", "Vi", "Sa", "Do")


@click.command("months")
@click.pass_context
def months(ctx):
    """Show trip counts per month and section, most recent month first."""
    store = ctx.obj["store"]
    try:
        rows = store.monthly_summary()
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not rows:
        click.echo("No trips found.")
        return

    click.echo(f"{'Month':<10}{'Total':>7}{'Ida':>7}{'Vuelta':>8}{'Encom.':>8}")
    click.echo("-" * 40)
    for row in rows:
        click.echo(
            f"{row.month:<10}{row.trip_count:>7}{row.outbound_count:>7}"
            f"{row.return_count:>8}{row.parcel_count:>8}"
        )


@click.command("calendar")
@click.option("--month", help="Month to show as YYYY-MM (default: current month)")
@click.pass_context
def calendar(ctx, month: str | None):
    """Show a month grid with the number of trips per day.

    Days outside the month are shown in parentheses; a day with trips is
    followed by its count.
    """
    if month:
        try:
            parse_month(month)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)

    view = MonthView(ctx.obj["store"], month=month)
    try:
        grid = view.refresh()
    except DomainError as e:
        handle_domain_error(ctx, e)

    first = parse_month(view.month)
    click.echo(f"{MONTHS[first.month - 1].capitalize()} {first.year}".center(7 * 7))
    click.echo("".join(f"{name:^7}" for name in WEEKDAY_HEADER))
    for week in range(0, len(grid), 7):
        cells = []
        for cell in grid[week : week + 7]:
            label = str(cell.day) if cell.is_current_month else f"({cell.day})"
            if cell.count:
                label = f"{label}:{cell.count}"
            cells.append(f"{label:^7}")
        click.echo("".join(cells).rstrip())

    total = sum(view.day_counts.values())
    click.echo(f"\nTrips this month: {total}")


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(months)
    cli.add_command(calendar)
