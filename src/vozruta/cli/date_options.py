"""CLI helpers for date and section options."""

from datetime import date

import click

from vozruta.domain.entities import Section
from vozruta.utils.date_parser import parse_date

SECTION_CHOICES = [section.value for section in Section]


def resolve_cli_date(ctx, date_str: str | None, default: date | None = None) -> date:
    """Resolve a --date option, falling back to ``default`` or today."""
    if not date_str:
        return default if default is not None else date.today()
    try:
        return parse_date(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)


def section_option(default: str = Section.OUTBOUND.value):
    """Shared --section option."""
    return click.option(
        "--section",
        type=click.Choice(SECTION_CHOICES, case_sensitive=False),
        default=default,
        show_default=True,
        help="Ledger section",
    )
