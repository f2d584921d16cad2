"""Parse command."""

import click

from vozruta.cli.date_options import resolve_cli_date
from vozruta.cli.trip_output import echo_parse_result
from vozruta.domain.sentence_parser import SentenceParser


@click.command("parse")
@click.argument("sentence")
@click.option("--date", help="Base date for relative words like 'mañana' (default: today)")
@click.pass_context
def parse_command(ctx, sentence: str, date: str | None):
    """Show how a sentence is read, without storing anything.

    Examples:
        vozruta parse "Maria viaje a Saenz 30000"
        vozruta parse "Lopez a Retiro mañana a las 9:00 $12.500"
    """
    base_date = resolve_cli_date(ctx, date)
    result = SentenceParser().parse(sentence, base_date=base_date)
    click.echo(f'Parsed: "{sentence}"')
    echo_parse_result(result)


def register_commands(cli):
    """Register parse command with main CLI."""
    cli.add_command(parse_command)
