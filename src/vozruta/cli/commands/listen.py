"""Listen command: capture a sentence and store it as a trip."""

import asyncio

import click

from vozruta.capture.prompt import PromptCaptureBackend
from vozruta.capture.session import CaptureSession
from vozruta.cli.date_options import resolve_cli_date, section_option
from vozruta.cli.trip_output import echo_parse_result, store_trip_or_exit
from vozruta.domain.entities import Section
from vozruta.domain.sentence_parser import SentenceParser


@click.command("listen")
@section_option()
@click.option("--date", help="Trip date when the sentence names none (default: today)")
@click.option("--no-reminder", is_flag=True, help="Do not schedule a reminder")
@click.pass_context
def listen(ctx, section: str, date: str | None, no_reminder: bool):
    """Capture one sentence and store it as a trip.

    Without a speech engine the sentence is typed at the prompt.
    """
    default_date = resolve_cli_date(ctx, date)
    session = ctx.obj.get("capture")
    if session is None:
        session = CaptureSession(PromptCaptureBackend(), locale=ctx.obj["locale"])

    transcript = asyncio.run(session.listen())
    if not transcript:
        click.echo("Error: Nothing was captured", err=True)
        ctx.exit(1)

    result = SentenceParser().parse(transcript, base_date=default_date)
    click.echo(f'Heard: "{transcript}"')
    echo_parse_result(result)
    draft = result.to_trip(default_date, Section.parse(section))
    store_trip_or_exit(ctx, draft, reminder=not no_reminder)


def register_commands(cli):
    """Register listen command with main CLI."""
    cli.add_command(listen)
