"""Terminal capture backend: the utterance is typed instead of spoken."""

from __future__ import annotations

import asyncio
import sys
from typing import Optional

import click

from vozruta.capture.base import CaptureError, PartialListener


class PromptCaptureBackend:
    """Reads one line from the terminal as the transcript."""

    def __init__(self, prompt_text: str = "Dictá el viaje"):
        self.prompt_text = prompt_text

    def is_available(self) -> bool:
        return sys.stdin is not None

    def request_permission(self) -> bool:
        return True

    async def start(self, locale: str, on_partial: PartialListener) -> Optional[str]:
        try:
            text = await asyncio.to_thread(
                click.prompt, self.prompt_text, default="", show_default=False
            )
        except (click.Abort, EOFError) as e:
            raise CaptureError("Input closed") from e
        on_partial(text)
        return text

    async def stop(self) -> None:
        return None
