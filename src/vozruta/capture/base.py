"""Capture port - abstraction for speech or typed transcript sources."""

from __future__ import annotations

from typing import Callable, Optional, Protocol

PartialListener = Callable[[str], None]


class CaptureError(Exception):
    """A capture backend failed while listening."""


class CaptureBackend(Protocol):
    """Port for transcript sources.

    A backend turns one utterance into text. While listening it may report
    partial transcripts through ``on_partial``; those are only used when
    the final result comes back empty.
    """

    def is_available(self) -> bool:
        """Return True if the device can capture at all."""
        ...

    def request_permission(self) -> bool:
        """Ask for capture permission. Returns True if granted."""
        ...

    async def start(self, locale: str, on_partial: PartialListener) -> Optional[str]:
        """Listen for one utterance and return its final transcript.

        Raises:
            CaptureError: If the backend fails
        """
        ...

    async def stop(self) -> None:
        """Stop listening and release the microphone or any other resource."""
        ...
