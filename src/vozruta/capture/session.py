"""One-shot transcript capture over a CaptureBackend."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Optional

from vozruta.capture.base import CaptureBackend, CaptureError
from vozruta.domain.observable import Observable

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "es-AR"


class CaptureState(str, Enum):
    """Whether a capture is in progress."""

    IDLE = "idle"
    LISTENING = "listening"


class _Capture:
    """State of one ``listen()`` call."""

    def __init__(self, owner: Optional[asyncio.Task]):
        self.owner = owner
        self.task: Optional[asyncio.Task] = None
        self.partial = ""
        self.stop_value: Optional[str] = None
        self.released = False
        self.finished = asyncio.Event()

    @property
    def stopped(self) -> bool:
        return self.stop_value is not None

    def on_partial(self, text: str) -> None:
        if text:
            self.partial = text


class CaptureSession:
    """Runs a single capture at a time and resolves it to a transcript.

    ``listen()`` always resolves: an unavailable device, a denied
    permission or an empty result all end in ``""``, and a backend error
    ends in whatever partial transcript was heard. Starting a new capture
    stops the one in progress first and waits for it to resolve.
    """

    def __init__(self, backend: CaptureBackend, locale: str = DEFAULT_LOCALE, retries: int = 1):
        """Initialize capture session.

        Args:
            backend: Transcript source
            locale: Locale passed to the backend
            retries: Extra attempts when a capture yields no text at all
        """
        self.backend = backend
        self.locale = locale
        self.retries = retries
        self.state: Observable[CaptureState] = Observable(CaptureState.IDLE)
        self._active: Optional[_Capture] = None

    @property
    def is_listening(self) -> bool:
        return self.state.get() is CaptureState.LISTENING

    @property
    def partial(self) -> str:
        """Latest partial transcript of the current capture."""
        return self._active.partial if self._active is not None else ""

    async def listen(self) -> str:
        """Capture one utterance.

        Returns:
            The final transcript, or the last partial transcript when the
            final one is empty, or "" when nothing could be captured
        """
        if self._active is not None:
            await self.stop()

        if not self.backend.is_available():
            logger.warning("Capture is not available on this device")
            return ""
        if not self.backend.request_permission():
            logger.warning("Capture permission denied")
            return ""

        capture = _Capture(asyncio.current_task())
        self._active = capture
        self.state.set(CaptureState.LISTENING)
        try:
            for attempt in range(self.retries + 1):
                capture.partial = ""
                text = await self._attempt(capture)
                if text is None:
                    return capture.stop_value
                if text:
                    return text
                logger.debug("Empty capture", extra={"attempt": attempt + 1})
            return ""
        finally:
            await self._release(capture)
            capture.finished.set()

    async def _attempt(self, capture: _Capture) -> Optional[str]:
        """Run the backend once. Returns None if the capture was stopped."""
        capture.task = asyncio.ensure_future(self.backend.start(self.locale, capture.on_partial))
        try:
            final = await capture.task
        except asyncio.CancelledError:
            if not capture.stopped:
                raise
            return None
        except CaptureError as e:
            logger.warning("Capture failed: %s", e)
            final = None
        finally:
            capture.task = None
        if capture.stopped:
            return None
        return (final or "").strip() or capture.partial.strip()

    async def _release(self, capture: _Capture) -> None:
        """Release the backend held by ``capture``, once."""
        if capture.released:
            return
        capture.released = True
        if self._active is capture:
            self._active = None
            self.state.set(CaptureState.IDLE)
        try:
            await self.backend.stop()
        except Exception:
            logger.exception("Failed to release capture backend")

    async def stop(self, value: Optional[str] = None) -> None:
        """Stop the capture in progress, if any. Never raises.

        Returns once the pending ``listen()`` has resolved.

        Args:
            value: Transcript the pending ``listen()`` resolves to; defaults
                to the latest partial transcript
        """
        capture = self._active
        if capture is None:
            return
        capture.stop_value = value if value is not None else capture.partial
        current = asyncio.current_task()
        task = capture.task
        if task is not None and not task.done() and task is not current:
            task.cancel()
        await self._release(capture)
        if capture.owner is not current:
            await capture.finished.wait()
