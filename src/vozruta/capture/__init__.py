"""Transcript capture for vozruta application."""

from vozruta.capture.base import CaptureBackend, CaptureError
from vozruta.capture.prompt import PromptCaptureBackend
from vozruta.capture.session import CaptureSession, CaptureState

__all__ = [
    "CaptureBackend",
    "CaptureError",
    "CaptureSession",
    "CaptureState",
    "PromptCaptureBackend",
]
