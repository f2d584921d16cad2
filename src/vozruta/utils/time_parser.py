"""Clock time parsing utilities."""

import re
from typing import Callable, Optional

# Patterns never start inside a longer number ("30000 mañana" has no hour).
_DIRECT = re.compile(r"(?<!\d)(\d{1,2}):(\d{2})(?!\d)")
_HOURS = re.compile(r"(?<!\d)(\d{1,2})\s*(?:horas?|hs)\b", re.IGNORECASE)
_PERIOD = re.compile(
    r"(?<!\d)(\d{1,2})\s*(?:de\s+la\s+)?(mañana|tarde|noche)", re.IGNORECASE
)
_HALF_PAST = re.compile(r"(?<!\d)(\d{1,2})\s*y\s*media\b", re.IGNORECASE)

# Phrases removed from a sentence once the time has been read. A leading
# "a las" / "a la" goes with them.
TIME_PHRASES = (
    re.compile(r"(?:\ba\s+las?\s+)?(?<!\d)\d{1,2}:\d{2}(?!\d)", re.IGNORECASE),
    re.compile(r"(?:\ba\s+las?\s+)?(?<!\d)\d{1,2}\s*(?:horas?|hs)\b", re.IGNORECASE),
    re.compile(
        r"(?:\ba\s+las?\s+)?(?<!\d)\d{1,2}\s*(?:de\s+la\s+)?(?:mañana|tarde|noche)\b",
        re.IGNORECASE,
    ),
    re.compile(r"(?:\ba\s+las?\s+)?(?<!\d)\d{1,2}\s*y\s*media\b", re.IGNORECASE),
)


def _format(hours: int, minutes: int) -> Optional[str]:
    if 0 <= hours <= 23 and 0 <= minutes <= 59:
        return f"{hours:02d}:{minutes:02d}"
    return None


def _direct(text: str) -> Optional[str]:
    match = _DIRECT.search(text)
    if match is None:
        return None
    return _format(int(match.group(1)), int(match.group(2)))


def _hours(text: str) -> Optional[str]:
    match = _HOURS.search(text)
    if match is None:
        return None
    return _format(int(match.group(1)), 0)


def _period(text: str) -> Optional[str]:
    match = _PERIOD.search(text)
    if match is None:
        return None
    hours = int(match.group(1))
    period = match.group(2).lower()
    if period in ("tarde", "noche") and hours < 12:
        hours += 12
    return _format(hours, 0)


def _half_past(text: str) -> Optional[str]:
    match = _HALF_PAST.search(text)
    if match is None:
        return None
    return _format(int(match.group(1)), 30)


_RULES: tuple[Callable[[str], Optional[str]], ...] = (_direct, _hours, _period, _half_past)


def extract_time(text: str) -> Optional[str]:
    """Extract a clock time from free text.

    Recognized forms, in priority order:
    - "15:30", "9:05"
    - "20 horas", "20 hs"
    - "3 de la tarde", "9 de la noche", "8 de la mañana"
    - "10 y media"

    A form whose hour or minute is out of range counts as no match and
    the next form is tried.

    Args:
        text: Free text

    Returns:
        Time as "HH:MM" or None
    """
    if not text:
        return None

    for rule in _RULES:
        result = rule(text)
        if result is not None:
            return result
    return None


def strip_time_phrases(text: str) -> str:
    """Remove every recognizable time phrase from the text."""
    for pattern in TIME_PHRASES:
        text = pattern.sub(" ", text)
    return text


def normalize_time(time_str: str) -> str:
    """Validate a manually entered time and return it as "HH:MM".

    Raises:
        ValueError: If the value is not a valid 24-hour "H:MM" time
    """
    match = re.fullmatch(r"\s*(\d{1,2}):(\d{2})\s*", time_str or "")
    if match is None:
        raise ValueError(f"Invalid time '{time_str}': expected HH:MM")
    result = _format(int(match.group(1)), int(match.group(2)))
    if result is None:
        raise ValueError(f"Invalid time '{time_str}': out of range")
    return result
