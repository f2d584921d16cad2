"""Date parsing utilities.

All day arithmetic goes through a datetime anchored at local midday, so a
daylight-saving transition can never push a result onto the wrong civil
date.
"""

import re
from datetime import date, datetime, timedelta
from typing import Optional, Union

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

DateLike = Union[date, str]

_TODAY = re.compile(r"\bhoy\b", re.IGNORECASE)
_DAY_AFTER_TOMORROW = re.compile(r"\bpasado\s+ma[ñn]ana\b", re.IGNORECASE)
_TOMORROW = re.compile(r"\bma[ñn]ana\b", re.IGNORECASE)
_IN_DAYS = re.compile(r"\b(?:en|dentro\s+de)\s+(\d+)\s+d[ií]as?\b", re.IGNORECASE)

# "de la mañana", "por la mañana" and "8 mañana" name a time of day.
_MORNING = re.compile(
    r"(?:\b(?:de|por)\s+la\s+|(?<!\d)\d{1,2}\s*)ma[ñn]ana\b", re.IGNORECASE
)

# Phrases removed from a sentence once the date has been read.
DATE_PHRASES = (
    re.compile(r"(?:\bpara\s+)?\bhoy\b", re.IGNORECASE),
    re.compile(r"(?:\bpara\s+)?\bpasado\s+ma[ñn]ana\b", re.IGNORECASE),
    re.compile(r"(?:\bpara\s+)?(?<!la\s)\bma[ñn]ana\b", re.IGNORECASE),
    re.compile(r"(?:\bpara\s+)?\b(?:en|dentro\s+de)\s+\d+\s+d[ií]as?\b", re.IGNORECASE),
)


def _midday(value: date) -> datetime:
    return datetime(value.year, value.month, value.day, 12, 0, 0)


def to_date(value: DateLike) -> date:
    """Coerce a date or a "YYYY-MM-DD" string into a date.

    Raises:
        ValueError: If the string is not an ISO date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip())


def shift_date(value: DateLike, days: int) -> date:
    """Move a date by a number of days using midday-anchored arithmetic."""
    return (_midday(to_date(value)) + timedelta(days=days)).date()


def extract_date(text: str, base_date: Optional[DateLike] = None) -> Optional[str]:
    """Resolve a relative date expression in free text.

    Recognized, in priority order:
    - "hoy" -> base date
    - "pasado mañana" -> base + 2 days
    - "mañana" -> base + 1 day (not "de la mañana", which is a time of day)
    - "en N días" / "dentro de N días" -> base + N days

    Args:
        text: Free text
        base_date: Date the expression is relative to, defaults to today

    Returns:
        Date as "YYYY-MM-DD" or None
    """
    if not text:
        return None

    base = to_date(base_date) if base_date is not None else date.today()

    if _TODAY.search(text):
        return base.isoformat()
    if _DAY_AFTER_TOMORROW.search(text):
        return shift_date(base, 2).isoformat()
    if _TOMORROW.search(_MORNING.sub(" ", text)):
        return shift_date(base, 1).isoformat()

    match = _IN_DAYS.search(text)
    if match:
        return shift_date(base, int(match.group(1))).isoformat()

    return None


def strip_date_phrases(text: str) -> str:
    """Remove every relative date phrase from the text."""
    for pattern in DATE_PHRASES:
        text = pattern.sub(" ", text)
    return text


def parse_date(date_str: str) -> date:
    """Parse a date typed on the command line.

    Supports:
    - ISO dates: "2024-01-15"
    - Relative dates: "hoy"/"today", "ayer"/"yesterday",
      "mañana"/"tomorrow", "pasado mañana"
    - Day-first dates: "15/01/2024"

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "hoy": today,
        "yesterday": shift_date(today, -1),
        "ayer": shift_date(today, -1),
        "tomorrow": shift_date(today, 1),
        "mañana": shift_date(today, 1),
        "manana": shift_date(today, 1),
        "pasado mañana": shift_date(today, 2),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        return date.fromisoformat(date_str)
    except ValueError:
        pass

    # Local convention is day first: 03/04/2024 is the 3rd of April
    try:
        dt = date_parser.parse(date_str, dayfirst=True)
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_month(month_str: str) -> date:
    """Parse a "YYYY-MM" month into the first day of that month.

    Raises:
        ValueError: If the month string is malformed
    """
    match = re.fullmatch(r"\s*(\d{4})-(\d{1,2})\s*", month_str or "")
    if match is None:
        raise ValueError(f"Invalid month '{month_str}': expected YYYY-MM")
    return date(int(match.group(1)), int(match.group(2)), 1)


def to_month_iso(value: DateLike) -> str:
    """Return the "YYYY-MM" month a date belongs to."""
    return to_date(value).strftime("%Y-%m")


def shift_month(month_str: str, months: int) -> str:
    """Move a "YYYY-MM" month forwards or backwards."""
    first = _midday(parse_month(month_str)) + relativedelta(months=months)
    return to_month_iso(first.date())


def month_bounds(month_str: str) -> tuple[date, date]:
    """Return the first and last day of a "YYYY-MM" month."""
    start = parse_month(month_str)
    end = start + relativedelta(months=1) - timedelta(days=1)
    return start, end
