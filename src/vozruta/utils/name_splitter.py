"""Split a "who / where" phrase into passenger and destination."""

import re
from dataclasses import dataclass
from typing import Optional

from vozruta.utils.text import strip_punctuation

# Ordered from most to least specific
_CONNECTORS = (
    re.compile(r"\bviajes?\s+a\b", re.IGNORECASE),
    re.compile(r"\ba\b", re.IGNORECASE),
)


@dataclass(frozen=True)
class NameSplit:
    """Passenger and destination read from a phrase."""

    passenger: Optional[str] = None
    destination: Optional[str] = None


def _clean(value: str) -> Optional[str]:
    value = strip_punctuation(value)
    return value or None


def split_passenger_destination(text: str) -> NameSplit:
    """Split cleaned text on its rightmost "to" connector.

    "viaje a" is tried before a bare "a". Text before the connector is the
    passenger and text after it the destination. Without a connector the
    whole text is the passenger.

    Examples:
        "Maria viaje a Saenz" -> ("Maria", "Saenz")
        "Juan a la terminal" -> ("Juan", "la terminal")
        "Pedro" -> ("Pedro", None)
    """
    if not text:
        return NameSplit()

    for connector in _CONNECTORS:
        matches = list(connector.finditer(text))
        if matches:
            last = matches[-1]
            return NameSplit(
                passenger=_clean(text[: last.start()]),
                destination=_clean(text[last.end():]),
            )

    return NameSplit(passenger=_clean(text))
