"""Small text helpers shared by the parsers."""

import re

# Connector words kept in lower case when they are not the first word.
LOWERCASE_WORDS = frozenset({"a", "al", "de", "del", "el", "la", "las", "los", "y", "en", "con"})

_WHITESPACE = re.compile(r"\s+")
_TRAILING_PUNCTUATION = re.compile(r"^[\s,.;:!?¡¿-]+|[\s,.;:!?¡¿-]+$")


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces and trim the ends."""
    return _WHITESPACE.sub(" ", text).strip()


def strip_punctuation(text: str) -> str:
    """Trim whitespace and dangling punctuation from both ends."""
    return _TRAILING_PUNCTUATION.sub("", text)


def title_case(text: str) -> str:
    """Title-case a phrase the way names and places are written in Spanish.

    Each word gets an upper-case first letter and lower-case rest, except
    connector words ("a", "de", "la", ...) after the first position.

    Examples:
        "maria viaje" -> "Maria Viaje"
        "juan a la terminal" -> "Juan a la Terminal"
    """
    words = collapse_whitespace(text).split(" ")
    result = []
    for index, word in enumerate(words):
        lower = word.lower()
        if index > 0 and lower in LOWERCASE_WORDS:
            result.append(lower)
        else:
            result.append(lower[:1].upper() + lower[1:])
    return " ".join(result)
