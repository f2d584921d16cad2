"""Amount parsing utilities.

Amounts are spoken and typed the Argentine way: "." groups thousands,
"," marks decimals, and "mil" stands for a thousand ("30 mil" is 30000).
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional

# A number with optional thousands/decimal groups and an optional "mil".
NUMBER = r"\d+(?:[.,]\d+)*(?:\s?mil\b)?"

_CURRENCY_PREFIXED = re.compile(rf"\$\s*({NUMBER})", re.IGNORECASE)
_CURRENCY_WORD_SUFFIXED = re.compile(rf"({NUMBER})\s*pesos?\b", re.IGNORECASE)
_KEYWORD_PREFIXED = re.compile(
    rf"\b(?:importe|monto|total)\s+(?:de\s+)?({NUMBER})", re.IGNORECASE
)
_ANY_NUMBER = re.compile(NUMBER, re.IGNORECASE)

# Words that turn the number before them into a clock reading.
_TIME_WORD_AFTER = re.compile(
    r"\s*(?:horas?\b|hs\b|y\s+media\b|de\s+la\b|mañana|tarde|noche)", re.IGNORECASE
)
_CLOCK_SEPARATOR = re.compile(r":\d")

_THOUSAND_WORD = re.compile(r"(?:(?<=\d)|\b)mil\s*$", re.IGNORECASE)
_NON_NUMERIC = re.compile(r"[^\d.,]")


@dataclass(frozen=True)
class AmountMatch:
    """An amount found in free text.

    Attributes:
        text: The literal substring that holds the amount (e.g. "35.000")
        amount: Normalized amount
        rule: Name of the rule that found it
    """

    text: str
    amount: Decimal
    rule: str


def normalize_amount(text: str) -> Decimal:
    """Normalize an amount literal into a non-negative Decimal.

    Handles:
    - "35.000" -> 35000 (dot as thousands separator)
    - "1.250,50" -> 1250.50
    - "12,5" -> 12.5 (decimal comma)
    - "30 mil" -> 30000

    Unparseable input yields 0.

    Args:
        text: Amount literal

    Returns:
        Decimal amount, always >= 0
    """
    if not text:
        return Decimal(0)

    text = text.strip()
    multiplier = 1
    if _THOUSAND_WORD.search(text):
        multiplier = 1000
        text = _THOUSAND_WORD.sub("", text)

    clean = _NON_NUMERIC.sub("", text)

    if "." in clean and "," in clean:
        # 1.250,50
        clean = clean.replace(".", "").replace(",", ".")
    elif "." in clean:
        parts = clean.split(".")
        if len(parts) > 2 or len(parts[-1]) == 3:
            clean = clean.replace(".", "")
    elif "," in clean:
        parts = clean.split(",")
        if len(parts) > 2 or len(parts[-1]) == 3:
            clean = clean.replace(",", "")
        else:
            clean = clean.replace(",", ".")

    try:
        value = Decimal(clean)
    except InvalidOperation:
        return Decimal(0)

    return abs(value * multiplier)


def _is_time_number(text: str, match: re.Match) -> bool:
    """Return True when the number at ``match`` reads as a clock time."""
    start, end = match.span()
    if _TIME_WORD_AFTER.match(text, end):
        return True
    # Either half of an "H:MM" reading
    if _CLOCK_SEPARATOR.match(text, end):
        return True
    return start > 0 and text[start - 1] == ":"


def find_amount(text: str) -> Optional[AmountMatch]:
    """Find the monetary amount in a sentence.

    Rules are tried in priority order and the first hit wins:
    1. "$" followed by a number
    2. a number followed by "peso(s)"
    3. a number after "importe", "monto" or "total"
    4. the first number that is not a clock time ("20 horas", "3 de la tarde")

    Args:
        text: Free text

    Returns:
        AmountMatch or None if the text has no amount
    """
    if not text:
        return None

    for rule, pattern in (
        ("currency_symbol", _CURRENCY_PREFIXED),
        ("currency_word", _CURRENCY_WORD_SUFFIXED),
        ("keyword", _KEYWORD_PREFIXED),
    ):
        match = pattern.search(text)
        if match:
            literal = match.group(1)
            return AmountMatch(text=literal, amount=normalize_amount(literal), rule=rule)

    # TODO: a day of month ("el 15") is still picked up here as an amount.
    for match in _ANY_NUMBER.finditer(text):
        if _is_time_number(text, match):
            continue
        literal = match.group(0)
        return AmountMatch(text=literal, amount=normalize_amount(literal), rule="first_number")

    return None


def extract_amount(text: str) -> Decimal:
    """Extract the amount from free text, or 0 when there is none."""
    match = find_amount(text)
    if match is None:
        return Decimal(0)
    return match.amount


def parse_amount(amount_str: str) -> Decimal:
    """Parse a manually typed amount.

    Unlike extract_amount, this rejects input without any digits.

    Args:
        amount_str: Amount string (e.g. "35.000", "$1.250,50", "30 mil")

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    if not re.search(r"\d", amount_str):
        raise ValueError(f"Could not parse amount '{amount_str}'")

    return normalize_amount(amount_str)
