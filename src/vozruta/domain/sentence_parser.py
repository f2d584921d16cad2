"""Sentence parser: turns a spoken or typed sentence into a trip reading.

The extractors always read the original sentence. Only after every field
has been read is the text stripped, and stripping removes the exact
literals that were matched, so the description never loses or keeps a
piece of the amount or time by accident.
"""

import logging
import re
from datetime import date
from decimal import Decimal
from typing import Optional, Union

from vozruta.domain.entities import ParseResult
from vozruta.utils.amount_parser import find_amount
from vozruta.utils.date_parser import extract_date, strip_date_phrases
from vozruta.utils.name_splitter import split_passenger_destination
from vozruta.utils.package_type import detect_package_type
from vozruta.utils.text import collapse_whitespace, strip_punctuation, title_case
from vozruta.utils.time_parser import extract_time, strip_time_phrases

logger = logging.getLogger(__name__)

NO_DESCRIPTION = "Sin descripción"

_MONEY_WORDS = re.compile(r"\b(?:pesos|peso|importe|monto|total)\b", re.IGNORECASE)
_CURRENCY_SYMBOL = re.compile(r"\$")


class SentenceParser:
    """Parser for free-form trip sentences."""

    def parse(self, sentence: str, base_date: Optional[Union[date, str]] = None) -> ParseResult:
        """Parse a sentence into a ParseResult.

        Never raises: fields that cannot be read fall back to 0, None or
        the "Sin descripción" placeholder.

        Args:
            sentence: Raw transcript or typed sentence
            base_date: Date relative expressions ("mañana") are resolved
                against, defaults to today

        Returns:
            ParseResult
        """
        sentence = sentence or ""

        time = extract_time(sentence)
        trip_date = extract_date(sentence, base_date)
        amount_match = find_amount(sentence)
        package_type = detect_package_type(sentence)

        cleaned = self.clean(sentence, amount_match.text if amount_match else None)
        split = split_passenger_destination(cleaned)
        passenger = title_case(split.passenger) if split.passenger else None
        destination = title_case(split.destination) if split.destination else None

        if passenger and destination:
            description = f"{passenger} a {destination}"
        elif passenger:
            description = passenger
        else:
            description = cleaned
        description = title_case(description) if description else NO_DESCRIPTION

        result = ParseResult(
            description=description,
            amount=amount_match.amount if amount_match else Decimal(0),
            passenger=passenger,
            destination=destination,
            time=time,
            date=trip_date,
            package_type=package_type,
        )
        logger.debug(
            "Parsed sentence",
            extra={"sentence": sentence, "result": result},
        )
        return result

    @staticmethod
    def clean(sentence: str, amount_text: Optional[str]) -> str:
        """Strip time, date, amount and money words from a sentence.

        Args:
            sentence: Original sentence
            amount_text: Literal amount matched in the sentence, if any

        Returns:
            Remaining text with whitespace collapsed
        """
        text = strip_time_phrases(sentence)
        text = strip_date_phrases(text)
        if amount_text:
            text = text.replace(amount_text, " ")
        text = _MONEY_WORDS.sub(" ", text)
        text = _CURRENCY_SYMBOL.sub(" ", text)
        return strip_punctuation(collapse_whitespace(text))


_default_parser = SentenceParser()


def parse_sentence(sentence: str, base_date: Optional[Union[date, str]] = None) -> ParseResult:
    """Parse a sentence with the shared SentenceParser."""
    return _default_parser.parse(sentence, base_date)
