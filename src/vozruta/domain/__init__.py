"""Domain layer for vozruta application."""

from vozruta.domain.sentence_parser import SentenceParser, parse_sentence
from vozruta.domain.trip_store import TripStore
from vozruta.domain.history import MonthView
from vozruta.domain.reminders import ReminderScheduler

__all__ = [
    "SentenceParser",
    "parse_sentence",
    "TripStore",
    "MonthView",
    "ReminderScheduler",
]
