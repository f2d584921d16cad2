"""Domain model entities for vozruta.

These are pure data classes representing the ledger, independent of the
database schema.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional


class Section(str, Enum):
    """Ledger section a trip belongs to."""

    OUTBOUND = "ida"
    RETURN = "vuelta"
    PARCEL = "encomienda"

    @classmethod
    def parse(cls, value: "Section | str") -> "Section":
        """Resolve a section from its value ("ida") or name ("outbound").

        Raises:
            ValueError: If the value names no section
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for section in cls:
            if key in (section.value, section.name.lower()):
                return section
        valid = ", ".join(s.value for s in cls)
        raise ValueError(f"Unknown section '{value}'. Valid sections: {valid}")


@dataclass(frozen=True)
class Trip:
    """Trip ledger entry.

    ``id`` is None on a draft that has not been stored yet.
    """

    date: date
    section: Section
    description: str
    amount: Decimal
    passenger: Optional[str] = None
    destination: Optional[str] = None
    time: Optional[str] = None
    package_type: Optional[str] = None
    id: Optional[int] = None

    @property
    def who(self) -> str:
        """Passenger when known, description otherwise."""
        return (self.passenger or "").strip() or self.description


@dataclass(frozen=True)
class ParseResult:
    """Structured reading of one spoken or typed sentence."""

    description: str
    amount: Decimal
    passenger: Optional[str] = None
    destination: Optional[str] = None
    time: Optional[str] = None
    date: Optional[str] = None
    package_type: Optional[str] = None

    def to_trip(self, default_date: date, section: Section) -> Trip:
        """Build a trip draft, using ``default_date`` when no date was spoken."""
        trip_date = date.fromisoformat(self.date) if self.date else default_date
        return Trip(
            date=trip_date,
            section=section,
            description=self.description,
            amount=self.amount,
            passenger=self.passenger,
            destination=self.destination,
            time=self.time,
            package_type=self.package_type if section == Section.PARCEL else None,
        )


def _zero_totals() -> dict[Section, Decimal]:
    return {section: Decimal(0) for section in Section}


def _zero_counts() -> dict[Section, int]:
    return {section: 0 for section in Section}


@dataclass(frozen=True)
class DayAggregate:
    """Per-section totals and counts for one day's trips."""

    totals: dict[Section, Decimal] = field(default_factory=_zero_totals)
    counts: dict[Section, int] = field(default_factory=_zero_counts)

    @property
    def total(self) -> Decimal:
        return sum(self.totals.values(), Decimal(0))

    @property
    def count(self) -> int:
        return sum(self.counts.values())

    @classmethod
    def from_trips(cls, trips: Iterable[Trip]) -> "DayAggregate":
        totals = _zero_totals()
        counts = _zero_counts()
        for trip in trips:
            totals[trip.section] += trip.amount
            counts[trip.section] += 1
        return cls(totals=totals, counts=counts)


@dataclass(frozen=True)
class MonthlySummaryRow:
    """Trip counts for one "YYYY-MM" month."""

    month: str
    trip_count: int
    outbound_count: int
    return_count: int
    parcel_count: int

    def count_for(self, section: Section) -> int:
        return {
            Section.OUTBOUND: self.outbound_count,
            Section.RETURN: self.return_count,
            Section.PARCEL: self.parcel_count,
        }[section]


@dataclass(frozen=True)
class CalendarCell:
    """One cell of a month calendar grid."""

    date: date
    day: int
    is_current_month: bool
    count: int
