"""Trip store: the in-memory ledger for the active date.

Every mutation is followed by a full reload of the affected date, so the
exposed trips are always a fresh read of storage and never an
incrementally patched copy. Callers must finish one operation before
issuing the next; the store does no locking of its own.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Optional

from vozruta.domain.entities import DayAggregate, MonthlySummaryRow, Section, Trip
from vozruta.domain.errors import ValidationError
from vozruta.domain.observable import Observable
from vozruta.utils.date_parser import DateLike, shift_date, to_date, to_month_iso
from vozruta.utils.package_type import PACKAGE_LABELS
from vozruta.utils.time_parser import normalize_time

if TYPE_CHECKING:
    from vozruta.database.base import Database

logger = logging.getLogger(__name__)


def _optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_trip(trip: Trip) -> Trip:
    """Validate a trip draft before it is written.

    Args:
        trip: Draft to validate

    Returns:
        The draft with normalized fields (trimmed text, Decimal amount,
        zero-padded time)

    Raises:
        ValidationError: If the draft cannot be stored
    """
    if trip.id is not None:
        raise ValidationError("A new trip must not have an id")

    description = (trip.description or "").strip()
    if not description:
        raise ValidationError("Description is required")

    if trip.amount is None:
        raise ValidationError("Amount is required")
    try:
        amount = Decimal(str(trip.amount))
    except InvalidOperation:
        raise ValidationError(f"Invalid amount '{trip.amount}'")
    if not amount.is_finite() or amount < 0:
        raise ValidationError(f"Amount must be zero or positive, got {trip.amount}")

    if trip.date is None:
        raise ValidationError("Date is required")

    try:
        section = Section.parse(trip.section)
        trip_date = to_date(trip.date)
        time = normalize_time(trip.time) if trip.time else None
    except ValueError as e:
        raise ValidationError(str(e)) from e

    package_type = _optional_text(trip.package_type)
    if package_type is not None:
        package_type = package_type.lower()
        if package_type not in PACKAGE_LABELS:
            valid = ", ".join(PACKAGE_LABELS)
            raise ValidationError(
                f"Unknown package type '{trip.package_type}'. Valid types: {valid}"
            )

    return replace(
        trip,
        date=trip_date,
        section=section,
        description=description,
        amount=amount,
        passenger=_optional_text(trip.passenger),
        destination=_optional_text(trip.destination),
        time=time,
        package_type=package_type,
    )


class TripStore:
    """Owns the trips of the active date and the totals derived from them.

    ``current_date`` and ``trips`` are observables: read them with
    ``get()`` and register for changes with ``subscribe()``.
    """

    def __init__(self, db: Database, initial_date: Optional[DateLike] = None):
        """Initialize trip store.

        The database is not touched until the first operation.

        Args:
            db: Database instance
            initial_date: Active date before the first load, defaults to today
        """
        self.db = db
        self._ready = False
        start = to_date(initial_date) if initial_date is not None else date.today()
        self.current_date: Observable[date] = Observable(start)
        self.trips: Observable[tuple[Trip, ...]] = Observable(())

    def _ensure_ready(self) -> None:
        """Open and initialize the database on first use.

        Raises:
            PersistenceUnavailableError: If the database cannot be opened;
                the next operation tries again
        """
        if self._ready:
            return
        self.db.connect()
        self.db.initialize_schema()
        self._ready = True
        logger.debug("Trip database ready")

    # Loading and navigation
    def load_trips(self, trip_date: DateLike) -> tuple[Trip, ...]:
        """Make ``trip_date`` the active date and load all of its trips.

        Args:
            trip_date: Date to load

        Returns:
            The loaded trips, ordered by time with untimed trips last
        """
        self._ensure_ready()
        day = to_date(trip_date)
        trips = tuple(self.db.list_trips_by_date(day))
        # Both values are in place before any listener runs
        self.current_date.set(day, notify=False)
        self.trips.set(trips, notify=False)
        self.current_date.notify()
        self.trips.notify()
        logger.debug("Loaded trips", extra={"date": day.isoformat(), "count": len(trips)})
        return trips

    def reload(self) -> tuple[Trip, ...]:
        """Reload the active date."""
        return self.load_trips(self.current_date.get())

    def select_date(self, trip_date: DateLike) -> tuple[Trip, ...]:
        """Change the active date."""
        return self.load_trips(trip_date)

    def next_day(self) -> tuple[Trip, ...]:
        """Move the active date one day forward."""
        return self.load_trips(shift_date(self.current_date.get(), 1))

    def prev_day(self) -> tuple[Trip, ...]:
        """Move the active date one day back."""
        return self.load_trips(shift_date(self.current_date.get(), -1))

    # Mutations
    def add_trip(self, draft: Trip) -> int:
        """Store a trip draft and reload its date.

        Args:
            draft: Trip without an id

        Returns:
            The id assigned by storage

        Raises:
            ValidationError: If the draft is invalid; nothing is written
        """
        trip = validate_trip(draft)
        self._ensure_ready()
        trip_id = self.db.create_trip(trip)
        logger.info(
            "Trip added",
            extra={"id": trip_id, "date": trip.date.isoformat(), "section": trip.section.value},
        )
        self.load_trips(trip.date)
        return trip_id

    def delete_trip(self, trip_id: int, trip_date: Optional[DateLike] = None) -> None:
        """Delete a trip by id and reload ``trip_date`` (the active date by default).

        Raises:
            NotFoundError: If no trip has that id
        """
        self._ensure_ready()
        self.db.delete_trip(trip_id)
        logger.info("Trip deleted", extra={"id": trip_id})
        self.load_trips(trip_date if trip_date is not None else self.current_date.get())

    # Derived values, computed from the current trips on every read
    @property
    def day_aggregate(self) -> DayAggregate:
        return DayAggregate.from_trips(self.trips.get())

    @property
    def total_revenue(self) -> Decimal:
        return self.day_aggregate.total

    @property
    def section_totals(self) -> dict[Section, Decimal]:
        return self.day_aggregate.totals

    @property
    def section_counts(self) -> dict[Section, int]:
        return self.day_aggregate.counts

    # Read-only queries
    def get_trip(self, trip_id: int) -> Optional[Trip]:
        self._ensure_ready()
        return self.db.get_trip(trip_id)

    def get_trips_by_date(self, trip_date: DateLike) -> list[Trip]:
        """Read the trips of any date without changing the active date."""
        self._ensure_ready()
        return self.db.list_trips_by_date(to_date(trip_date))

    def monthly_summary(self) -> list[MonthlySummaryRow]:
        """Trip counts per month and section, most recent month first."""
        self._ensure_ready()
        return self.db.get_monthly_summary()

    def day_counts_for_month(self, month: DateLike) -> dict[date, int]:
        """Number of trips per day for a "YYYY-MM" month (or the month of a date)."""
        self._ensure_ready()
        if isinstance(month, date):
            month = to_month_iso(month)
        return self.db.get_day_counts_for_month(month)
