"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date

# Import entities directly to avoid circular import through domain/__init__.py
from vozruta.domain.entities import MonthlySummaryRow, Trip


class Database(ABC):
    """Abstract database interface for vozruta."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Create tables and add any optional columns that are missing.

        Must be idempotent.
        """
        pass

    # Trip operations
    @abstractmethod
    def create_trip(self, trip: Trip) -> int:
        """Insert a trip draft. Returns the id assigned by storage."""
        pass

    @abstractmethod
    def get_trip(self, trip_id: int) -> Optional[Trip]:
        """Get trip by ID."""
        pass

    @abstractmethod
    def delete_trip(self, trip_id: int) -> None:
        """Delete a trip by ID."""
        pass

    @abstractmethod
    def list_trips_by_date(self, trip_date: date) -> list[Trip]:
        """List every trip for a date.

        Ordered by time ascending with untimed trips last, ties broken by
        most recently inserted first.
        """
        pass

    # Aggregate queries
    @abstractmethod
    def get_monthly_summary(self) -> list[MonthlySummaryRow]:
        """Get trip counts per month and section, most recent month first."""
        pass

    @abstractmethod
    def get_day_counts_for_month(self, month: str) -> dict[date, int]:
        """Get the number of trips per day for a "YYYY-MM" month.

        Days without trips are absent from the result.
        """
        pass
