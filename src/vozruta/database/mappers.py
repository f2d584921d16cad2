"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from decimal import Decimal

from vozruta.domain import entities as domain
from vozruta.database.models import Trip as ORMTrip


def trip_to_domain(orm_trip: ORMTrip) -> domain.Trip:
    """Convert SQLAlchemy Trip model to domain Trip entity."""
    return domain.Trip(
        id=orm_trip.id,
        date=orm_trip.date,
        section=domain.Section(orm_trip.section),
        description=orm_trip.description,
        amount=Decimal(orm_trip.amount),
        passenger=orm_trip.passenger,
        destination=orm_trip.destination,
        time=orm_trip.time,
        package_type=orm_trip.package_type,
    )


def trip_to_orm(trip: domain.Trip) -> ORMTrip:
    """Convert a domain Trip draft to a new SQLAlchemy Trip row.

    The id is left for the database to assign.
    """
    return ORMTrip(
        date=trip.date,
        section=trip.section.value,
        description=trip.description,
        amount=trip.amount,
        passenger=trip.passenger,
        destination=trip.destination,
        time=trip.time,
        package_type=trip.package_type,
    )
