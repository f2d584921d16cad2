"""Generic SQLAlchemy database implementation."""

import logging
from typing import Optional
from datetime import date
from sqlalchemy import String, case, func, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from vozruta.database.base import Database
from vozruta.database.models import (
    Base,
    OPTIONAL_TRIP_COLUMNS,
    Trip,
    create_db_engine,
    create_session_factory,
)
from vozruta.database.mappers import trip_to_domain, trip_to_orm
from vozruta.domain.entities import (
    MonthlySummaryRow,
    Section,
    Trip as DomainTrip,
)
from vozruta.domain.errors import (
    NotFoundError,
    PersistenceUnavailableError,
    persistence_unavailable,
    trip_not_found,
)
from vozruta.utils.date_parser import month_bounds

logger = logging.getLogger(__name__)


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Nothing is opened until connect() is called.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.engine: Optional[Engine] = None
        self.session_factory: Optional[sessionmaker[Session]] = None
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self.session_factory is None:
            raise PersistenceUnavailableError("Database is not connected")
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def _commit(self, session: Session) -> None:
        try:
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            raise

    def connect(self) -> None:
        """Connect to the database, verifying it can be opened."""
        if self.engine is not None:
            return
        try:
            engine = create_db_engine(self.database_url)
            with engine.connect():
                pass
        except SQLAlchemyError as e:
            raise PersistenceUnavailableError(persistence_unavailable(e)) from e
        self.engine = engine
        self.session_factory = create_session_factory(engine)
        logger.debug("Connected to database", extra={"url": self.database_url})

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None
            self.session_factory = None

    def initialize_schema(self) -> None:
        """Create the trips table and add optional columns missing from older files."""
        if self.engine is None:
            raise PersistenceUnavailableError("Database is not connected")

        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise PersistenceUnavailableError(persistence_unavailable(e)) from e

        for column_name, column_type in OPTIONAL_TRIP_COLUMNS:
            try:
                with self.engine.begin() as conn:
                    conn.execute(text(f"ALTER TABLE trips ADD COLUMN {column_name} {column_type}"))
                logger.info("Added column to trips table", extra={"column": column_name})
            except OperationalError as e:
                if "duplicate column" not in str(e).lower():
                    raise PersistenceUnavailableError(persistence_unavailable(e)) from e
                # Column already exists

    # Trip operations
    def create_trip(self, trip: DomainTrip) -> int:
        """Insert a trip draft. Returns the id assigned by storage."""
        session = self._get_session()
        row = trip_to_orm(trip)
        session.add(row)
        self._commit(session)
        return row.id

    def get_trip(self, trip_id: int) -> Optional[DomainTrip]:
        """Get trip by ID."""
        session = self._get_session()
        row = session.query(Trip).filter(Trip.id == trip_id).first()
        if row is None:
            return None
        return trip_to_domain(row)

    def delete_trip(self, trip_id: int) -> None:
        """Delete a trip."""
        session = self._get_session()
        row = session.query(Trip).filter(Trip.id == trip_id).first()
        if row is None:
            raise NotFoundError(trip_not_found(trip_id))
        session.delete(row)
        self._commit(session)

    def list_trips_by_date(self, trip_date: date) -> list[DomainTrip]:
        """List every trip for a date, timed trips first by time, newest first on ties."""
        session = self._get_session()
        rows = (
            session.query(Trip)
            .filter(Trip.date == trip_date)
            .order_by(Trip.time.is_(None), Trip.time.asc(), Trip.id.desc())
            .all()
        )
        return [trip_to_domain(row) for row in rows]

    # Aggregate queries
    def get_monthly_summary(self) -> list[MonthlySummaryRow]:
        """Get trip counts per month and section, most recent month first."""
        session = self._get_session()
        month = func.substr(Trip.date, 1, 7, type_=String).label("month")

        def section_count(section: Section):
            return func.sum(case((Trip.section == section.value, 1), else_=0))

        rows = (
            session.query(
                month,
                func.count(Trip.id),
                section_count(Section.OUTBOUND),
                section_count(Section.RETURN),
                section_count(Section.PARCEL),
            )
            .group_by(month)
            .order_by(month.desc())
            .all()
        )
        return [
            MonthlySummaryRow(
                month=row[0],
                trip_count=row[1],
                outbound_count=row[2] or 0,
                return_count=row[3] or 0,
                parcel_count=row[4] or 0,
            )
            for row in rows
        ]

    def get_day_counts_for_month(self, month: str) -> dict[date, int]:
        """Get the number of trips per day for a "YYYY-MM" month."""
        start, end = month_bounds(month)
        session = self._get_session()
        rows = (
            session.query(Trip.date, func.count(Trip.id))
            .filter(Trip.date >= start, Trip.date <= end)
            .group_by(Trip.date)
            .all()
        )
        return {trip_date: count for trip_date, count in rows}
