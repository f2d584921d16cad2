"""SQLAlchemy models for the vozruta database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Date,
    Numeric,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class Trip(Base):
    """Trip ledger model."""

    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False, index=True)
    section = Column(String, nullable=False)
    description = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    time = Column(String, nullable=True)
    passenger = Column(String, nullable=True)
    destination = Column(String, nullable=True)
    package_type = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


# Columns added after the first release of the trips table. Older databases
# get them through ALTER TABLE when the schema is initialized.
OPTIONAL_TRIP_COLUMNS = (
    ("time", "TEXT"),
    ("passenger", "TEXT"),
    ("destination", "TEXT"),
    ("package_type", "TEXT"),
    ("created_at", "DATETIME"),
)


def create_db_engine(database_url: str) -> Engine:
    """Create a SQLAlchemy engine."""
    return create_engine(database_url, echo=False)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory bound to an engine."""
    return sessionmaker(bind=engine)
