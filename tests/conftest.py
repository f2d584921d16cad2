"""Shared pytest fixtures for vozruta tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from vozruta.database.factories import create_sqlite_database
from vozruta.domain.entities import Section, Trip
from vozruta.domain.trip_store import TripStore


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def store(temp_db):
    """Create a TripStore on a temporary database, active on 2024-03-01."""
    return TripStore(temp_db, initial_date=date(2024, 3, 1))


@pytest.fixture
def make_trip():
    """Factory for trip drafts with sensible defaults."""

    def _make_trip(**overrides):
        fields = {
            "date": date(2024, 3, 1),
            "section": Section.OUTBOUND,
            "description": "Maria a Saenz",
            "amount": Decimal("30000"),
            "passenger": "Maria",
            "destination": "Saenz",
        }
        fields.update(overrides)
        return Trip(**fields)

    return _make_trip


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
