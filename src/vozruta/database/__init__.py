"""Database layer for vozruta application."""

from vozruta.database.base import Database
from vozruta.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
