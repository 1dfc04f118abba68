"""Record store layer for payledger."""

from payledger.database.base import Database
from payledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
