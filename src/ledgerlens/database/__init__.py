"""Database layer for ledgerlens."""

from ledgerlens.database.base import Database
from ledgerlens.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
