"""Database layer for doublebook."""

from doublebook.database.base import Database
from doublebook.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
