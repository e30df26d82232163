# anymessage/storage/__init__.py

"""Storage module initialization.

This module provides the persistence gateway the application depends on,
currently backed by a SQLite database.
"""

from .storage_interfaces import AbstractDatabase, AbstractTable, Row
from .sqlite_base import (
    open_sqlite_db_connection,
    init_sqlite_db,
    close_sqlite_db_connection
)
from .sqlite_gateway import SQLiteDatabase, SQLiteTable

__all__ = [
    "AbstractDatabase",
    "AbstractTable",
    "Row",
    "open_sqlite_db_connection",
    "init_sqlite_db",
    "close_sqlite_db_connection",
    "SQLiteDatabase",
    "SQLiteTable",
]
