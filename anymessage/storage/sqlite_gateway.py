# anymessage/storage/sqlite_gateway.py
import re
import sqlite3
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .storage_interfaces import AbstractDatabase, AbstractTable, Row
from .sqlite_base import open_sqlite_db_connection, close_sqlite_db_connection

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _identifier(name: str) -> str:
    """Reject anything that is not a plain SQL identifier before it is interpolated."""
    if not _IDENTIFIER_RE.match(name):
        raise ValueError(f"Invalid SQL identifier: '{name}'")
    return name


def _where_clause(criteria: Dict[str, Any]) -> Tuple[str, List[Any]]:
    """Build an AND-combined equality WHERE clause. None matches NULL."""
    if not criteria:
        return "", []
    clauses = []
    params: List[Any] = []
    for column, value in criteria.items():
        if value is None:
            clauses.append(f"{_identifier(column)} IS NULL")
        else:
            clauses.append(f"{_identifier(column)} = ?")
            params.append(value)
    return " WHERE " + " AND ".join(clauses), params


class SQLiteTable(AbstractTable):
    """SQLite implementation of table-style access for one relation."""

    def __init__(self, database: "SQLiteDatabase", name: str):
        self._database = database
        self.name = _identifier(name)

    async def find_one(self, criteria: Dict[str, Any]) -> Optional[Row]:
        where, params = _where_clause(criteria)
        rows = await self._database.query(f"SELECT * FROM {self.name}{where} LIMIT 1", params)
        return rows[0] if rows else None

    async def find(self, criteria: Dict[str, Any]) -> List[Row]:
        where, params = _where_clause(criteria)
        return await self._database.query(f"SELECT * FROM {self.name}{where}", params)

    async def insert(self, fields: Dict[str, Any]) -> Optional[Row]:
        if not fields:
            raise ValueError(f"Cannot insert an empty row into '{self.name}'.")
        columns = ", ".join(_identifier(column) for column in fields)
        placeholders = ", ".join("?" for _ in fields)
        cursor = await self._database.execute(
            f"INSERT INTO {self.name} ({columns}) VALUES ({placeholders})",
            tuple(fields.values())
        )
        return await self.find_one({"rowid": cursor.lastrowid})

    async def update(self, criteria: Dict[str, Any], fields: Dict[str, Any]) -> Optional[Row]:
        if not fields:
            return await self.find_one(criteria)

        set_clause = ", ".join(f"{_identifier(column)} = ?" for column in fields)
        where, where_params = _where_clause(criteria)
        cursor = await self._database.execute(
            f"UPDATE {self.name} SET {set_clause}{where}",
            tuple(fields.values()) + tuple(where_params)
        )
        if cursor.rowcount == 0:
            return None

        # Columns used as criteria may have been rewritten by this update
        refreshed = {column: fields.get(column, value) for column, value in criteria.items()}
        return await self.find_one(refreshed)


class SQLiteDatabase(AbstractDatabase):
    """
    SQLite implementation of the persistence gateway.

    Owns a single connection opened in initialize() and closed in teardown().
    Write statements are committed immediately and rolled back on error.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._conn: Optional[sqlite3.Connection] = None

    async def initialize(self) -> None:
        if self._conn is None:
            self._conn = await open_sqlite_db_connection(self.db_path)
        logger.info(f"SQLiteDatabase initialized for '{self.db_path}'.")

    async def teardown(self) -> None:
        if self._conn is not None:
            await close_sqlite_db_connection(self._conn)
            self._conn = None

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise RuntimeError("SQLiteDatabase used before initialize() was awaited.")
        return self._conn

    def table(self, name: str) -> SQLiteTable:
        return SQLiteTable(self, name)

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Cursor:
        """
        Execute a write statement with proper error handling and transaction management.

        Raises:
            sqlite3.Error: If the statement fails; the transaction is rolled back
        """
        conn = self.connection
        cursor = conn.cursor()
        try:
            logger.debug(f"Executing SQL: {sql} with params: {params}")
            cursor.execute(sql, tuple(params))
            conn.commit()
        except sqlite3.Error as e:
            logger.error(f"SQLite error executing query '{sql}': {e}", exc_info=True)
            conn.rollback()
            raise
        return cursor

    async def query(self, sql: str, params: Sequence[Any] = ()) -> List[Row]:
        cursor = self.connection.cursor()
        try:
            cursor.execute(sql, tuple(params))
            return [dict(row) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            logger.error(f"SQLite error during query '{sql}': {e}", exc_info=True)
            raise
