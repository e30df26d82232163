# anymessage/storage/sqlite_base.py
import sqlite3
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


async def open_sqlite_db_connection(db_path: str) -> sqlite3.Connection:
    """
    Open a SQLite database connection and make sure the schema exists.

    Ensures the database directory exists before connecting. The caller owns
    the returned connection and must close it with close_sqlite_db_connection.

    Args:
        db_path: Filesystem path of the database, or ":memory:"

    Returns:
        sqlite3.Connection: The database connection instance

    Raises:
        sqlite3.Error: If database connection fails
    """
    try:
        if db_path != ":memory:":
            resolved = Path(db_path).resolve()
            resolved.parent.mkdir(parents=True, exist_ok=True)
            db_path = str(resolved)

        logger.info(f"Attempting to connect to SQLite DB at: {db_path}")

        # Enable thread-safe access for async/FastAPI compatibility
        conn = sqlite3.connect(db_path, check_same_thread=False)
        # Enable column access by name instead of index
        conn.row_factory = sqlite3.Row

        logger.info(f"Successfully connected to SQLite DB: {db_path}")
    except sqlite3.Error as e:
        logger.error(f"Error connecting to SQLite database at {db_path}: {e}", exc_info=True)
        raise

    await init_sqlite_db(conn)
    return conn


async def init_sqlite_db(conn: sqlite3.Connection) -> None:
    """
    Initialize the SQLite database schema by creating all required tables.

    Uses IF NOT EXISTS to safely handle repeated initialization calls.
    """
    cursor = conn.cursor()

    # Tenants, one per subdomain
    cursor.execute('''
    CREATE TABLE IF NOT EXISTS teams (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        subdomain TEXT NOT NULL UNIQUE,
        customer_id TEXT
    )
    ''')
    logger.info("Ensured 'teams' table exists.")

    # Users belong to at most one team
    cursor.execute('''
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        email TEXT NOT NULL UNIQUE,
        team_id INTEGER REFERENCES teams(id),
        token_hash TEXT UNIQUE,
        created_at TEXT NOT NULL,
        last_used_at TEXT
    )
    ''')
    logger.info("Ensured 'users' table exists.")

    # Third-party provider credentials per team
    cursor.execute('''
    CREATE TABLE IF NOT EXISTS integrations (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        team_id INTEGER NOT NULL REFERENCES teams(id),
        name TEXT NOT NULL,
        authentication TEXT NOT NULL,
        providers TEXT NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        UNIQUE (team_id, name)
    )
    ''')
    logger.info("Ensured 'integrations' table exists.")

    conn.commit()
    logger.info("SQLite database schema initialized/verified.")


async def close_sqlite_db_connection(conn: sqlite3.Connection) -> None:
    """Close a connection opened by open_sqlite_db_connection."""
    logger.info("Closing SQLite DB connection.")
    conn.close()
    logger.info("SQLite DB connection closed.")
