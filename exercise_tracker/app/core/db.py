"""
SQLite storage for users and their exercise entries.

The ``Database`` client is constructed by ``create_app`` from the
settings, opened on application start (creating the file and applying
migrations) and closed on shutdown.  Handlers receive it through the
``get_database`` dependency instead of importing a global connection.

Every operation runs on its own short‑lived connection.  The blocking
``sqlite3`` calls are pushed to worker threads with ``Database.run`` so
that independent lookups can proceed concurrently on the event loop.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import asyncio
import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, List, Tuple, TypeVar

from fastapi import Request

from .config import Settings
from .errors import PersistenceError

logger = logging.getLogger(__name__)

T = TypeVar("T")

SQLITE_URL_PREFIX = "sqlite:///"

MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            username TEXT NOT NULL,
            count INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        -- user_id is a weak reference: no foreign key, no cascading delete.
        CREATE TABLE IF NOT EXISTS exercises (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id TEXT NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            duration INTEGER NOT NULL,
            date TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
    # Migration 2: index for log lookups by user and date range
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_exercises_user_date ON exercises(user_id, date);
        """,
    ),
]


def get_database_path(settings: Settings) -> str:
    """Compute the path to the SQLite database file.

    ``settings.database_url`` names the directory holding the database,
    optionally as a ``sqlite:///`` URL; ``settings.db_name`` names the
    file (``.db`` is appended when missing).  Relative locations are
    resolved against the project root.
    """
    location = settings.database_url
    if location.startswith(SQLITE_URL_PREFIX):
        location = location[len(SQLITE_URL_PREFIX):]
    file_name = settings.db_name if settings.db_name.endswith(".db") else f"{settings.db_name}.db"
    path = Path(location) / file_name
    if os.path.isabs(path):
        return str(path)
    base_dir = Path(__file__).resolve().parent.parent.parent.parent  # project root
    return str((base_dir / path).resolve())


class Database:
    """Client for the tracker's SQLite store."""

    def __init__(self, path: str):
        self.path = path
        self._opened = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(get_database_path(settings))

    def open(self) -> None:
        """Create the database file if needed and apply pending migrations."""
        Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        self._opened = True
        with self.cursor("database migration failed") as cursor:
            cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
            row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0
            for version, sql in MIGRATIONS:
                if version > current_version:
                    cursor.executescript(sql)
                    cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                    current_version = version
        logger.info("Database connected at %s", self.path)

    def close(self) -> None:
        self._opened = False
        logger.info("Database closed")

    def connect(self) -> sqlite3.Connection:
        """Create and return a new connection with name-addressable rows."""
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def cursor(
        self, failure: str = "database operation failed", immediate: bool = False
    ) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor inside a transaction.

        The transaction is committed when the block exits normally and
        rolled back otherwise.  With ``immediate`` the write lock is
        taken up front, so reads in the block see the state the block's
        writes are applied to.  Any ``sqlite3.Error`` (including using
        the client before ``open`` or after ``close``) is logged and
        re-raised as ``PersistenceError(failure)``, as is an
        ``OverflowError`` from binding an integer sqlite cannot store.
        """
        if not self._opened:
            logger.error("%s: database is not open", failure)
            raise PersistenceError(failure)
        try:
            conn = self.connect()
        except sqlite3.Error as exc:
            logger.exception(failure)
            raise PersistenceError(failure) from exc
        try:
            cursor = conn.cursor()
            if immediate:
                cursor.execute("BEGIN IMMEDIATE")
            yield cursor
            conn.commit()
        except (sqlite3.Error, OverflowError) as exc:
            conn.rollback()
            logger.exception(failure)
            raise PersistenceError(failure) from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    async def run(self, operation: Callable[..., T], *args: Any) -> T:
        """Run a blocking store operation on a worker thread."""
        return await asyncio.to_thread(operation, *args)


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the application's ``Database``."""
    return request.app.state.database
