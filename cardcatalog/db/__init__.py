"""Database module for Card Catalog Core.

This module provides the Core API for database operations.
Core encapsulates connection management and exposes one operations object
per table.

ARCHITECTURE:
- Core owns its connection (no Flask g.db dependency)
- Connections run in sqlite autocommit mode; atomic Cores open an explicit
  BEGIN IMMEDIATE transaction on enter and COMMIT / ROLLBACK on exit
- Each table gets an encapsulated class with related operations:

    core.user    -> UserOperations   (credential store)
    core.artist  -> ArtistOperations (catalog)
    core.card    -> CardOperations   (catalog)

Usage:

    # Single read, connection closed on exit
    with get_core() as core:
        row = core.user.get_by_id(user_id)

    # Several writes that must land together
    with get_core(atomic=True) as core:
        artist_id = core.artist.create(name="Lalisa Manobal", stage_name="Lisa")
        core.card.create(artist_id, version=1, rarity_level=5)
"""

import logging
import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

from ..config import get_settings
from ..exceptions import DatabaseError
from ..schema import SCHEMA_PATH

if TYPE_CHECKING:
    from .artist import ArtistOperations
    from .card import CardOperations
    from .user import UserOperations

logger = logging.getLogger(__name__)


class Core:
    """
    Database Core with per-table operations.

    Connection Lifecycle:
    - atomic=True: BEGIN IMMEDIATE on __enter__, COMMIT or ROLLBACK on
      __exit__, then the connection closes
    - atomic=False: every statement commits on its own; the connection
      closes on __exit__ or close()
    """

    def __init__(self, connection: sqlite3.Connection, atomic: bool = False):
        """Initialize Core with a database connection.

        Args:
            connection: SQLite connection in autocommit mode with
                        row_factory set to sqlite3.Row
            atomic: If True, Core MUST be used as context manager and
                    wraps its operations in a single transaction.
        """
        self._conn = connection
        self._atomic = atomic
        self._user_ops = None
        self._artist_ops = None
        self._card_ops = None

    @property
    def user(self) -> "UserOperations":
        """User (credential store) operations, created on first access."""
        if self._user_ops is None:
            from .user import UserOperations
            self._user_ops = UserOperations(self._conn)
        return self._user_ops

    @property
    def artist(self) -> "ArtistOperations":
        """Artist catalog operations, created on first access."""
        if self._artist_ops is None:
            from .artist import ArtistOperations
            self._artist_ops = ArtistOperations(self._conn)
        return self._artist_ops

    @property
    def card(self) -> "CardOperations":
        """Card catalog operations, created on first access."""
        if self._card_ops is None:
            from .card import CardOperations
            self._card_ops = CardOperations(self._conn)
        return self._card_ops

    def __enter__(self) -> "Core":
        """Enter context manager, opening a write transaction when atomic.

        Returns:
            self for use in with-statement
        """
        if self._atomic:
            self._conn.execute("BEGIN IMMEDIATE")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager, committing or rolling back when atomic."""
        try:
            if self._atomic and self._conn.in_transaction:
                if exc_type is None:
                    self._conn.execute("COMMIT")
                else:
                    self._conn.execute("ROLLBACK")
        finally:
            self.close()

    def close(self) -> None:
        """Close the underlying connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None


def _create_connection(database_path: str | None = None) -> sqlite3.Connection:
    """Create a fresh database connection.

    Args:
        database_path: SQLite file path; defaults to the bound settings

    Returns:
        SQLite connection in autocommit mode with row_factory set to
        sqlite3.Row and foreign keys enabled.

    Raises:
        DatabaseError: If the database cannot be opened
    """
    db_path = Path(database_path or get_settings().database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        conn = sqlite3.connect(str(db_path), isolation_level=None)
    except sqlite3.Error as e:
        logger.error(f"Database connection failed: {e}")
        raise DatabaseError("Database connection failed", {"database_path": str(db_path)})

    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def get_core(atomic: bool = False, database_path: str | None = None) -> Core:
    """
    Get a database Core instance.

    Args:
        atomic: If True, returns a Core that MUST be used as context manager.
                Use when several writes must commit or roll back together
                (seeding the catalog).
        database_path: Override for the settings' database path

    Returns:
        Core instance with user/artist/card operations
    """
    return Core(_create_connection(database_path), atomic=atomic)


# ============================================================================
# DATABASE INITIALIZATION
# ============================================================================

def init_db(database_path: str | None = None) -> None:
    """Initialize database by running schema.sql if not already initialized."""
    db_path = Path(database_path or get_settings().database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    try:
        cursor = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'"
        )
        if cursor.fetchone():
            # Database already initialized, skip
            return

        conn.executescript(SCHEMA_PATH.read_text())
        conn.commit()
        logger.info(f"Database schema applied: {db_path}")
    finally:
        conn.close()
