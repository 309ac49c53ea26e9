"""User (credential store) operations.

IMPORT CONVENTION:
- Core accesses these through core.user property
- NO direct import needed when using Core API

Rows returned from get_by_email() include password_hash; nothing outside
the auth service should pass those rows to a response.
"""

import logging
import sqlite3

from ..exceptions import ConflictError, DatabaseError
from ..utils import isodatetime, uid

logger = logging.getLogger(__name__)

_PUBLIC_COLUMNS = "id, username, email, created_at, updated_at"


class UserOperations:
    """User row reads and writes through parameterized queries."""

    def __init__(self, conn: sqlite3.Connection):
        """Initialize user operations with a database connection.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
        """
        self._conn = conn

    def get_by_id(self, user_id: str) -> sqlite3.Row | None:
        """Get a user's public columns by ID, or None if no such user."""
        return self._conn.execute(
            f"SELECT {_PUBLIC_COLUMNS} FROM users WHERE id = ?",
            (user_id,)
        ).fetchone()

    def get_by_email(self, email: str) -> sqlite3.Row | None:
        """Get a user by email including password_hash, or None."""
        return self._conn.execute(
            f"SELECT {_PUBLIC_COLUMNS}, password_hash FROM users WHERE email = ?",
            (email,)
        ).fetchone()

    def find_conflicting(self, username: str, email: str) -> sqlite3.Row | None:
        """Find an existing user whose username or email matches.

        Args:
            username: Candidate username
            email: Candidate email

        Returns:
            The first matching row (id, username, email) or None
        """
        return self._conn.execute(
            "SELECT id, username, email FROM users WHERE username = ? OR email = ?",
            (username, email)
        ).fetchone()

    def create(self, username: str, email: str, password_hash: str) -> sqlite3.Row:
        """Insert a new user with an auto-generated UUID.

        Args:
            username: Unique username
            email: Unique email address
            password_hash: bcrypt hash of the user's password

        Returns:
            The created user's public columns

        Raises:
            ConflictError: If the username or email is already taken
            DatabaseError: If the insert fails for any other reason
        """
        user_id = uid.generate_uuid()
        now = isodatetime.now()

        try:
            self._conn.execute(
                """INSERT INTO users (id, username, email, password_hash, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (user_id, username, email, password_hash, now, now)
            )
        except sqlite3.IntegrityError as e:
            # Message looks like "UNIQUE constraint failed: users.email"
            message = str(e)
            conflicts = {}
            if "users.username" in message:
                conflicts["username"] = "Username is already taken"
            if "users.email" in message:
                conflicts["email"] = "Email is already registered"
            logger.warning(f"User insert rejected by unique constraint: {message}")
            raise ConflictError("User already exists", {"conflicts": conflicts})
        except sqlite3.Error as e:
            logger.error(f"User insert failed: {e}")
            raise DatabaseError("Failed to create user")

        return self.get_by_id(user_id)

    def delete(self, user_id: str) -> bool:
        """Delete a user by ID.

        Returns:
            True if a row was deleted
        """
        cursor = self._conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
        return cursor.rowcount > 0
