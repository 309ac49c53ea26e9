"""Artist catalog operations.

IMPORT CONVENTION:
- Core accesses these through core.artist property
"""

import json
import sqlite3

from ..exceptions import ResourceNotFound
from ..utils import isodatetime


class ArtistOperations:
    """Artist lookups and filters."""

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def list_all(self) -> list[sqlite3.Row]:
        """List every artist ordered by name."""
        return self._conn.execute(
            "SELECT * FROM artists ORDER BY name"
        ).fetchall()

    def get_by_id(self, artist_id: int) -> sqlite3.Row:
        """Get artist by ID.

        Raises:
            ResourceNotFound: If artist_id doesn't exist
        """
        row = self._conn.execute(
            "SELECT * FROM artists WHERE artist_id = ?",
            (artist_id,)
        ).fetchone()

        if not row:
            raise ResourceNotFound(
                f"Artist with ID {artist_id} was not found",
                {"artist_id": artist_id}
            )

        return row

    def search_by_name(self, term: str) -> list[sqlite3.Row]:
        """Case-insensitive substring search over name and stage name."""
        pattern = f"%{term.lower()}%"
        return self._conn.execute(
            """SELECT * FROM artists
               WHERE lower(name) LIKE ? OR lower(stage_name) LIKE ?
               ORDER BY name""",
            (pattern, pattern)
        ).fetchall()

    def list_by_group(self, group_name: str) -> list[sqlite3.Row]:
        """List members of a group, matching the group name case-insensitively."""
        return self._conn.execute(
            "SELECT * FROM artists WHERE lower(group_name) = lower(?) ORDER BY name",
            (group_name,)
        ).fetchall()

    def create(
        self,
        name: str,
        stage_name: str | None = None,
        group_name: str | None = None,
        country: str | None = None,
        debut_year: int | None = None,
        hometown: str | None = None,
        extra_info: dict | None = None,
    ) -> int:
        """Insert an artist.

        Returns:
            The store-assigned artist_id
        """
        cursor = self._conn.execute(
            """INSERT INTO artists
               (name, stage_name, group_name, country, debut_year, hometown, extra_info, created_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                name,
                stage_name,
                group_name,
                country,
                debut_year,
                hometown,
                json.dumps(extra_info) if extra_info is not None else None,
                isodatetime.now(),
            )
        )
        return cursor.lastrowid
