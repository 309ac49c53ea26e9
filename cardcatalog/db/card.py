"""Card catalog operations.

IMPORT CONVENTION:
- Core accesses these through core.card property

Every read joins the owning artist so responses carry the artist fields
alongside the card.
"""

import sqlite3

from ..exceptions import ResourceNotFound
from ..utils import isodatetime

_CARD_SELECT = """
    SELECT
        c.card_id,
        c.version,
        c.rarity_level,
        c.image_url,
        c.image_alt_text,
        c.created_at AS card_created_at,
        a.artist_id,
        a.name AS artist_name,
        a.stage_name,
        a.group_name,
        a.country,
        a.debut_year,
        a.hometown,
        a.extra_info
    FROM cards c
    JOIN artists a ON c.artist_id = a.artist_id
"""


class CardOperations:
    """Card lookups and filters."""

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def list_all(self) -> list[sqlite3.Row]:
        """List every card ordered by group, artist name and version."""
        return self._conn.execute(
            _CARD_SELECT + " ORDER BY a.group_name, a.name, c.version"
        ).fetchall()

    def list_by_rarity(self, rarity_level: int) -> list[sqlite3.Row]:
        """List cards of one rarity level."""
        return self._conn.execute(
            _CARD_SELECT + " WHERE c.rarity_level = ? ORDER BY a.group_name, a.name, c.version",
            (rarity_level,)
        ).fetchall()

    def list_by_artist(self, artist_id: int) -> list[sqlite3.Row]:
        """List one artist's cards ordered by version."""
        return self._conn.execute(
            _CARD_SELECT + " WHERE c.artist_id = ? ORDER BY c.version",
            (artist_id,)
        ).fetchall()

    def get_by_id(self, card_id: int) -> sqlite3.Row:
        """Get card by ID.

        Raises:
            ResourceNotFound: If card_id doesn't exist
        """
        row = self._conn.execute(
            _CARD_SELECT + " WHERE c.card_id = ?",
            (card_id,)
        ).fetchone()

        if not row:
            raise ResourceNotFound(
                f"Card with ID {card_id} not found",
                {"card_id": card_id}
            )

        return row

    def create(
        self,
        artist_id: int,
        version: int,
        rarity_level: int,
        image_url: str | None = None,
        image_alt_text: str | None = None,
    ) -> int:
        """Insert a card for an existing artist.

        Returns:
            The store-assigned card_id
        """
        cursor = self._conn.execute(
            """INSERT INTO cards
               (artist_id, version, rarity_level, image_url, image_alt_text, created_at)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (artist_id, version, rarity_level, image_url, image_alt_text, isodatetime.now())
        )
        return cursor.lastrowid
