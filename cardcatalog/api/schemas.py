"""Pydantic response schemas for the catalog endpoints."""

import json
import sqlite3

from pydantic import BaseModel


def _parse_extra_info(value: str | None) -> dict | None:
    return json.loads(value) if value else None


class ArtistResponse(BaseModel):
    artist_id: int
    name: str
    stage_name: str | None = None
    group_name: str | None = None
    country: str | None = None
    debut_year: int | None = None
    hometown: str | None = None
    extra_info: dict | None = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "ArtistResponse":
        return cls(
            artist_id=row["artist_id"],
            name=row["name"],
            stage_name=row["stage_name"],
            group_name=row["group_name"],
            country=row["country"],
            debut_year=row["debut_year"],
            hometown=row["hometown"],
            extra_info=_parse_extra_info(row["extra_info"]),
        )


class CardResponse(BaseModel):
    """A card joined with its artist's fields."""

    card_id: int
    version: int
    rarity_level: int
    image_url: str | None = None
    image_alt_text: str | None = None
    card_created_at: str
    artist_id: int
    artist_name: str
    stage_name: str | None = None
    group_name: str | None = None
    country: str | None = None
    debut_year: int | None = None
    hometown: str | None = None
    extra_info: dict | None = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "CardResponse":
        return cls(
            card_id=row["card_id"],
            version=row["version"],
            rarity_level=row["rarity_level"],
            image_url=row["image_url"],
            image_alt_text=row["image_alt_text"],
            card_created_at=row["card_created_at"],
            artist_id=row["artist_id"],
            artist_name=row["artist_name"],
            stage_name=row["stage_name"],
            group_name=row["group_name"],
            country=row["country"],
            debut_year=row["debut_year"],
            hometown=row["hometown"],
            extra_info=_parse_extra_info(row["extra_info"]),
        )
