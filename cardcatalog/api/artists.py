"""Artist catalog endpoints.

- GET /artists                 - All artists, ordered by name
- GET /artists/search?name=    - Case-insensitive name / stage name search
- GET /artists/group/<group>   - Members of a group (case-insensitive)
- GET /artists/<artist_id>     - Single artist
"""

from flask import Blueprint, jsonify, request

from ..db import get_core
from ..exceptions import ResourceNotFound, ValidationError
from .params import parse_positive_int
from .schemas import ArtistResponse

artists_bp = Blueprint("artists", __name__, url_prefix="/artists")


@artists_bp.get("")
def list_artists():
    """
    List all artists.

    Returns:
        200: {success, message, data: [ArtistResponse]}
    """
    with get_core() as core:
        rows = core.artist.list_all()

    return jsonify({
        "success": True,
        "message": f"Found {len(rows)} artists",
        "data": [ArtistResponse.from_row(row).model_dump() for row in rows],
    })


@artists_bp.get("/search")
def search_artists():
    """
    Search artists by name or stage name.

    Query Parameters:
        - name: str (required) - Substring to match, case-insensitive

    Returns:
        200: Matching artists (possibly none)
        400: VALIDATION_MISSING_FIELD if name is absent
    """
    name = request.args.get("name", "").strip()
    if not name:
        raise ValidationError(
            "Search name is required",
            {"example": "/artists/search?name=lisa"},
            code="VALIDATION_MISSING_FIELD",
        )

    with get_core() as core:
        rows = core.artist.search_by_name(name)

    return jsonify({
        "success": True,
        "message": f"Found {len(rows)} artists matching '{name}'",
        "data": [ArtistResponse.from_row(row).model_dump() for row in rows],
    })


@artists_bp.get("/group/<group_name>")
def list_group_members(group_name: str):
    """
    List the members of a group.

    Returns:
        200: {success, message, group, member_count, data}
        404: No artists in that group
    """
    with get_core() as core:
        rows = core.artist.list_by_group(group_name)

    if not rows:
        raise ResourceNotFound(
            f"No artists found in group '{group_name}'",
            {"group_name": group_name}
        )

    group = rows[0]["group_name"]
    return jsonify({
        "success": True,
        "message": f"Found {len(rows)} members of {group}",
        "group": group,
        "member_count": len(rows),
        "data": [ArtistResponse.from_row(row).model_dump() for row in rows],
    })


@artists_bp.get("/<artist_id>")
def get_artist(artist_id: str):
    """
    Get a single artist.

    Returns:
        200: {success, message, data: ArtistResponse}
        400: VALIDATION_INVALID_PARAMETER for a non-positive or non-numeric id
        404: Unknown artist
    """
    artist_id_int = parse_positive_int(artist_id, "artist ID")

    with get_core() as core:
        row = core.artist.get_by_id(artist_id_int)

    artist = ArtistResponse.from_row(row)
    return jsonify({
        "success": True,
        "message": f"Found {artist.stage_name or artist.name}",
        "data": artist.model_dump(),
    })
