"""Card catalog endpoints.

- GET /cards                       - All cards with artist fields
- GET /cards/rarity/<level>        - Cards of one rarity level (1-5)
- GET /cards/artist/<artist_id>    - One artist's cards
- GET /cards/<card_id>             - Single card
"""

from flask import Blueprint, jsonify

from ..db import get_core
from ..exceptions import ResourceNotFound, ValidationError
from .params import parse_positive_int
from .schemas import CardResponse

cards_bp = Blueprint("cards", __name__, url_prefix="/cards")

RARITY_NAMES = {
    1: "Common",
    2: "Uncommon",
    3: "Rare",
    4: "Epic",
    5: "Legendary",
}


@cards_bp.get("")
def list_cards():
    """
    List every card, ordered by group, artist name and version.

    Returns:
        200: {success, message, total_cards, data: [CardResponse]}
    """
    with get_core() as core:
        rows = core.card.list_all()

    return jsonify({
        "success": True,
        "message": f"Found {len(rows)} collectible cards",
        "total_cards": len(rows),
        "data": [CardResponse.from_row(row).model_dump() for row in rows],
    })


@cards_bp.get("/rarity/<level>")
def list_cards_by_rarity(level: str):
    """
    List cards of one rarity level.

    Returns:
        200: {success, message, rarity_level, rarity_name, card_count, data}
        400: VALIDATION_INVALID_PARAMETER unless level is an integer 1-5
    """
    try:
        rarity_level = int(level)
    except ValueError:
        rarity_level = 0

    if rarity_level not in RARITY_NAMES:
        raise ValidationError(
            "Invalid rarity level. Must be between 1 and 5.",
            {"value": level},
            code="VALIDATION_INVALID_PARAMETER",
        )

    with get_core() as core:
        rows = core.card.list_by_rarity(rarity_level)

    rarity_name = RARITY_NAMES[rarity_level]
    return jsonify({
        "success": True,
        "message": f"Found {len(rows)} {rarity_name} cards",
        "rarity_level": rarity_level,
        "rarity_name": rarity_name,
        "card_count": len(rows),
        "data": [CardResponse.from_row(row).model_dump() for row in rows],
    })


@cards_bp.get("/artist/<artist_id>")
def list_cards_by_artist(artist_id: str):
    """
    List one artist's cards, ordered by version.

    Returns:
        200: {success, message, artist, card_count, data}
        400: VALIDATION_INVALID_PARAMETER for a bad id
        404: No cards for that artist
    """
    artist_id_int = parse_positive_int(artist_id, "artist ID")

    with get_core() as core:
        rows = core.card.list_by_artist(artist_id_int)

    if not rows:
        raise ResourceNotFound(
            f"No cards found for artist ID {artist_id_int}",
            {"artist_id": artist_id_int}
        )

    cards = [CardResponse.from_row(row) for row in rows]
    first = cards[0]
    return jsonify({
        "success": True,
        "message": f"Found {len(cards)} cards for {first.stage_name or first.artist_name}",
        "artist": {
            "artist_id": first.artist_id,
            "name": first.artist_name,
            "stage_name": first.stage_name,
            "group": first.group_name,
        },
        "card_count": len(cards),
        "data": [card.model_dump() for card in cards],
    })


@cards_bp.get("/<card_id>")
def get_card(card_id: str):
    """
    Get a single card with its artist fields.

    Returns:
        200: {success, message, data: CardResponse}
        400: VALIDATION_INVALID_PARAMETER for a bad id
        404: Unknown card
    """
    card_id_int = parse_positive_int(card_id, "card ID")

    with get_core() as core:
        row = core.card.get_by_id(card_id_int)

    card = CardResponse.from_row(row)
    return jsonify({
        "success": True,
        "message": f"Found {card.stage_name or card.artist_name} - Version {card.version}",
        "data": card.model_dump(),
    })
