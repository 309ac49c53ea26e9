"""Seed the database with a sample card catalog for development.

Every artist gets two card versions. Run directly with:

    python -m cardcatalog.db.seed
"""

import logging

from . import Core, get_core, init_db

logger = logging.getLogger(__name__)

# (name, stage_name, group_name, country, debut_year, hometown, (v1 rarity, v2 rarity))
SAMPLE_ARTISTS = [
    ("Kim Namjoon", "RM", "BTS", "South Korea", 2013, "Ilsan", (3, 5)),
    ("Kim Seokjin", "Jin", "BTS", "South Korea", 2013, "Gwacheon", (2, 4)),
    ("Min Yoongi", "Suga", "BTS", "South Korea", 2013, "Daegu", (2, 4)),
    ("Jung Hoseok", "J-Hope", "BTS", "South Korea", 2013, "Gwangju", (2, 4)),
    ("Park Jimin", "Jimin", "BTS", "South Korea", 2013, "Busan", (3, 5)),
    ("Kim Taehyung", "V", "BTS", "South Korea", 2013, "Daegu", (3, 5)),
    ("Jeon Jungkook", "Jungkook", "BTS", "South Korea", 2013, "Busan", (3, 5)),
    ("Kim Jisoo", "Jisoo", "BLACKPINK", "South Korea", 2016, "Gunpo", (1, 3)),
    ("Jennie Kim", "Jennie", "BLACKPINK", "South Korea", 2016, "Seoul", (2, 4)),
    ("Roseanne Park", "Rose", "BLACKPINK", "New Zealand", 2016, "Auckland", (1, 3)),
    ("Lalisa Manobal", "Lisa", "BLACKPINK", "Thailand", 2016, "Buriram", (2, 5)),
]


def seed_catalog(core: Core) -> tuple[int, int]:
    """
    Insert the sample artists and their cards.

    Skips seeding when any artist already exists.

    Args:
        core: Core to write through (use an atomic Core)

    Returns:
        (artists_created, cards_created)
    """
    existing = core.artist.list_all()
    if existing:
        logger.info(f"Catalog already seeded ({len(existing)} artists), skipping")
        return 0, 0

    cards_created = 0
    for name, stage_name, group_name, country, debut_year, hometown, rarities in SAMPLE_ARTISTS:
        artist_id = core.artist.create(
            name=name,
            stage_name=stage_name,
            group_name=group_name,
            country=country,
            debut_year=debut_year,
            hometown=hometown,
            extra_info={"position": "member", "group": group_name},
        )
        for version, rarity_level in enumerate(rarities, start=1):
            slug = stage_name.lower().replace(" ", "-")
            core.card.create(
                artist_id=artist_id,
                version=version,
                rarity_level=rarity_level,
                image_url=f"/images/cards/{slug}-v{version}.png",
                image_alt_text=f"{stage_name} of {group_name}, version {version}",
            )
            cards_created += 1

    logger.info(f"Seeded {len(SAMPLE_ARTISTS)} artists and {cards_created} cards")
    return len(SAMPLE_ARTISTS), cards_created


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    init_db()
    with get_core(atomic=True) as core:
        seed_catalog(core)


if __name__ == "__main__":
    main()
