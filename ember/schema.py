"""Schema lifecycle and the sample data set."""

import logging
from datetime import timedelta

import sqlalchemy as sa
from sqlalchemy.engine import Engine

from .clock import utc_now_iso
from .errors import InvalidState
from .models import metadata
from .repositories import (
    LootboxDropRepository,
    LootboxRepository,
    LootboxTypeRepository,
    PlayerRepository,
    PriceHistoryRepository,
    StoveTypeRepository,
)
from .services import ListingService, OwnershipService, TradeService
from .unit import UnitOfWork

logger = logging.getLogger(__name__)

# Tables older deployments carried that no model declares any more
LEGACY_TABLES = ("ChatMessage", "MiniGameSession")


def _duplicate_active_listings(conn) -> dict:
    rows = conn.execute(sa.text(
        "SELECT stoveId, listingId FROM Listing WHERE status = 'active' AND stoveId IN ("
        "SELECT stoveId FROM Listing WHERE status = 'active' "
        "GROUP BY stoveId HAVING COUNT(*) > 1) ORDER BY stoveId, listingId"
    )).all()
    duplicates = {}
    for stove_id, listing_id in rows:
        duplicates.setdefault(stove_id, []).append(listing_id)
    return duplicates


def ensure_schema(engine: Engine) -> None:
    metadata.create_all(bind=engine)
    # create_all skips indexes of tables that already exist
    with engine.begin() as conn:
        duplicates = _duplicate_active_listings(conn)
        if duplicates:
            for stove_id, listing_ids in duplicates.items():
                logger.error("stove %s has several active listings: %s", stove_id, listing_ids)
            detail = "; ".join(f"stove {s}: listings {ids}" for s, ids in duplicates.items())
            raise InvalidState(
                "E_DUPLICATE_ACTIVE_LISTINGS",
                f"Cannot create uq_listing_active_stove, cancel the extra active listings first ({detail})",
            )
        conn.execute(sa.text(
            "CREATE UNIQUE INDEX IF NOT EXISTS uq_listing_active_stove "
            "ON Listing (stoveId) WHERE status = 'active'"
        ))


def reset_schema(engine: Engine) -> None:
    with engine.begin() as conn:
        for table in LEGACY_TABLES:
            conn.execute(sa.text(f'DROP TABLE IF EXISTS "{table}"'))
        metadata.drop_all(bind=conn)
    logger.warning("all tables dropped")
    ensure_schema(engine)
    logger.info("tables recreated")


def _ago(days: float = 0, hours: float = 0) -> str:
    return utc_now_iso(-timedelta(days=days, hours=hours))


LOOTBOX_TYPES = [
    dict(name="Standard Lootbox", description="A standard lootbox with common to legendary items",
         cost_coins=0, cost_free=True),
    dict(name="Premium Lootbox", description="Higher chance for rare and above items",
         cost_coins=500, cost_free=False),
    dict(name="Legendary Crate", description="Guaranteed legendary or limited item",
         cost_coins=5000, cost_free=False),
]

PLAYERS = [
    dict(username="admin", password="admin123", email="admin@emberexchange.com",
         coins=999999, lootbox_count=100, is_admin=True),
    dict(username="player1", password="pass123", email="player1@example.com", coins=5000, lootbox_count=10),
    dict(username="player2", password="pass456", email="player2@example.com", coins=3500, lootbox_count=5),
    dict(username="trader_joe", password="trade789", email="trader@example.com", coins=10000, lootbox_count=20),
    dict(username="collector", password="collect000", email="collector@example.com", coins=2500, lootbox_count=3),
]

STOVE_TYPES = [
    ("Rusty Stove", "/images/stoves/rusty.png", "common", 100),
    ("Standard Stove", "/images/stoves/standard.png", "common", 80),
    ("Bronze Stove", "/images/stoves/bronze.png", "rare", 50),
    ("Silver Stove", "/images/stoves/silver.png", "rare", 40),
    ("Golden Stove", "/images/stoves/golden.png", "epic", 20),
    ("Crystal Stove", "/images/stoves/crystal.png", "epic", 15),
    ("Dragon Stove", "/images/stoves/dragon.png", "legendary", 5),
    ("Phoenix Stove", "/images/stoves/phoenix.png", "legendary", 3),
    ("One of a Kind", "/images/stoves/unique.png", "limited", 1),
]

# (stove type name, owner, days ago, lootbox type index, how the box was acquired)
STOVES = [
    ("Rusty Stove", "player1", 5, 0, "free"),
    ("Standard Stove", "player1", 3, 0, "purchase"),
    ("Bronze Stove", "player1", 1, 0, "free"),
    ("Silver Stove", "player2", 2, 1, "purchase"),
    ("Golden Stove", "trader_joe", 1, 0, "reward"),
    ("Dragon Stove", "collector", 0, None, None),
]

# (type name, sale price, days ago)
PAST_SALES = [
    ("Rusty Stove", 400, 10),
    ("Rusty Stove", 500, 5),
    ("Bronze Stove", 1500, 7),
    ("Bronze Stove", 1800, 3),
    ("Silver Stove", 2500, 4),
]


def ensure_sample_data(unit: UnitOfWork) -> str:
    """Insert the demo data set once; keyed on an admin player existing.

    Returns ``"inserted"`` or ``"skipped"``. The caller commits.
    """
    players = PlayerRepository(unit)
    if players.count_admins() > 0:
        return "skipped"

    box_types = LootboxTypeRepository(unit)
    box_type_ids = [box_types.create(**spec)[1] for spec in LOOTBOX_TYPES]

    player_ids = {}
    for spec in PLAYERS:
        player_ids[spec["username"]] = players.create(joined_at=_ago(days=30), **spec)[1]

    stove_types = StoveTypeRepository(unit)
    type_ids = {}
    for name, image_url, rarity, weight in STOVE_TYPES:
        type_ids[name] = stove_types.create(name, image_url, rarity, weight)[1]

    ownership = OwnershipService(unit)
    lootboxes = LootboxRepository(unit)
    drops = LootboxDropRepository(unit)
    stove_ids = {}
    for type_name, owner, days, box_index, box_how in STOVES:
        at = _ago(days=days)
        stove_id = ownership.mint_stove(type_ids[type_name], player_ids[owner], "lootbox", at=at)
        stove_ids[type_name] = stove_id
        if box_index is not None:
            _, lootbox_id = lootboxes.create(box_type_ids[box_index], player_ids[owner], box_how, opened_at=at)
            drops.create(lootbox_id, stove_id)

    prices = PriceHistoryRepository(unit)
    for type_name, price, days in PAST_SALES:
        prices.record_sale(type_ids[type_name], price, sale_date=_ago(days=days))

    listings = ListingService(unit)
    # one completed sale: player1's Rusty Stove went to trader_joe
    sold = listings.create_listing(player_ids["player1"], stove_ids["Rusty Stove"], 500, at=_ago(days=1))
    TradeService(unit).execute(sold, player_ids["trader_joe"])
    listings.create_listing(player_ids["player1"], stove_ids["Bronze Stove"], 1500, at=_ago(hours=2))
    listings.create_listing(player_ids["player2"], stove_ids["Silver Stove"], 2500, at=_ago(hours=4))

    logger.info("sample data inserted players=%s stoves=%s", len(player_ids), len(stove_ids))
    return "inserted"
