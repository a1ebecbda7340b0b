from ..db import db

metadata = db.metadata

# Import model modules so tables register with metadata
from .players import Player                                  # noqa: F401
from .stoves import StoveType, Stove, RARITIES               # noqa: F401
from .market import Listing, Trade, PriceHistory, LISTING_STATUSES, ACTIVE_LISTING_INDEX  # noqa: F401
from .ownership import Ownership, ACQUISITION_METHODS        # noqa: F401
from .lootboxes import LootboxType, Lootbox, LootboxDrop, LOOTBOX_SOURCES  # noqa: F401

__all__ = [
    "db", "metadata",
    "Player",
    "StoveType", "Stove", "RARITIES",
    "Listing", "Trade", "PriceHistory", "LISTING_STATUSES", "ACTIVE_LISTING_INDEX",
    "Ownership", "ACQUISITION_METHODS",
    "LootboxType", "Lootbox", "LootboxDrop", "LOOTBOX_SOURCES",
]
