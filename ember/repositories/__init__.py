from .players import PlayerRepository
from .stove_types import StoveTypeRepository
from .stoves import StoveRepository
from .listings import ListingRepository
from .ownerships import OwnershipRepository
from .price_history import PriceHistoryRepository
from .trades import TradeRepository
from .lootboxes import LootboxTypeRepository, LootboxRepository, LootboxDropRepository

__all__ = [
    "PlayerRepository",
    "StoveTypeRepository",
    "StoveRepository",
    "ListingRepository",
    "OwnershipRepository",
    "PriceHistoryRepository",
    "TradeRepository",
    "LootboxTypeRepository",
    "LootboxRepository",
    "LootboxDropRepository",
]
