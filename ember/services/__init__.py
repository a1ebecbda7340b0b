from .trading import TradeService, TradeResult, execute_trade
from .ownership import OwnershipService
from .listings import ListingService
from .lootboxes import LootboxService, LootboxOpening

__all__ = [
    "TradeService",
    "TradeResult",
    "execute_trade",
    "OwnershipService",
    "ListingService",
    "LootboxService",
    "LootboxOpening",
]
