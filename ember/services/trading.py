"""Trade execution.

A trade moves one stove from a listing's seller to a buyer. Five dependent
writes make up one trade and they land together or not at all:

1. the listing flips ``active -> sold``
2. the stove's owner pointer moves to the buyer
3. an ``Ownership`` row records the acquisition (``trade``)
4. a ``PriceHistory`` row records the sale price for the stove type
5. a ``Trade`` row records the execution

:class:`TradeService` runs these inside a caller-owned read-write unit and
rolls that unit back on any failure. :func:`execute_trade` is the standalone
entry point that owns its unit end to end.

No coins move between players here.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.engine import Engine

from ..errors import InvalidOperation, InvalidState, NotFound, UnitOfWorkError
from ..repositories import (
    ListingRepository,
    OwnershipRepository,
    PriceHistoryRepository,
    StoveRepository,
    TradeRepository,
)
from ..unit import UnitOfWork

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TradeResult:
    trade_id: int
    listing_id: int
    stove_id: int
    seller_id: int
    buyer_id: int
    price: int

    def as_json(self) -> dict:
        return {
            "tradeId": self.trade_id,
            "listingId": self.listing_id,
            "stoveId": self.stove_id,
            "sellerId": self.seller_id,
            "buyerId": self.buyer_id,
            "price": self.price,
        }


class TradeService:
    def __init__(self, unit: UnitOfWork):
        if unit.read_only:
            raise UnitOfWorkError("trades need a read-write unit of work")
        self.unit = unit
        self.listings = ListingRepository(unit)
        self.stoves = StoveRepository(unit)
        self.ownerships = OwnershipRepository(unit)
        self.prices = PriceHistoryRepository(unit)
        self.trades = TradeRepository(unit)

    def execute(self, listing_id: int, buyer_id: int) -> TradeResult:
        """Execute a trade for ``listing_id``; the caller commits on success."""
        try:
            listing = self.listings.get(listing_id)
            if listing is None:
                raise NotFound("E_NO_LISTING", f"Listing {listing_id} not found")
            if listing.status != "active":
                raise InvalidState("E_LISTING_NOT_ACTIVE", f"Listing {listing_id} is {listing.status}")
            if listing.seller_id == buyer_id:
                raise InvalidOperation("E_SELF_TRADE", "Seller cannot buy their own listing")

            stove = self.stoves.get(listing.stove_id)
            if stove is None:
                raise NotFound("E_NO_STOVE", f"Stove {listing.stove_id} not found")

            # conditional on status: a concurrent buyer leaves nothing to flip
            if not self.listings.mark_sold(listing_id):
                raise InvalidState("E_LISTING_RACE", f"Listing {listing_id} is no longer active")
            if not self.stoves.update_owner(stove.stove_id, buyer_id):
                raise NotFound("E_NO_STOVE", f"Stove {stove.stove_id} not found")
            self.ownerships.create(stove.stove_id, buyer_id, "trade")
            self.prices.record_sale(stove.type_id, listing.price)
            ok, trade_id = self.trades.create(listing_id, buyer_id)
            if not ok:
                raise InvalidState("E_TRADE_NOT_RECORDED", "Trade could not be recorded")
        except Exception:
            self.unit.rollback()
            raise

        logger.info(
            "trade executed trade=%s listing=%s stove=%s seller=%s buyer=%s price=%s",
            trade_id, listing_id, stove.stove_id, listing.seller_id, buyer_id, listing.price,
        )
        return TradeResult(
            trade_id=trade_id,
            listing_id=listing_id,
            stove_id=stove.stove_id,
            seller_id=listing.seller_id,
            buyer_id=buyer_id,
            price=listing.price,
        )


def execute_trade(engine: Engine, listing_id: int, buyer_id: int) -> TradeResult:
    """Run one trade in its own unit of work and commit it."""
    with UnitOfWork(engine) as unit:
        result = TradeService(unit).execute(listing_id, buyer_id)
        unit.commit()
    return result
