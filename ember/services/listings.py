import logging
from typing import Optional

from ..errors import InvalidOperation, InvalidState, NotFound
from ..repositories import ListingRepository, OwnershipRepository, StoveRepository
from ..unit import UnitOfWork

logger = logging.getLogger(__name__)


class ListingService:
    def __init__(self, unit: UnitOfWork):
        self.unit = unit
        self.listings = ListingRepository(unit)
        self.stoves = StoveRepository(unit)
        self.ownerships = OwnershipRepository(unit)

    def create_listing(self, seller_id: int, stove_id: int, price: int, at: Optional[str] = None) -> int:
        if price is None or int(price) < 1:
            raise InvalidOperation("E_BAD_PRICE", "Price must be at least 1")
        stove = self.stoves.get(stove_id)
        if stove is None:
            raise NotFound("E_NO_STOVE", f"Stove {stove_id} not found")
        if stove.current_owner_id != seller_id:
            raise InvalidOperation("E_NOT_OWNER", "Only the current owner can list a stove")
        try:
            # a second active listing for the stove fails on uq_listing_active_stove
            _, listing_id = self.listings.create(seller_id, stove_id, int(price), listed_at=at)
        except Exception:
            self.unit.rollback()
            raise
        logger.info("listing created listing=%s stove=%s seller=%s price=%s", listing_id, stove_id, seller_id, price)
        return listing_id

    def cancel_listing(self, listing_id: int) -> None:
        listing = self.listings.get(listing_id)
        if listing is None:
            raise NotFound("E_NO_LISTING", f"Listing {listing_id} not found")
        if not self.listings.cancel(listing_id):
            raise InvalidState("E_LISTING_NOT_ACTIVE", f"Listing {listing_id} is {listing.status}")
        logger.info("listing cancelled listing=%s", listing_id)

    def reprice(self, listing_id: int, price: int) -> None:
        if price is None or int(price) < 1:
            raise InvalidOperation("E_BAD_PRICE", "Price must be at least 1")
        listing = self.listings.get(listing_id)
        if listing is None:
            raise NotFound("E_NO_LISTING", f"Listing {listing_id} not found")
        if not self.listings.update_price(listing_id, int(price)):
            raise InvalidState("E_LISTING_NOT_ACTIVE", f"Listing {listing_id} is {listing.status}")
        logger.info("listing repriced listing=%s price=%s", listing_id, price)
