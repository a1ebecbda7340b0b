from typing import List, Optional, Tuple

from ..clock import utc_now_iso
from ..rows import ListingRow
from .base import Repository


class ListingRepository(Repository):
    def all(self) -> List[ListingRow]:
        return self._stmt("SELECT * FROM Listing ORDER BY listingId", row=ListingRow).many()

    def get(self, listing_id: int) -> Optional[ListingRow]:
        return self._stmt(
            "SELECT * FROM Listing WHERE listingId = :id", {"id": listing_id}, ListingRow
        ).one()

    def active(self) -> List[ListingRow]:
        return self._stmt(
            "SELECT * FROM Listing WHERE status = 'active' ORDER BY listedAt DESC, listingId DESC",
            row=ListingRow,
        ).many()

    def by_seller(self, seller_id: int) -> List[ListingRow]:
        return self._stmt(
            "SELECT * FROM Listing WHERE sellerId = :seller ORDER BY listedAt DESC, listingId DESC",
            {"seller": seller_id},
            ListingRow,
        ).many()

    def active_by_seller(self, seller_id: int) -> List[ListingRow]:
        return self._stmt(
            "SELECT * FROM Listing WHERE sellerId = :seller AND status = 'active' "
            "ORDER BY listedAt DESC, listingId DESC",
            {"seller": seller_id},
            ListingRow,
        ).many()

    def active_for_stove(self, stove_id: int) -> Optional[ListingRow]:
        return self._stmt(
            "SELECT * FROM Listing WHERE stoveId = :stove AND status = 'active'",
            {"stove": stove_id},
            ListingRow,
        ).one()

    def create(
        self, seller_id: int, stove_id: int, price: int, listed_at: Optional[str] = None
    ) -> Tuple[bool, Optional[int]]:
        return self._insert(
            """
            INSERT INTO Listing (sellerId, stoveId, price, listedAt, status)
            VALUES (:seller, :stove, :price, :at, 'active')
            """,
            {"seller": seller_id, "stove": stove_id, "price": price, "at": listed_at or utc_now_iso()},
        )

    # Status moves only out of 'active'; every write below is conditional on it.

    def update_price(self, listing_id: int, price: int) -> bool:
        return self._changed_one(
            "UPDATE Listing SET price = :price WHERE listingId = :id AND status = 'active'",
            {"price": price, "id": listing_id},
        )

    def mark_sold(self, listing_id: int) -> bool:
        return self._changed_one(
            "UPDATE Listing SET status = 'sold' WHERE listingId = :id AND status = 'active'",
            {"id": listing_id},
        )

    def cancel(self, listing_id: int) -> bool:
        return self._changed_one(
            "UPDATE Listing SET status = 'cancelled' WHERE listingId = :id AND status = 'active'",
            {"id": listing_id},
        )

    def delete(self, listing_id: int) -> bool:
        return self._changed_one("DELETE FROM Listing WHERE listingId = :id", {"id": listing_id})

    def is_stove_listed(self, stove_id: int) -> bool:
        return self._count(
            "SELECT COUNT(*) FROM Listing WHERE stoveId = :stove AND status = 'active'", {"stove": stove_id}
        ) > 0

    def count_active_by_seller(self, seller_id: int) -> int:
        return self._count(
            "SELECT COUNT(*) FROM Listing WHERE sellerId = :seller AND status = 'active'",
            {"seller": seller_id},
        )
