from typing import List, Optional, Tuple

from ..clock import utc_now_iso
from ..rows import TradeRow
from .base import Repository


class TradeRepository(Repository):
    def all(self) -> List[TradeRow]:
        return self._stmt(
            "SELECT * FROM Trade ORDER BY executedAt DESC, tradeId DESC", row=TradeRow
        ).many()

    def get(self, trade_id: int) -> Optional[TradeRow]:
        return self._stmt("SELECT * FROM Trade WHERE tradeId = :id", {"id": trade_id}, TradeRow).one()

    def by_listing(self, listing_id: int) -> Optional[TradeRow]:
        return self._stmt(
            "SELECT * FROM Trade WHERE listingId = :listing", {"listing": listing_id}, TradeRow
        ).one()

    def by_buyer(self, buyer_id: int) -> List[TradeRow]:
        return self._stmt(
            "SELECT * FROM Trade WHERE buyerId = :buyer ORDER BY executedAt DESC, tradeId DESC",
            {"buyer": buyer_id},
            TradeRow,
        ).many()

    def create(self, listing_id: int, buyer_id: int, executed_at: Optional[str] = None) -> Tuple[bool, Optional[int]]:
        return self._insert(
            "INSERT INTO Trade (listingId, buyerId, executedAt) VALUES (:listing, :buyer, :at)",
            {"listing": listing_id, "buyer": buyer_id, "at": executed_at or utc_now_iso()},
        )

    def recent(self, limit: int = 10) -> List[TradeRow]:
        return self._stmt(
            "SELECT * FROM Trade ORDER BY executedAt DESC, tradeId DESC LIMIT :limit",
            {"limit": limit},
            TradeRow,
        ).many()

    def delete(self, trade_id: int) -> bool:
        return self._changed_one("DELETE FROM Trade WHERE tradeId = :id", {"id": trade_id})

    def count(self) -> int:
        return self._count("SELECT COUNT(*) FROM Trade")

    def count_by_buyer(self, buyer_id: int) -> int:
        return self._count("SELECT COUNT(*) FROM Trade WHERE buyerId = :buyer", {"buyer": buyer_id})
