from typing import List, Optional, Tuple

from ..clock import utc_now_iso
from ..rows import PriceHistoryRow, PriceStats
from .base import Repository


class PriceHistoryRepository(Repository):
    def all(self) -> List[PriceHistoryRow]:
        return self._stmt(
            "SELECT * FROM PriceHistory ORDER BY saleDate DESC, historyId DESC", row=PriceHistoryRow
        ).many()

    def get(self, history_id: int) -> Optional[PriceHistoryRow]:
        return self._stmt(
            "SELECT * FROM PriceHistory WHERE historyId = :id", {"id": history_id}, PriceHistoryRow
        ).one()

    def by_type(self, type_id: int) -> List[PriceHistoryRow]:
        return self._stmt(
            "SELECT * FROM PriceHistory WHERE typeId = :type ORDER BY saleDate DESC, historyId DESC",
            {"type": type_id},
            PriceHistoryRow,
        ).many()

    def record_sale(self, type_id: int, sale_price: int, sale_date: Optional[str] = None) -> Tuple[bool, Optional[int]]:
        return self._insert(
            "INSERT INTO PriceHistory (typeId, salePrice, saleDate) VALUES (:type, :price, :at)",
            {"type": type_id, "price": sale_price, "at": sale_date or utc_now_iso()},
        )

    def average(self, type_id: int) -> Optional[float]:
        value = self._stmt(
            "SELECT AVG(salePrice) FROM PriceHistory WHERE typeId = :type", {"type": type_id}
        ).scalar()
        return float(value) if value is not None else None

    def minimum(self, type_id: int) -> Optional[int]:
        return self._stmt(
            "SELECT MIN(salePrice) FROM PriceHistory WHERE typeId = :type", {"type": type_id}
        ).scalar()

    def maximum(self, type_id: int) -> Optional[int]:
        return self._stmt(
            "SELECT MAX(salePrice) FROM PriceHistory WHERE typeId = :type", {"type": type_id}
        ).scalar()

    def median(self, type_id: int) -> Optional[float]:
        n = self.count(type_id)
        if n == 0:
            return None
        # middle one (odd) or middle two (even) of the sorted prices
        middle = self._stmt(
            """
            SELECT salePrice FROM PriceHistory WHERE typeId = :type
            ORDER BY salePrice LIMIT :take OFFSET :skip
            """,
            {"type": type_id, "take": 2 - n % 2, "skip": (n - 1) // 2},
        ).many()
        prices = [m["salePrice"] for m in middle]
        return sum(prices) / len(prices)

    def recent(self, type_id: int, limit: int = 10) -> List[PriceHistoryRow]:
        return self._stmt(
            """
            SELECT * FROM PriceHistory WHERE typeId = :type
            ORDER BY saleDate DESC, historyId DESC LIMIT :limit
            """,
            {"type": type_id, "limit": limit},
            PriceHistoryRow,
        ).many()

    def count(self, type_id: int) -> int:
        return self._count("SELECT COUNT(*) FROM PriceHistory WHERE typeId = :type", {"type": type_id})

    def stats(self, type_id: int) -> Optional[PriceStats]:
        n = self.count(type_id)
        if n == 0:
            return None
        return PriceStats(
            type_id=type_id,
            count=n,
            average=self.average(type_id),
            min=self.minimum(type_id),
            max=self.maximum(type_id),
            median=self.median(type_id),
        )

    def delete(self, history_id: int) -> bool:
        return self._changed_one("DELETE FROM PriceHistory WHERE historyId = :id", {"id": history_id})
