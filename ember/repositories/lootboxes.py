from typing import List, Optional, Tuple

from ..clock import utc_now_iso
from ..rows import LootboxDropRow, LootboxRow, LootboxTypeRow
from .base import Repository


class LootboxTypeRepository(Repository):
    def all(self) -> List[LootboxTypeRow]:
        return self._stmt("SELECT * FROM LootboxType ORDER BY lootboxTypeId", row=LootboxTypeRow).many()

    def get(self, lootbox_type_id: int) -> Optional[LootboxTypeRow]:
        return self._stmt(
            "SELECT * FROM LootboxType WHERE lootboxTypeId = :id", {"id": lootbox_type_id}, LootboxTypeRow
        ).one()

    def available(self) -> List[LootboxTypeRow]:
        return self._stmt(
            "SELECT * FROM LootboxType WHERE isAvailable = 1 ORDER BY lootboxTypeId", row=LootboxTypeRow
        ).many()

    def create(
        self,
        name: str,
        description: Optional[str] = None,
        cost_coins: int = 0,
        cost_free: bool = True,
        daily_limit: Optional[int] = None,
        is_available: bool = True,
    ) -> Tuple[bool, Optional[int]]:
        return self._insert(
            """
            INSERT INTO LootboxType (name, description, costCoins, costFree, dailyLimit, isAvailable)
            VALUES (:name, :description, :cost_coins, :cost_free, :daily_limit, :is_available)
            """,
            {
                "name": name,
                "description": description,
                "cost_coins": cost_coins,
                "cost_free": 1 if cost_free else 0,
                "daily_limit": daily_limit,
                "is_available": 1 if is_available else 0,
            },
        )


class LootboxRepository(Repository):
    def all(self) -> List[LootboxRow]:
        return self._stmt("SELECT * FROM Lootbox ORDER BY openedAt DESC, lootboxId DESC", row=LootboxRow).many()

    def get(self, lootbox_id: int) -> Optional[LootboxRow]:
        return self._stmt(
            "SELECT * FROM Lootbox WHERE lootboxId = :id", {"id": lootbox_id}, LootboxRow
        ).one()

    def by_player(self, player_id: int) -> List[LootboxRow]:
        return self._stmt(
            "SELECT * FROM Lootbox WHERE playerId = :player ORDER BY openedAt DESC, lootboxId DESC",
            {"player": player_id},
            LootboxRow,
        ).many()

    def create(
        self, lootbox_type_id: int, player_id: int, acquired_how: str, opened_at: Optional[str] = None
    ) -> Tuple[bool, Optional[int]]:
        return self._insert(
            """
            INSERT INTO Lootbox (lootboxTypeId, playerId, openedAt, acquiredHow)
            VALUES (:type, :player, :at, :how)
            """,
            {"type": lootbox_type_id, "player": player_id, "at": opened_at or utc_now_iso(), "how": acquired_how},
        )

    def delete(self, lootbox_id: int) -> bool:
        # drops reference the box
        self._stmt("DELETE FROM LootboxDrop WHERE lootboxId = :id", {"id": lootbox_id}).execute()
        return self._changed_one("DELETE FROM Lootbox WHERE lootboxId = :id", {"id": lootbox_id})


class LootboxDropRepository(Repository):
    def for_lootbox(self, lootbox_id: int) -> Optional[LootboxDropRow]:
        return self._stmt(
            "SELECT * FROM LootboxDrop WHERE lootboxId = :id", {"id": lootbox_id}, LootboxDropRow
        ).one()

    def create(self, lootbox_id: int, stove_id: int) -> Tuple[bool, Optional[int]]:
        return self._insert(
            "INSERT INTO LootboxDrop (lootboxId, stoveId) VALUES (:lootbox, :stove)",
            {"lootbox": lootbox_id, "stove": stove_id},
        )
