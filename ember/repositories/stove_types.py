from typing import List, Optional, Tuple

from ..rows import StoveTypeRow
from .base import Repository


class StoveTypeRepository(Repository):
    def all(self) -> List[StoveTypeRow]:
        return self._stmt("SELECT * FROM StoveType ORDER BY typeId", row=StoveTypeRow).many()

    def get(self, type_id: int) -> Optional[StoveTypeRow]:
        return self._stmt(
            "SELECT * FROM StoveType WHERE typeId = :id", {"id": type_id}, StoveTypeRow
        ).one()

    def by_name(self, name: str) -> Optional[StoveTypeRow]:
        return self._stmt(
            "SELECT * FROM StoveType WHERE name = :name", {"name": name}, StoveTypeRow
        ).one()

    def by_rarity(self, rarity: str) -> List[StoveTypeRow]:
        return self._stmt(
            "SELECT * FROM StoveType WHERE rarity = :rarity ORDER BY typeId",
            {"rarity": rarity},
            StoveTypeRow,
        ).many()

    def create(self, name: str, image_url: str, rarity: str, lootbox_weight: int) -> Tuple[bool, Optional[int]]:
        return self._insert(
            """
            INSERT INTO StoveType (name, imageUrl, rarity, lootboxWeight)
            VALUES (:name, :image_url, :rarity, :weight)
            """,
            {"name": name, "image_url": image_url, "rarity": rarity, "weight": lootbox_weight},
        )

    def update_weight(self, type_id: int, lootbox_weight: int) -> bool:
        return self._changed_one(
            "UPDATE StoveType SET lootboxWeight = :weight WHERE typeId = :id",
            {"weight": lootbox_weight, "id": type_id},
        )

    def update_image(self, type_id: int, image_url: str) -> bool:
        return self._changed_one(
            "UPDATE StoveType SET imageUrl = :url WHERE typeId = :id", {"url": image_url, "id": type_id}
        )

    def delete(self, type_id: int) -> bool:
        return self._changed_one("DELETE FROM StoveType WHERE typeId = :id", {"id": type_id})

    def total_weight(self) -> int:
        return self._count("SELECT COALESCE(SUM(lootboxWeight), 0) FROM StoveType")
