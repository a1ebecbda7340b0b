from typing import List, Optional, Tuple

from ..clock import utc_now_iso
from ..rows import StoveRow
from .base import Repository


class StoveRepository(Repository):
    def all(self) -> List[StoveRow]:
        return self._stmt("SELECT * FROM Stove ORDER BY stoveId", row=StoveRow).many()

    def get(self, stove_id: int) -> Optional[StoveRow]:
        return self._stmt("SELECT * FROM Stove WHERE stoveId = :id", {"id": stove_id}, StoveRow).one()

    def by_owner(self, player_id: int) -> List[StoveRow]:
        return self._stmt(
            "SELECT * FROM Stove WHERE currentOwnerId = :owner ORDER BY stoveId",
            {"owner": player_id},
            StoveRow,
        ).many()

    def by_type(self, type_id: int) -> List[StoveRow]:
        return self._stmt(
            "SELECT * FROM Stove WHERE typeId = :type ORDER BY stoveId", {"type": type_id}, StoveRow
        ).many()

    def create(self, type_id: int, owner_id: int, minted_at: Optional[str] = None) -> Tuple[bool, Optional[int]]:
        """Insert the stove row only; callers that mint also record ownership."""
        return self._insert(
            "INSERT INTO Stove (typeId, currentOwnerId, mintedAt) VALUES (:type, :owner, :at)",
            {"type": type_id, "owner": owner_id, "at": minted_at or utc_now_iso()},
        )

    def update_owner(self, stove_id: int, owner_id: int) -> bool:
        return self._changed_one(
            "UPDATE Stove SET currentOwnerId = :owner WHERE stoveId = :id",
            {"owner": owner_id, "id": stove_id},
        )

    def delete(self, stove_id: int) -> bool:
        return self._changed_one("DELETE FROM Stove WHERE stoveId = :id", {"id": stove_id})

    def count_by_owner(self, player_id: int) -> int:
        return self._count("SELECT COUNT(*) FROM Stove WHERE currentOwnerId = :owner", {"owner": player_id})

    def count_by_type(self, type_id: int) -> int:
        return self._count("SELECT COUNT(*) FROM Stove WHERE typeId = :type", {"type": type_id})
