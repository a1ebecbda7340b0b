from typing import List, Optional, Tuple

from ..clock import utc_now_iso
from ..rows import OwnershipRow
from .base import Repository

# newest first; same-millisecond rows fall back to insertion order
_LATEST_FIRST = "ORDER BY acquiredAt DESC, ownershipId DESC"


class OwnershipRepository(Repository):
    def all(self) -> List[OwnershipRow]:
        return self._stmt("SELECT * FROM Ownership ORDER BY ownershipId", row=OwnershipRow).many()

    def get(self, ownership_id: int) -> Optional[OwnershipRow]:
        return self._stmt(
            "SELECT * FROM Ownership WHERE ownershipId = :id", {"id": ownership_id}, OwnershipRow
        ).one()

    def history_for_stove(self, stove_id: int) -> List[OwnershipRow]:
        return self._stmt(
            "SELECT * FROM Ownership WHERE stoveId = :stove ORDER BY acquiredAt ASC, ownershipId ASC",
            {"stove": stove_id},
            OwnershipRow,
        ).many()

    def by_player(self, player_id: int) -> List[OwnershipRow]:
        return self._stmt(
            f"SELECT * FROM Ownership WHERE playerId = :player {_LATEST_FIRST}",
            {"player": player_id},
            OwnershipRow,
        ).many()

    def create(
        self, stove_id: int, player_id: int, acquired_how: str, acquired_at: Optional[str] = None
    ) -> Tuple[bool, Optional[int]]:
        return self._insert(
            """
            INSERT INTO Ownership (stoveId, playerId, acquiredAt, acquiredHow)
            VALUES (:stove, :player, :at, :how)
            """,
            {"stove": stove_id, "player": player_id, "at": acquired_at or utc_now_iso(), "how": acquired_how},
        )

    def current(self, stove_id: int) -> Optional[OwnershipRow]:
        return self._stmt(
            f"SELECT * FROM Ownership WHERE stoveId = :stove {_LATEST_FIRST} LIMIT 1",
            {"stove": stove_id},
            OwnershipRow,
        ).one()

    def delete(self, ownership_id: int) -> bool:
        return self._changed_one("DELETE FROM Ownership WHERE ownershipId = :id", {"id": ownership_id})

    def count_changes(self, stove_id: int) -> int:
        return self._count("SELECT COUNT(*) FROM Ownership WHERE stoveId = :stove", {"stove": stove_id})

    def count_acquisitions(self, player_id: int) -> int:
        return self._count("SELECT COUNT(*) FROM Ownership WHERE playerId = :player", {"player": player_id})
