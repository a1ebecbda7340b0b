from typing import List, Optional, Tuple

from werkzeug.security import generate_password_hash

from ..clock import utc_now_iso
from ..rows import PlayerRow
from .base import Repository


class PlayerRepository(Repository):
    def all(self) -> List[PlayerRow]:
        return self._stmt("SELECT * FROM Player ORDER BY playerId", row=PlayerRow).many()

    def get(self, player_id: int) -> Optional[PlayerRow]:
        return self._stmt(
            "SELECT * FROM Player WHERE playerId = :id", {"id": player_id}, PlayerRow
        ).one()

    def by_username(self, username: str) -> Optional[PlayerRow]:
        return self._stmt(
            "SELECT * FROM Player WHERE username = :username", {"username": username}, PlayerRow
        ).one()

    def create(
        self,
        username: str,
        password: str,
        email: str,
        coins: int = 0,
        lootbox_count: int = 0,
        is_admin: bool = False,
        joined_at: Optional[str] = None,
    ) -> Tuple[bool, Optional[int]]:
        return self._insert(
            """
            INSERT INTO Player (username, password, email, coins, lootboxCount, isAdmin, joinedAt)
            VALUES (:username, :password, :email, :coins, :lootbox_count, :is_admin, :joined_at)
            """,
            {
                "username": username,
                "password": generate_password_hash(password),
                "email": email,
                "coins": coins,
                "lootbox_count": lootbox_count,
                "is_admin": 1 if is_admin else 0,
                "joined_at": joined_at or utc_now_iso(),
            },
        )

    def update_coins(self, player_id: int, coins: int) -> bool:
        return self._changed_one(
            "UPDATE Player SET coins = :coins WHERE playerId = :id", {"coins": coins, "id": player_id}
        )

    def update_lootbox_count(self, player_id: int, count: int) -> bool:
        return self._changed_one(
            "UPDATE Player SET lootboxCount = :count WHERE playerId = :id",
            {"count": count, "id": player_id},
        )

    def take_lootbox(self, player_id: int) -> bool:
        """Decrement the unopened-box counter if the player has any left."""
        return self._changed_one(
            "UPDATE Player SET lootboxCount = lootboxCount - 1 "
            "WHERE playerId = :id AND lootboxCount > 0",
            {"id": player_id},
        )

    def delete(self, player_id: int) -> bool:
        return self._changed_one("DELETE FROM Player WHERE playerId = :id", {"id": player_id})

    def count_admins(self) -> int:
        return self._count("SELECT COUNT(*) FROM Player WHERE isAdmin = 1")
