import logging
from typing import Optional

from ..errors import InvalidOperation, NotFound
from ..models import ACQUISITION_METHODS
from ..repositories import OwnershipRepository, PlayerRepository, StoveRepository, StoveTypeRepository
from ..unit import UnitOfWork

logger = logging.getLogger(__name__)


class OwnershipService:
    """Keeps ``Stove.currentOwnerId`` in step with the ownership history."""

    def __init__(self, unit: UnitOfWork):
        self.unit = unit
        self.players = PlayerRepository(unit)
        self.stove_types = StoveTypeRepository(unit)
        self.stoves = StoveRepository(unit)
        self.ownerships = OwnershipRepository(unit)

    def _check_how(self, how: str) -> None:
        if how not in ACQUISITION_METHODS:
            raise InvalidOperation("E_BAD_ACQUISITION", f"Unknown acquisition method: {how}")

    def mint_stove(self, type_id: int, owner_id: int, how: str = "lootbox", at: Optional[str] = None) -> int:
        self._check_how(how)
        if self.stove_types.get(type_id) is None:
            raise NotFound("E_NO_STOVE_TYPE", f"Stove type {type_id} not found")
        if self.players.get(owner_id) is None:
            raise NotFound("E_NO_PLAYER", f"Player {owner_id} not found")
        _, stove_id = self.stoves.create(type_id, owner_id, minted_at=at)
        self.ownerships.create(stove_id, owner_id, how, acquired_at=at)
        logger.info("stove minted stove=%s type=%s owner=%s how=%s", stove_id, type_id, owner_id, how)
        return stove_id

    def transfer_stove(self, stove_id: int, player_id: int, how: str, at: Optional[str] = None) -> int:
        """Move a stove to ``player_id`` outside a trade; returns the ownership id."""
        self._check_how(how)
        if self.players.get(player_id) is None:
            raise NotFound("E_NO_PLAYER", f"Player {player_id} not found")
        if not self.stoves.update_owner(stove_id, player_id):
            raise NotFound("E_NO_STOVE", f"Stove {stove_id} not found")
        _, ownership_id = self.ownerships.create(stove_id, player_id, how, acquired_at=at)
        logger.info("stove transferred stove=%s player=%s how=%s", stove_id, player_id, how)
        return ownership_id
