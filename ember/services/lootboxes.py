"""Opening lootboxes: spend one unopened box, mint one stove."""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from ..errors import InvalidOperation, InvalidState, NotFound
from ..models import LOOTBOX_SOURCES
from ..repositories import (
    LootboxDropRepository,
    LootboxRepository,
    LootboxTypeRepository,
    PlayerRepository,
    StoveTypeRepository,
)
from ..unit import UnitOfWork
from .ownership import OwnershipService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LootboxOpening:
    lootbox_id: int
    drop_id: int
    stove_id: int
    type_id: int
    rarity: str

    def as_json(self) -> dict:
        return {
            "lootboxId": self.lootbox_id,
            "dropId": self.drop_id,
            "stoveId": self.stove_id,
            "typeId": self.type_id,
            "rarity": self.rarity,
        }


class LootboxService:
    def __init__(self, unit: UnitOfWork, rng: Optional[random.Random] = None):
        self.unit = unit
        self.rng = rng or random.Random()
        self.players = PlayerRepository(unit)
        self.types = LootboxTypeRepository(unit)
        self.lootboxes = LootboxRepository(unit)
        self.drops = LootboxDropRepository(unit)
        self.stove_types = StoveTypeRepository(unit)
        self.ownership = OwnershipService(unit)

    def open(self, player_id: int, lootbox_type_id: int, acquired_how: str = "free") -> LootboxOpening:
        if acquired_how not in LOOTBOX_SOURCES:
            raise InvalidOperation("E_BAD_SOURCE", f"Unknown lootbox source: {acquired_how}")
        try:
            if self.players.get(player_id) is None:
                raise NotFound("E_NO_PLAYER", f"Player {player_id} not found")
            box_type = self.types.get(lootbox_type_id)
            if box_type is None:
                raise NotFound("E_NO_LOOTBOX_TYPE", f"Lootbox type {lootbox_type_id} not found")
            if not box_type.is_available:
                raise InvalidState("E_LOOTBOX_UNAVAILABLE", f"{box_type.name} is not available")
            catalogue = self.stove_types.all()
            if not catalogue:
                raise InvalidState("E_NO_STOVE_TYPES", "No stove types to draw from")
            if not self.players.take_lootbox(player_id):
                raise InvalidState("E_NO_LOOTBOXES", "Player has no unopened lootboxes")

            _, lootbox_id = self.lootboxes.create(lootbox_type_id, player_id, acquired_how)
            drawn = self.rng.choices(catalogue, weights=[t.lootbox_weight for t in catalogue])[0]
            stove_id = self.ownership.mint_stove(drawn.type_id, player_id, "lootbox")
            _, drop_id = self.drops.create(lootbox_id, stove_id)
        except Exception:
            self.unit.rollback()
            raise

        logger.info(
            "lootbox opened lootbox=%s player=%s stove=%s type=%s rarity=%s",
            lootbox_id, player_id, stove_id, drawn.type_id, drawn.rarity,
        )
        return LootboxOpening(
            lootbox_id=lootbox_id, drop_id=drop_id, stove_id=stove_id, type_id=drawn.type_id, rarity=drawn.rarity
        )
