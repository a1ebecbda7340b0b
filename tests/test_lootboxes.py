import random

import pytest

from ember.errors import InvalidOperation, InvalidState, NotFound
from ember.repositories import (
    LootboxDropRepository,
    LootboxTypeRepository,
    OwnershipRepository,
    PlayerRepository,
    StoveRepository,
)
from ember.services import LootboxService
from ember.unit import UnitOfWork


class PickLast:
    """Stand-in rng that records the weights it was offered."""

    def __init__(self):
        self.weights = None

    def choices(self, population, weights):
        self.weights = list(weights)
        return [population[-1]]


def test_open_mints_a_stove_for_the_player(engine, world):
    rng = PickLast()
    with UnitOfWork(engine) as unit:
        opening = LootboxService(unit, rng=rng).open(world.alice, world.box_type)
        unit.commit()

    assert rng.weights == [100, 5]
    assert (opening.type_id, opening.rarity) == (world.dragon, "legendary")
    with UnitOfWork(engine, read_only=True) as unit:
        alice = PlayerRepository(unit).get(world.alice)
        stove = StoveRepository(unit).get(opening.stove_id)
        drop = LootboxDropRepository(unit).for_lootbox(opening.lootbox_id)
        current = OwnershipRepository(unit).current(opening.stove_id)
    assert alice.lootbox_count == 1
    assert stove.current_owner_id == world.alice
    assert drop.stove_id == opening.stove_id
    assert (current.player_id, current.acquired_how) == (world.alice, "lootbox")


def test_open_with_seeded_rng(engine, world):
    with UnitOfWork(engine) as unit:
        service = LootboxService(unit, rng=random.Random(3))
        first = service.open(world.alice, world.box_type, "reward")
        second = service.open(world.alice, world.box_type, "purchase")
        unit.commit()
    assert first.stove_id != second.stove_id
    assert {first.type_id, second.type_id} <= {world.rusty, world.dragon}


def test_no_boxes_left(engine, world, snapshot):
    before = snapshot()
    with UnitOfWork(engine) as unit:
        with pytest.raises(InvalidState) as exc:
            LootboxService(unit).open(world.carol, world.box_type)
    assert exc.value.code == "E_NO_LOOTBOXES"
    assert snapshot() == before


def test_unavailable_type(engine, world):
    with UnitOfWork(engine) as unit:
        _, retired = LootboxTypeRepository(unit).create("Retired Crate", is_available=False)
        unit.commit()
    with UnitOfWork(engine) as unit:
        with pytest.raises(InvalidState):
            LootboxService(unit).open(world.alice, retired)


def test_unknown_player_type_or_source(engine, world):
    with UnitOfWork(engine) as unit:
        with pytest.raises(NotFound):
            LootboxService(unit).open(999, world.box_type)
    with UnitOfWork(engine) as unit:
        with pytest.raises(NotFound):
            LootboxService(unit).open(world.alice, 999)
    with UnitOfWork(engine) as unit:
        with pytest.raises(InvalidOperation):
            LootboxService(unit).open(world.alice, world.box_type, "stolen")
