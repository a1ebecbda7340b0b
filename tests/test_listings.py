import pytest
from sqlalchemy.exc import IntegrityError

from ember.errors import InvalidOperation, InvalidState, NotFound
from ember.repositories import ListingRepository
from ember.services import ListingService
from ember.unit import UnitOfWork


def test_only_owner_can_list(engine, world):
    with UnitOfWork(engine) as unit:
        with pytest.raises(InvalidOperation) as exc:
            ListingService(unit).create_listing(world.bob, world.stove, 100)
        assert exc.value.code == "E_NOT_OWNER"


def test_price_must_be_positive(engine, world):
    with UnitOfWork(engine) as unit:
        service = ListingService(unit)
        with pytest.raises(InvalidOperation):
            service.create_listing(world.alice, world.stove, 0)
        with pytest.raises(InvalidOperation):
            service.reprice(world.listing, -5)


def test_missing_stove(engine, world):
    with UnitOfWork(engine) as unit:
        with pytest.raises(NotFound):
            ListingService(unit).create_listing(world.alice, 404, 10)


def test_duplicate_active_listing_rolls_back(engine, world):
    unit = UnitOfWork(engine)
    with pytest.raises(IntegrityError):
        ListingService(unit).create_listing(world.alice, world.stove, 10)
    assert unit.completed


def test_cancel_and_reprice(engine, world):
    with UnitOfWork(engine) as unit:
        service = ListingService(unit)
        service.reprice(world.listing, 275)
        service.cancel_listing(world.listing)
        with pytest.raises(InvalidState):
            service.cancel_listing(world.listing)
        with pytest.raises(InvalidState):
            service.reprice(world.listing, 300)
        with pytest.raises(NotFound):
            service.cancel_listing(12345)
        unit.commit()
    with UnitOfWork(engine, read_only=True) as unit:
        row = ListingRepository(unit).get(world.listing)
    assert (row.status, row.price) == ("cancelled", 275)
