from types import SimpleNamespace

import pytest

from ember import create_app
from ember.db import db
from ember.repositories import LootboxTypeRepository, PlayerRepository, StoveTypeRepository
from ember.services import ListingService, OwnershipService
from ember.unit import UnitOfWork

TABLES = (
    "Player", "StoveType", "Stove", "Listing", "Trade",
    "PriceHistory", "Ownership", "LootboxType", "Lootbox", "LootboxDrop",
)


def app_config(path, **extra):
    cfg = {
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{path}",
        "AUTO_CREATE_TABLES": True,
        "RESET_DB": False,
        "SEED_SAMPLE_DATA": False,
    }
    cfg.update(extra)
    return cfg


@pytest.fixture
def app(tmp_path):
    app = create_app(app_config(tmp_path / "ember.db"))
    with app.app_context():
        yield app


@pytest.fixture
def engine(app):
    return db.engine


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def world(engine):
    """Three players, two stove types, one stove owned by alice and listed at 250."""
    with UnitOfWork(engine) as unit:
        players = PlayerRepository(unit)
        alice = players.create("alice", "pw-alice", "alice@example.com", coins=100, lootbox_count=2)[1]
        bob = players.create("bob", "pw-bob", "bob@example.com", coins=100)[1]
        carol = players.create("carol", "pw-carol", "carol@example.com")[1]
        types = StoveTypeRepository(unit)
        rusty = types.create("Rusty Stove", "/images/stoves/rusty.png", "common", 100)[1]
        dragon = types.create("Dragon Stove", "/images/stoves/dragon.png", "legendary", 5)[1]
        stove = OwnershipService(unit).mint_stove(rusty, alice, "lootbox")
        listing = ListingService(unit).create_listing(alice, stove, 250)
        box_type = LootboxTypeRepository(unit).create("Standard Lootbox", "Common to legendary")[1]
        unit.commit()
    return SimpleNamespace(
        alice=alice, bob=bob, carol=carol, rusty=rusty, dragon=dragon,
        stove=stove, listing=listing, box_type=box_type,
    )


def _snapshot(engine):
    with UnitOfWork(engine, read_only=True) as unit:
        counts = {t: unit.prepare(f'SELECT COUNT(*) FROM "{t}"').scalar() for t in TABLES}
        statuses = [tuple(r.values()) for r in unit.prepare(
            "SELECT listingId, status FROM Listing ORDER BY listingId").many()]
        owners = [tuple(r.values()) for r in unit.prepare(
            "SELECT stoveId, currentOwnerId FROM Stove ORDER BY stoveId").many()]
    return counts, statuses, owners


@pytest.fixture
def snapshot(engine):
    """Row counts per table plus every listing status and stove owner."""
    return lambda: _snapshot(engine)

