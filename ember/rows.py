"""Typed rows returned by the repositories.

Columns are stored camelCase (``playerId``, ``lootboxCount``); rows expose them
as snake_case attributes and serialise back to the stored names.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping, Optional

_UPPER = re.compile(r"(?<!^)(?=[A-Z])")


def snake_case(name: str) -> str:
    return _UPPER.sub("_", name).lower()


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


class Row:
    _hidden: tuple = ()

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]):
        names = {f.name for f in fields(cls)}
        values = {}
        for key, value in mapping.items():
            attr = snake_case(key)
            if attr in names:
                values[attr] = value
        return cls(**values)

    def as_json(self) -> dict:
        return {
            camel_case(k): v for k, v in asdict(self).items() if k not in self._hidden
        }


@dataclass
class PlayerRow(Row):
    player_id: int
    username: str
    password: str
    email: str
    coins: int
    lootbox_count: int
    is_admin: int
    joined_at: str

    _hidden = ("password",)


@dataclass
class StoveTypeRow(Row):
    type_id: int
    name: str
    image_url: str
    rarity: str
    lootbox_weight: int


@dataclass
class StoveRow(Row):
    stove_id: int
    type_id: int
    current_owner_id: int
    minted_at: str


@dataclass
class ListingRow(Row):
    listing_id: int
    seller_id: int
    stove_id: int
    price: int
    listed_at: str
    status: str


@dataclass
class TradeRow(Row):
    trade_id: int
    listing_id: int
    buyer_id: int
    executed_at: str


@dataclass
class OwnershipRow(Row):
    ownership_id: int
    stove_id: int
    player_id: int
    acquired_at: str
    acquired_how: str


@dataclass
class PriceHistoryRow(Row):
    history_id: int
    type_id: int
    sale_price: int
    sale_date: str


@dataclass
class LootboxTypeRow(Row):
    lootbox_type_id: int
    name: str
    description: Optional[str]
    cost_coins: int
    cost_free: int
    daily_limit: Optional[int]
    is_available: int


@dataclass
class LootboxRow(Row):
    lootbox_id: int
    lootbox_type_id: int
    player_id: int
    opened_at: str
    acquired_how: str


@dataclass
class LootboxDropRow(Row):
    drop_id: int
    lootbox_id: int
    stove_id: int


@dataclass
class PriceStats(Row):
    type_id: int
    count: int
    average: float
    min: int
    max: int
    median: float
