from flask import Blueprint, jsonify

from ..repositories import LootboxDropRepository, LootboxRepository, LootboxTypeRepository
from ..services import LootboxService
from ..unit import open_unit
from .common import changed, found, json_body, require_int, rows_json

bp = Blueprint("lootboxes_api", __name__, url_prefix="/api")


@bp.get("/lootboxes")
def list_lootboxes():
    with open_unit(read_only=True) as unit:
        return rows_json(LootboxRepository(unit).all())


@bp.get("/lootboxes/<int:lootbox_id>")
def get_lootbox(lootbox_id: int):
    with open_unit(read_only=True) as unit:
        box = found(LootboxRepository(unit).get(lootbox_id), "Lootbox", lootbox_id)
    return jsonify(box.as_json())


@bp.get("/players/<int:player_id>/lootboxes")
def lootboxes_by_player(player_id: int):
    with open_unit(read_only=True) as unit:
        return rows_json(LootboxRepository(unit).by_player(player_id))


@bp.post("/lootboxes")
def open_lootbox():
    data = json_body()
    lootbox_type_id, player_id = require_int(data, "lootboxTypeId", "playerId")
    how = data.get("acquiredHow") or "free"
    with open_unit() as unit:
        opening = LootboxService(unit).open(player_id, lootbox_type_id, how)
        unit.commit()
    return jsonify(message="Lootbox opened successfully", **opening.as_json()), 201


@bp.delete("/lootboxes/<int:lootbox_id>")
def delete_lootbox(lootbox_id: int):
    with open_unit() as unit:
        ok = LootboxRepository(unit).delete(lootbox_id)
        unit.complete(ok)
    changed(ok, "Lootbox", lootbox_id)
    return jsonify(message="Lootbox deleted")


@bp.get("/lootboxes/<int:lootbox_id>/drops")
def lootbox_drop(lootbox_id: int):
    with open_unit(read_only=True) as unit:
        drop = found(LootboxDropRepository(unit).for_lootbox(lootbox_id), "Drop for lootbox", lootbox_id)
    return jsonify(drop.as_json())


@bp.post("/lootbox-drops")
def create_drop():
    lootbox_id, stove_id = require_int(json_body(), "lootboxId", "stoveId")
    with open_unit() as unit:
        ok, drop_id = LootboxDropRepository(unit).create(lootbox_id, stove_id)
        unit.complete(ok)
    return jsonify(dropId=drop_id, message="Drop recorded"), 201


@bp.get("/lootbox-types")
def list_lootbox_types():
    with open_unit(read_only=True) as unit:
        return rows_json(LootboxTypeRepository(unit).all())


@bp.get("/lootbox-types/available")
def available_lootbox_types():
    with open_unit(read_only=True) as unit:
        return rows_json(LootboxTypeRepository(unit).available())


@bp.get("/lootbox-types/<int:lootbox_type_id>")
def get_lootbox_type(lootbox_type_id: int):
    with open_unit(read_only=True) as unit:
        box_type = found(LootboxTypeRepository(unit).get(lootbox_type_id), "Lootbox type", lootbox_type_id)
    return jsonify(box_type.as_json())
