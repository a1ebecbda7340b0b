from flask import Blueprint, jsonify

from ..repositories import StoveRepository
from ..services import OwnershipService
from ..unit import open_unit
from .common import changed, found, json_body, require_int, rows_json

bp = Blueprint("stoves_api", __name__, url_prefix="/api")


@bp.get("/stoves")
def list_stoves():
    with open_unit(read_only=True) as unit:
        return rows_json(StoveRepository(unit).all())


@bp.get("/stoves/<int:stove_id>")
def get_stove(stove_id: int):
    with open_unit(read_only=True) as unit:
        stove = found(StoveRepository(unit).get(stove_id), "Stove", stove_id)
    return jsonify(stove.as_json())


@bp.get("/players/<int:player_id>/stoves")
def stoves_by_owner(player_id: int):
    with open_unit(read_only=True) as unit:
        return rows_json(StoveRepository(unit).by_owner(player_id))


@bp.get("/players/<int:player_id>/stoves/count")
def count_by_owner(player_id: int):
    with open_unit(read_only=True) as unit:
        return jsonify(playerId=player_id, count=StoveRepository(unit).count_by_owner(player_id))


@bp.get("/stove-types/<int:type_id>/stoves")
def stoves_by_type(type_id: int):
    with open_unit(read_only=True) as unit:
        return rows_json(StoveRepository(unit).by_type(type_id))


@bp.get("/stove-types/<int:type_id>/stoves/count")
def count_by_type(type_id: int):
    with open_unit(read_only=True) as unit:
        return jsonify(typeId=type_id, count=StoveRepository(unit).count_by_type(type_id))


@bp.post("/stoves")
def mint_stove():
    data = json_body()
    type_id, owner_id = require_int(data, "typeId", "currentOwnerId")
    how = data.get("acquiredHow") or "lootbox"
    with open_unit() as unit:
        stove_id = OwnershipService(unit).mint_stove(type_id, owner_id, how)
        unit.commit()
    return jsonify(stoveId=stove_id, message="Stove minted"), 201


@bp.patch("/stoves/<int:stove_id>/owner")
def change_owner(stove_id: int):
    data = json_body()
    new_owner = require_int(data, "newOwnerId")
    how = data.get("acquiredHow") or "trade"
    with open_unit() as unit:
        ownership_id = OwnershipService(unit).transfer_stove(stove_id, new_owner, how)
        unit.commit()
    return jsonify(ownershipId=ownership_id, message="Ownership transferred")


@bp.delete("/stoves/<int:stove_id>")
def delete_stove(stove_id: int):
    with open_unit() as unit:
        ok = StoveRepository(unit).delete(stove_id)
        unit.complete(ok)
    changed(ok, "Stove", stove_id)
    return jsonify(message="Stove deleted")
