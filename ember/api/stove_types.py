from flask import Blueprint, jsonify
from werkzeug.exceptions import BadRequest

from ..models import RARITIES
from ..repositories import StoveTypeRepository
from ..unit import open_unit
from .common import changed, found, json_body, require_int, require_text, rows_json

bp = Blueprint("stove_types_api", __name__, url_prefix="/api")


def _check_rarity(rarity: str) -> str:
    if rarity not in RARITIES:
        raise BadRequest(f"rarity must be one of: {', '.join(RARITIES)}")
    return rarity


@bp.get("/stove-types")
def list_stove_types():
    with open_unit(read_only=True) as unit:
        return rows_json(StoveTypeRepository(unit).all())


@bp.get("/stove-types/<int:type_id>")
def get_stove_type(type_id: int):
    with open_unit(read_only=True) as unit:
        stove_type = found(StoveTypeRepository(unit).get(type_id), "Stove type", type_id)
    return jsonify(stove_type.as_json())


@bp.get("/stove-types/rarity/<rarity>")
def stove_types_by_rarity(rarity: str):
    _check_rarity(rarity)
    with open_unit(read_only=True) as unit:
        return rows_json(StoveTypeRepository(unit).by_rarity(rarity))


@bp.get("/stove-types/weight/total")
def total_weight():
    with open_unit(read_only=True) as unit:
        return jsonify(totalWeight=StoveTypeRepository(unit).total_weight())


@bp.post("/stove-types")
def create_stove_type():
    data = json_body()
    name, image_url, rarity = require_text(data, "name", "imageUrl", "rarity")
    weight = require_int(data, "lootboxWeight")
    _check_rarity(rarity)
    if weight < 1:
        raise BadRequest("lootboxWeight must be positive")
    with open_unit() as unit:
        ok, type_id = StoveTypeRepository(unit).create(name, image_url, rarity, weight)
        unit.complete(ok)
    return jsonify(typeId=type_id, message="Stove type created"), 201


@bp.patch("/stove-types/<int:type_id>/weight")
def update_weight(type_id: int):
    weight = require_int(json_body(), "lootboxWeight")
    if weight < 1:
        raise BadRequest("lootboxWeight must be positive")
    with open_unit() as unit:
        ok = StoveTypeRepository(unit).update_weight(type_id, weight)
        unit.complete(ok)
    changed(ok, "Stove type", type_id)
    return jsonify(message="Weight updated")


@bp.patch("/stove-types/<int:type_id>/image")
def update_image(type_id: int):
    image_url = require_text(json_body(), "imageUrl")
    with open_unit() as unit:
        ok = StoveTypeRepository(unit).update_image(type_id, image_url)
        unit.complete(ok)
    changed(ok, "Stove type", type_id)
    return jsonify(message="Image updated")


@bp.delete("/stove-types/<int:type_id>")
def delete_stove_type(type_id: int):
    with open_unit() as unit:
        ok = StoveTypeRepository(unit).delete(type_id)
        unit.complete(ok)
    changed(ok, "Stove type", type_id)
    return jsonify(message="Stove type deleted")
