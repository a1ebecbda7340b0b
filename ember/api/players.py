from flask import Blueprint, jsonify

from ..repositories import PlayerRepository
from ..unit import open_unit
from .common import changed, found, json_body, optional_int, require_int, require_text, rows_json

bp = Blueprint("players_api", __name__, url_prefix="/api")


@bp.get("/players")
def list_players():
    with open_unit(read_only=True) as unit:
        return rows_json(PlayerRepository(unit).all())


@bp.get("/players/<int:player_id>")
def get_player(player_id: int):
    with open_unit(read_only=True) as unit:
        player = found(PlayerRepository(unit).get(player_id), "Player", player_id)
    return jsonify(player.as_json())


@bp.post("/players")
def create_player():
    data = json_body()
    username, password, email = require_text(data, "username", "password", "email")
    coins = optional_int(data, "coins")
    lootbox_count = optional_int(data, "lootboxCount")
    with open_unit() as unit:
        ok, player_id = PlayerRepository(unit).create(
            username, password, email, coins=coins, lootbox_count=lootbox_count,
            is_admin=bool(data.get("isAdmin")),
        )
        unit.complete(ok)
    return jsonify(playerId=player_id, message="Player created"), 201


@bp.patch("/players/<int:player_id>/coins")
def update_coins(player_id: int):
    coins = require_int(json_body(), "coins")
    with open_unit() as unit:
        ok = PlayerRepository(unit).update_coins(player_id, coins)
        unit.complete(ok)
    changed(ok, "Player", player_id)
    return jsonify(message="Coins updated")


@bp.patch("/players/<int:player_id>/lootboxes")
def update_lootbox_count(player_id: int):
    count = require_int(json_body(), "lootboxCount")
    with open_unit() as unit:
        ok = PlayerRepository(unit).update_lootbox_count(player_id, count)
        unit.complete(ok)
    changed(ok, "Player", player_id)
    return jsonify(message="Lootbox count updated")


@bp.delete("/players/<int:player_id>")
def delete_player(player_id: int):
    with open_unit() as unit:
        ok = PlayerRepository(unit).delete(player_id)
        unit.complete(ok)
    changed(ok, "Player", player_id)
    return jsonify(message="Player deleted")
