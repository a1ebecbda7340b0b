from flask import Blueprint, jsonify

from ..errors import InvalidState
from ..repositories import OwnershipRepository
from ..services import OwnershipService
from ..unit import open_unit
from .common import found, json_body, require_int, require_text, rows_json

bp = Blueprint("ownerships_api", __name__, url_prefix="/api")


@bp.get("/ownerships")
def list_ownerships():
    with open_unit(read_only=True) as unit:
        return rows_json(OwnershipRepository(unit).all())


@bp.get("/ownerships/<int:ownership_id>")
def get_ownership(ownership_id: int):
    with open_unit(read_only=True) as unit:
        row = found(OwnershipRepository(unit).get(ownership_id), "Ownership", ownership_id)
    return jsonify(row.as_json())


@bp.get("/stoves/<int:stove_id>/ownership-history")
def ownership_history(stove_id: int):
    with open_unit(read_only=True) as unit:
        return rows_json(OwnershipRepository(unit).history_for_stove(stove_id))


@bp.get("/stoves/<int:stove_id>/current-owner")
def current_owner(stove_id: int):
    with open_unit(read_only=True) as unit:
        row = found(OwnershipRepository(unit).current(stove_id), "Ownership for stove", stove_id)
    return jsonify(row.as_json())


@bp.get("/stoves/<int:stove_id>/ownership-changes/count")
def count_changes(stove_id: int):
    with open_unit(read_only=True) as unit:
        return jsonify(stoveId=stove_id, count=OwnershipRepository(unit).count_changes(stove_id))


@bp.get("/players/<int:player_id>/ownerships")
def ownerships_by_player(player_id: int):
    with open_unit(read_only=True) as unit:
        return rows_json(OwnershipRepository(unit).by_player(player_id))


@bp.get("/players/<int:player_id>/acquired-stoves/count")
def count_acquisitions(player_id: int):
    with open_unit(read_only=True) as unit:
        return jsonify(playerId=player_id, count=OwnershipRepository(unit).count_acquisitions(player_id))


@bp.post("/ownerships")
def record_ownership():
    data = json_body()
    stove_id, player_id = require_int(data, "stoveId", "playerId")
    how = require_text(data, "acquiredHow")
    with open_unit() as unit:
        ownership_id = OwnershipService(unit).transfer_stove(stove_id, player_id, how)
        unit.commit()
    return jsonify(ownershipId=ownership_id, message="Ownership recorded"), 201


@bp.delete("/ownerships/<int:ownership_id>")
def delete_ownership(ownership_id: int):
    with open_unit() as unit:
        repo = OwnershipRepository(unit)
        row = found(repo.get(ownership_id), "Ownership", ownership_id)
        current = repo.current(row.stove_id)
        # the newest row backs Stove.currentOwnerId
        if current is not None and current.ownership_id == ownership_id:
            raise InvalidState("E_CURRENT_OWNERSHIP", "Cannot delete the current ownership record")
        ok = repo.delete(ownership_id)
        unit.complete(ok)
    return jsonify(message="Ownership deleted")
