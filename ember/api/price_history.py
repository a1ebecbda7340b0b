from flask import Blueprint, jsonify, request
from werkzeug.exceptions import BadRequest

from ..repositories import PriceHistoryRepository
from ..unit import open_unit
from .common import changed, found, json_body, require_int, rows_json

bp = Blueprint("price_history_api", __name__, url_prefix="/api")


@bp.get("/price-history")
def list_price_history():
    with open_unit(read_only=True) as unit:
        return rows_json(PriceHistoryRepository(unit).all())


@bp.get("/price-history/<int:history_id>")
def get_price_history(history_id: int):
    with open_unit(read_only=True) as unit:
        row = found(PriceHistoryRepository(unit).get(history_id), "Price history", history_id)
    return jsonify(row.as_json())


@bp.get("/stove-types/<int:type_id>/price-history")
def price_history_by_type(type_id: int):
    with open_unit(read_only=True) as unit:
        return rows_json(PriceHistoryRepository(unit).by_type(type_id))


@bp.get("/stove-types/<int:type_id>/price-stats")
def price_stats(type_id: int):
    with open_unit(read_only=True) as unit:
        stats = found(PriceHistoryRepository(unit).stats(type_id), "Price history for stove type", type_id)
    return jsonify(stats.as_json())


@bp.get("/stove-types/<int:type_id>/recent-prices")
def recent_prices(type_id: int):
    limit = request.args.get("limit", 10, type=int)
    with open_unit(read_only=True) as unit:
        return rows_json(PriceHistoryRepository(unit).recent(type_id, max(limit, 1)))


@bp.post("/price-history")
def record_sale():
    type_id, sale_price = require_int(json_body(), "typeId", "salePrice")
    if sale_price < 1:
        raise BadRequest("salePrice must be positive")
    with open_unit() as unit:
        ok, history_id = PriceHistoryRepository(unit).record_sale(type_id, sale_price)
        unit.complete(ok)
    return jsonify(historyId=history_id, message="Sale recorded"), 201


@bp.delete("/price-history/<int:history_id>")
def delete_price_history(history_id: int):
    with open_unit() as unit:
        ok = PriceHistoryRepository(unit).delete(history_id)
        unit.complete(ok)
    changed(ok, "Price history", history_id)
    return jsonify(message="Price history deleted")
