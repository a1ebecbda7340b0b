from flask import Blueprint, jsonify, request

from ..repositories import TradeRepository
from ..services import TradeService
from ..unit import open_unit
from .common import changed, found, json_body, require_int, rows_json

bp = Blueprint("trades_api", __name__, url_prefix="/api")


@bp.get("/trades")
def list_trades():
    with open_unit(read_only=True) as unit:
        return rows_json(TradeRepository(unit).all())


@bp.get("/trades/recent")
def recent_trades():
    limit = request.args.get("limit", 10, type=int)
    with open_unit(read_only=True) as unit:
        return rows_json(TradeRepository(unit).recent(max(limit, 1)))


@bp.get("/trades/count")
def count_trades():
    with open_unit(read_only=True) as unit:
        return jsonify(count=TradeRepository(unit).count())


@bp.get("/trades/<int:trade_id>")
def get_trade(trade_id: int):
    with open_unit(read_only=True) as unit:
        trade = found(TradeRepository(unit).get(trade_id), "Trade", trade_id)
    return jsonify(trade.as_json())


@bp.get("/listings/<int:listing_id>/trade")
def trade_for_listing(listing_id: int):
    with open_unit(read_only=True) as unit:
        trade = found(TradeRepository(unit).by_listing(listing_id), "Trade for listing", listing_id)
    return jsonify(trade.as_json())


@bp.get("/players/<int:buyer_id>/trades")
def trades_by_buyer(buyer_id: int):
    with open_unit(read_only=True) as unit:
        return rows_json(TradeRepository(unit).by_buyer(buyer_id))


@bp.get("/players/<int:buyer_id>/trades/count")
def count_by_buyer(buyer_id: int):
    with open_unit(read_only=True) as unit:
        return jsonify(buyerId=buyer_id, count=TradeRepository(unit).count_by_buyer(buyer_id))


@bp.post("/trades")
def create_trade():
    listing_id, buyer_id = require_int(json_body(), "listingId", "buyerId")
    with open_unit() as unit:
        result = TradeService(unit).execute(listing_id, buyer_id)
        unit.commit()
    return jsonify(tradeId=result.trade_id, message="Trade executed successfully"), 201


@bp.delete("/trades/<int:trade_id>")
def delete_trade(trade_id: int):
    with open_unit() as unit:
        ok = TradeRepository(unit).delete(trade_id)
        unit.complete(ok)
    changed(ok, "Trade", trade_id)
    return jsonify(message="Trade deleted")
