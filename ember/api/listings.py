from flask import Blueprint, jsonify

from ..repositories import ListingRepository
from ..services import ListingService
from ..unit import open_unit
from .common import changed, found, json_body, require_int, rows_json

bp = Blueprint("listings_api", __name__, url_prefix="/api")


@bp.get("/listings")
def list_listings():
    with open_unit(read_only=True) as unit:
        return rows_json(ListingRepository(unit).all())


@bp.get("/listings/active")
def active_listings():
    with open_unit(read_only=True) as unit:
        return rows_json(ListingRepository(unit).active())


@bp.get("/listings/<int:listing_id>")
def get_listing(listing_id: int):
    with open_unit(read_only=True) as unit:
        listing = found(ListingRepository(unit).get(listing_id), "Listing", listing_id)
    return jsonify(listing.as_json())


@bp.get("/players/<int:seller_id>/listings")
def listings_by_seller(seller_id: int):
    with open_unit(read_only=True) as unit:
        return rows_json(ListingRepository(unit).by_seller(seller_id))


@bp.get("/players/<int:seller_id>/listings/active")
def active_listings_by_seller(seller_id: int):
    with open_unit(read_only=True) as unit:
        return rows_json(ListingRepository(unit).active_by_seller(seller_id))


@bp.get("/players/<int:seller_id>/active-listings/count")
def count_active_by_seller(seller_id: int):
    with open_unit(read_only=True) as unit:
        count = ListingRepository(unit).count_active_by_seller(seller_id)
    return jsonify(sellerId=seller_id, count=count)


@bp.get("/stoves/<int:stove_id>/listing")
def active_listing_for_stove(stove_id: int):
    with open_unit(read_only=True) as unit:
        listing = found(ListingRepository(unit).active_for_stove(stove_id), "Active listing for stove", stove_id)
    return jsonify(listing.as_json())


@bp.post("/listings")
def create_listing():
    seller_id, stove_id, price = require_int(json_body(), "sellerId", "stoveId", "price")
    with open_unit() as unit:
        listing_id = ListingService(unit).create_listing(seller_id, stove_id, price)
        unit.commit()
    return jsonify(listingId=listing_id, message="Listing created"), 201


@bp.patch("/listings/<int:listing_id>/price")
def update_price(listing_id: int):
    price = require_int(json_body(), "price")
    with open_unit() as unit:
        ListingService(unit).reprice(listing_id, price)
        unit.commit()
    return jsonify(message="Price updated")


@bp.patch("/listings/<int:listing_id>/cancel")
def cancel_listing(listing_id: int):
    with open_unit() as unit:
        ListingService(unit).cancel_listing(listing_id)
        unit.commit()
    return jsonify(message="Listing cancelled")


@bp.delete("/listings/<int:listing_id>")
def delete_listing(listing_id: int):
    with open_unit() as unit:
        ok = ListingRepository(unit).delete(listing_id)
        unit.complete(ok)
    changed(ok, "Listing", listing_id)
    return jsonify(message="Listing deleted")
