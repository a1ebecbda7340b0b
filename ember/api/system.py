from flask import Blueprint, jsonify

from ..clock import utc_now_iso
from ..unit import open_unit

bp = Blueprint("system_api", __name__, url_prefix="/api")


@bp.get("/health")
def health():
    return jsonify(status="ok", timestamp=utc_now_iso())


@bp.get("/db-test")
def db_test():
    with open_unit(read_only=True) as unit:
        tables = unit.prepare("SELECT COUNT(*) FROM sqlite_master WHERE type = 'table'").scalar()
    return jsonify(status="connected", tables=tables)
