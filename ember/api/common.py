"""Request helpers shared by the API blueprints."""

from flask import jsonify, request
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import BadRequest

from ..errors import MarketError, NotFound, classify_integrity_error


def json_body() -> dict:
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        raise BadRequest("Request body must be a JSON object")
    return data


def require_int(data: dict, *names: str):
    values = []
    for name in names:
        value = data.get(name)
        # bools are ints to Python but not to clients
        if not isinstance(value, int) or isinstance(value, bool):
            raise BadRequest(f"{name} is required and must be an integer")
        values.append(value)
    return values[0] if len(values) == 1 else values


def require_text(data: dict, *names: str):
    values = []
    for name in names:
        value = data.get(name)
        if not isinstance(value, str) or not value.strip():
            raise BadRequest(f"{name} is required")
        values.append(value.strip())
    return values[0] if len(values) == 1 else values


def found(row, what: str, key):
    if row is None:
        raise NotFound("E_NOT_FOUND", f"{what} {key} not found")
    return row


def changed(ok: bool, what: str, key) -> None:
    if not ok:
        raise NotFound("E_NOT_FOUND", f"{what} {key} not found")


def optional_int(data: dict, name: str, default: int = 0) -> int:
    value = data.get(name, default)
    if not isinstance(value, int) or isinstance(value, bool):
        raise BadRequest(f"{name} must be an integer")
    return value


def rows_json(rows):
    return jsonify([r.as_json() for r in rows])


def register_error_handlers(app) -> None:
    @app.errorhandler(MarketError)
    def _market_error(e: MarketError):
        return jsonify(e.as_json()), e.status

    @app.errorhandler(IntegrityError)
    def _integrity_error(e: IntegrityError):
        err = classify_integrity_error(e)
        app.logger.info("constraint rejected write constraint=%s detail=%s", err.constraint, err.message)
        return jsonify(err.as_json()), err.status

    @app.errorhandler(BadRequest)
    def _bad_request(e: BadRequest):
        return jsonify(error=e.description, kind="bad_request"), 400
