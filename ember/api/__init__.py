"""JSON API blueprints, all mounted under ``/api``."""

from .common import register_error_handlers
from .listings import bp as listings_bp
from .lootboxes import bp as lootboxes_bp
from .ownerships import bp as ownerships_bp
from .players import bp as players_bp
from .price_history import bp as price_history_bp
from .stove_types import bp as stove_types_bp
from .stoves import bp as stoves_bp
from .system import bp as system_bp
from .trades import bp as trades_bp

BLUEPRINTS = (
    system_bp,
    players_bp,
    stove_types_bp,
    stoves_bp,
    listings_bp,
    trades_bp,
    ownerships_bp,
    price_history_bp,
    lootboxes_bp,
)


def register_api(app) -> None:
    for blueprint in BLUEPRINTS:
        app.register_blueprint(blueprint)
    register_error_handlers(app)
