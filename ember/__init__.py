# ember/__init__.py
import logging
from pathlib import Path
from typing import Mapping, Optional

from flask import Flask

from .db import db, install_sqlite_hooks
from .config import load_config


def create_app(config: Optional[Mapping] = None) -> Flask:
    app = Flask(__name__)
    app.config.update(load_config())
    if config:
        app.config.update(config)

    uri = app.config["SQLALCHEMY_DATABASE_URI"]
    if uri.startswith("sqlite"):
        db_file = uri.split("///", 1)[-1]
        if db_file and db_file != ":memory:" and "///" in uri:
            Path(db_file).parent.mkdir(parents=True, exist_ok=True)
        app.config.setdefault(
            "SQLALCHEMY_ENGINE_OPTIONS",
            {"connect_args": {"timeout": app.config["SQLITE_TIMEOUT"]}},
        )

    db.init_app(app)

    app.logger.setLevel(logging.INFO)
    app.logger.info("DB URI: %s", app.config["SQLALCHEMY_DATABASE_URI"])
    app.logger.info(
        "AUTO_CREATE_TABLES=%s RESET_DB=%s SEED_SAMPLE_DATA=%s",
        app.config["AUTO_CREATE_TABLES"], app.config["RESET_DB"], app.config["SEED_SAMPLE_DATA"],
    )

    with app.app_context():
        # Ensure all models are imported so metadata is complete
        from . import models as _models  # noqa: F401
        from .schema import ensure_sample_data, ensure_schema, reset_schema
        from .unit import UnitOfWork

        install_sqlite_hooks(db.engine)

        if app.config["RESET_DB"]:
            reset_schema(db.engine)
            app.logger.info("Database reset complete")
        elif app.config["AUTO_CREATE_TABLES"]:
            ensure_schema(db.engine)

        if app.config["SEED_SAMPLE_DATA"]:
            with UnitOfWork(db.engine) as unit:
                result = ensure_sample_data(unit)
                unit.commit()
            app.logger.info("Sample data: %s", result)

    from .api import register_api
    register_api(app)

    return app
