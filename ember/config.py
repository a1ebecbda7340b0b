"""Runtime settings, read from the environment."""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[1]
DB_PATH = BASE_DIR / "db" / "EmberExchange.db"


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


def load_config() -> dict:
    return {
        "SECRET_KEY": os.environ.get("SECRET_KEY", "dev"),
        "SQLALCHEMY_DATABASE_URI": os.environ.get("DATABASE_URL", f"sqlite:///{DB_PATH}"),
        "SQLALCHEMY_TRACK_MODIFICATIONS": False,
        "SQLITE_TIMEOUT": float(os.environ.get("SQLITE_TIMEOUT", "5")),
        "AUTO_CREATE_TABLES": _flag("AUTO_CREATE_TABLES", "1"),
        "RESET_DB": _flag("RESET_DB", "0"),
        "SEED_SAMPLE_DATA": _flag("SEED_SAMPLE_DATA", "1"),
    }
