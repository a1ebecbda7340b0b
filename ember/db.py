from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine

# Single SQLAlchemy instance shared by the app
db = SQLAlchemy()

# Execution option carried by read-only units; the begin hook skips BEGIN for them
READ_ONLY_OPTION = "ember_read_only"


def install_sqlite_hooks(engine: Engine) -> None:
    """Enforce foreign keys and take over BEGIN handling on SQLite engines.

    pysqlite opens transactions lazily on its own; with ``isolation_level``
    cleared the driver stays in autocommit and the ``begin`` hook below emits
    ``BEGIN IMMEDIATE`` only for read-write units. Writers take the
    RESERVED lock at BEGIN and queue behind each other on the busy timeout.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_conn, _record):
        dbapi_conn.isolation_level = None
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        if not conn.get_execution_options().get(READ_ONLY_OPTION):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
