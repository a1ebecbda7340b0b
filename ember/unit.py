"""Request-scoped unit of work over the pooled store.

A :class:`UnitOfWork` borrows one connection from the engine's pool for the
lifetime of a single logical operation. Read-write units open a transaction
immediately; read-only units never do. Every unit ends with exactly one
commit/rollback decision and hands its connection back on every path.

Typical use::

    with UnitOfWork(engine) as unit:
        trade = TradeService(unit).execute(listing_id, buyer_id)
        unit.commit()

Leaving the ``with`` block without a decision rolls back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Type

import sqlalchemy as sa
from sqlalchemy.engine import Connection, Engine

from .db import READ_ONLY_OPTION, db
from .errors import ResourceFault, UnitOfWorkError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecResult:
    rows_affected: int
    last_row_id: Optional[int] = None


class Statement:
    """A parameterised query bound to one unit's connection."""

    def __init__(self, unit: "UnitOfWork", query: str, params: Mapping[str, Any], row: Optional[Type] = None):
        self._unit = unit
        self.query = query
        self.params = dict(params)
        self.row = row

    def _run(self):
        try:
            return self._unit.connection.execute(sa.text(self.query), self.params)
        except sa.exc.OperationalError as e:
            raise ResourceFault("E_STORE", f"Store failure: {e.orig}") from e

    def _wrap(self, mapping):
        return self.row.from_mapping(mapping) if self.row is not None else mapping

    def one(self):
        mapping = self._run().mappings().first()
        if mapping is None:
            return None
        return self._wrap(mapping)

    def many(self) -> List:
        return [self._wrap(m) for m in self._run().mappings().all()]

    def scalar(self):
        return self._run().scalar()

    def execute(self) -> ExecResult:
        result = self._run()
        last_row_id = None
        if result.rowcount > 0 and self.query.lstrip().upper().startswith(("INSERT", "REPLACE")):
            last_row_id = result.lastrowid
            self._unit._last_insert_id = last_row_id
        return ExecResult(rows_affected=result.rowcount, last_row_id=last_row_id)


class UnitOfWork:
    def __init__(self, engine: Engine, read_only: bool = False):
        self.read_only = read_only
        self._completed = False
        self._tx = None
        self._last_insert_id: Optional[int] = None
        try:
            conn = engine.connect()
        except sa.exc.DBAPIError as e:
            raise ResourceFault("E_STORE_CONNECT", f"Could not open a store connection: {e.orig}") from e
        if read_only:
            conn.execution_options(**{READ_ONLY_OPTION: True})
        else:
            try:
                self._tx = conn.begin()
            except sa.exc.DBAPIError as e:
                conn.close()
                raise ResourceFault("E_STORE_BEGIN", f"Could not begin a transaction: {e.orig}") from e
        self._conn = conn

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def connection(self) -> Connection:
        if self._completed:
            raise UnitOfWorkError("unit of work is already completed")
        return self._conn

    def prepare(self, query: str, params: Optional[Mapping[str, Any]] = None, row: Optional[Type] = None) -> Statement:
        if self._completed:
            raise UnitOfWorkError("unit of work is already completed")
        return Statement(self, query, params or {}, row)

    def last_insert_id(self) -> int:
        # tracked per unit: a pooled connection may carry rowids from earlier borrowers
        if self._last_insert_id is None:
            raise UnitOfWorkError("no row has been inserted through this unit of work")
        return int(self._last_insert_id)

    def complete(self, commit: Optional[bool] = None) -> None:
        """Finish the unit. Idempotent; read-write units need an explicit decision."""
        if self._completed:
            return
        self._completed = True
        try:
            if self._tx is None:
                return
            if commit is None:
                self._tx.rollback()
                raise UnitOfWorkError(
                    "read-write unit of work needs an explicit commit or rollback decision"
                )
            if commit:
                try:
                    self._tx.commit()
                except sa.exc.OperationalError as e:
                    raise ResourceFault("E_STORE_COMMIT", f"Commit failed: {e.orig}") from e
            else:
                self._tx.rollback()
        finally:
            self._conn.close()

    def commit(self) -> None:
        self.complete(True)

    def rollback(self) -> None:
        self.complete(False)

    def __enter__(self) -> "UnitOfWork":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if not self._completed:
            if exc_type is None and not self.read_only:
                logger.warning("unit of work left open without a decision; rolling back")
            self.complete(False)
        return False


def open_unit(read_only: bool = False) -> UnitOfWork:
    """Open a unit on the current app's engine."""
    return UnitOfWork(db.engine, read_only=read_only)
