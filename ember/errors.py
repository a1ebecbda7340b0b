"""Error kinds surfaced by the marketplace core.

Every domain failure is a :class:`MarketError` carrying a stable ``kind`` (used
by the HTTP layer to pick a status code), a short machine ``code`` and a human
``message``. Storage-engine rejections arrive as SQLAlchemy ``IntegrityError``
and are turned into :class:`ConstraintViolation` by
:func:`classify_integrity_error`.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import IntegrityError


class MarketError(Exception):
    kind = "error"
    status = 500

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def as_json(self) -> dict:
        return {"error": self.message, "code": self.code, "kind": self.kind}


class NotFound(MarketError):
    kind = "not_found"
    status = 404


class InvalidState(MarketError):
    kind = "invalid_state"
    status = 409


class InvalidOperation(MarketError):
    kind = "invalid_operation"
    status = 400


class ConstraintViolation(MarketError):
    kind = "constraint_violation"

    def __init__(self, code: str, message: str, constraint: str):
        super().__init__(code, message)
        self.constraint = constraint

    @property
    def status(self) -> int:
        return 409 if self.constraint in ("unique", "foreign_key") else 400

    def as_json(self) -> dict:
        data = super().as_json()
        data["constraint"] = self.constraint
        return data


class ResourceFault(MarketError):
    kind = "resource_fault"
    status = 503


class UnitOfWorkError(RuntimeError):
    """A caller broke the unit-of-work contract (missing decision, reuse after completion)."""


_CONSTRAINT_MARKERS = (
    ("UNIQUE constraint failed", "unique", "E_UNIQUE"),
    ("FOREIGN KEY constraint failed", "foreign_key", "E_FOREIGN_KEY"),
    ("CHECK constraint failed", "check", "E_CHECK"),
    ("NOT NULL constraint failed", "not_null", "E_NOT_NULL"),
)


def classify_integrity_error(exc: IntegrityError) -> ConstraintViolation:
    """Map a storage-engine rejection onto a :class:`ConstraintViolation`."""
    text = str(getattr(exc, "orig", None) or exc)
    for marker, constraint, code in _CONSTRAINT_MARKERS:
        if marker in text:
            detail: Optional[str] = text.split(":", 1)[1].strip() if ":" in text else None
            message = f"{marker}: {detail}" if detail else marker
            return ConstraintViolation(code, message, constraint)
    return ConstraintViolation("E_CONSTRAINT", text, "unknown")
