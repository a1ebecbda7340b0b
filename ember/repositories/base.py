from typing import Any, Mapping, Optional, Tuple, Type

from ..unit import UnitOfWork


class Repository:
    """Shared plumbing for repositories bound to one unit of work.

    Repositories never begin, commit or roll back; the owner of the unit does.
    """

    def __init__(self, unit: UnitOfWork):
        self.unit = unit

    def _stmt(self, query: str, params: Optional[Mapping[str, Any]] = None, row: Optional[Type] = None):
        return self.unit.prepare(query, params, row)

    def _insert(self, query: str, params: Mapping[str, Any]) -> Tuple[bool, Optional[int]]:
        result = self._stmt(query, params).execute()
        if result.rows_affected != 1:
            return False, None
        return True, self.unit.last_insert_id()

    def _changed_one(self, query: str, params: Mapping[str, Any]) -> bool:
        return self._stmt(query, params).execute().rows_affected == 1

    def _count(self, query: str, params: Optional[Mapping[str, Any]] = None) -> int:
        return int(self._stmt(query, params).scalar() or 0)
