"""Named, insertion-ordered record collections."""

import copy
from typing import Any, Callable, Dict, List

from core.errors import NotFoundException
from core.query import same_value

Record = Dict[str, Any]


class CollectionStore:
    """Raw storage by identity.

    Records are deep-copied on the way in and on the way out, so nothing a
    caller holds can reach store-internal state.
    """

    def __init__(self):
        self._collections: Dict[str, List[Record]] = {}

    def all(self, resource: str) -> List[Record]:
        return copy.deepcopy(self._collections.get(resource, []))

    def get(self, resource: str, record_id: Any) -> Record:
        return copy.deepcopy(self._collections.get(resource, [])[self._index(resource, record_id)])

    def exists(self, resource: str, record_id: Any) -> bool:
        return self._find(resource, record_id) is not None

    def insert(self, resource: str, record: Record) -> Record:
        self._collections.setdefault(resource, []).append(copy.deepcopy(record))
        return copy.deepcopy(record)

    def replace(self, resource: str, record_id: Any, record: Record) -> Record:
        index = self._index(resource, record_id)
        self._collections[resource][index] = copy.deepcopy(record)
        return copy.deepcopy(record)

    def remove(self, resource: str, record_id: Any) -> Record:
        index = self._index(resource, record_id)
        return self._collections[resource].pop(index)

    def remove_where(self, resource: str, predicate: Callable[[Record], bool]) -> List[Record]:
        records = self._collections.get(resource)
        if not records:
            return []
        removed = [r for r in records if predicate(r)]
        if removed:
            self._collections[resource] = [r for r in records if not predicate(r)]
        return removed

    def _find(self, resource: str, record_id: Any):
        for index, record in enumerate(self._collections.get(resource, [])):
            if same_value(record.get("id"), record_id):
                return index
        return None

    def _index(self, resource: str, record_id: Any) -> int:
        index = self._find(resource, record_id)
        if index is None:
            raise NotFoundException(resource, record_id)
        return index
