from __future__ import annotations

import copy

from ..core.enums import Collection
from .repository import Record, RecordStore


class InMemoryRecordStore(RecordStore):
    """Process-local store used for tests and the ``memory`` backend.

    Records are deep-copied in and out so callers never share state with the
    store, the same way a serialized backend behaves.
    """

    def __init__(self, initial: dict[Collection, list[Record]] | None = None):
        self._data: dict[Collection, dict[str, Record]] = {}
        for collection, records in (initial or {}).items():
            for record in records:
                self.save_one(collection, record)

    def get_all(self, collection: Collection) -> list[Record]:
        return [copy.deepcopy(r) for r in self._data.get(collection, {}).values()]

    def save_one(self, collection: Collection, record: Record) -> None:
        self._data.setdefault(collection, {})[str(record["id"])] = copy.deepcopy(record)

    def delete_one(self, collection: Collection, record_id: str) -> bool:
        return self._data.get(collection, {}).pop(str(record_id), None) is not None
