from __future__ import annotations

from typing import Any, Protocol

from ..core.enums import Collection

Record = dict[str, Any]


class RecordStore(Protocol):
    """Key-value persistence keyed by entity type.

    Note (DIP): services depend on this interface, never on a concrete store.
    Every record carries a string ``id``; ``save_one`` is an upsert that
    replaces the whole record.

    The store assumes a single writer. It must not be shared by two processes
    writing concurrently without adding a concurrency-control layer
    (e.g. optimistic versioning) first.
    """

    def get_all(self, collection: Collection) -> list[Record]:
        raise NotImplementedError

    def save_one(self, collection: Collection, record: Record) -> None:
        raise NotImplementedError

    def delete_one(self, collection: Collection, record_id: str) -> bool:
        raise NotImplementedError
