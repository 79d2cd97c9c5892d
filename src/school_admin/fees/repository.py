from __future__ import annotations

from typing import Optional

from ..core.enums import Collection
from ..storage.repository import RecordStore
from .model import FeeRecord, fee_record_id


class FeeRepository:
    def __init__(self, store: RecordStore):
        self._store = store

    def list_all(self) -> list[FeeRecord]:
        return [FeeRecord.from_record(r) for r in self._store.get_all(Collection.FEES)]

    def get(self, student_id: str, academic_year: str) -> Optional[FeeRecord]:
        wanted = fee_record_id(student_id, academic_year)
        for r in self.list_all():
            if r.record_id == wanted:
                return r
        return None

    def save(self, record: FeeRecord) -> None:
        """Whole-record replace; the fee service is the only caller."""

        self._store.save_one(Collection.FEES, record.to_record())

    def delete_for_student(self, student_id: str) -> int:
        removed = 0
        for r in self.list_all():
            if r.student_id == student_id and self._store.delete_one(Collection.FEES, r.record_id):
                removed += 1
        return removed
