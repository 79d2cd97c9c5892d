from __future__ import annotations

from ..core.enums import Collection
from ..storage.repository import RecordStore
from .model import ExamResult


class ExamRepository:
    def __init__(self, store: RecordStore):
        self._store = store

    def list_all(self) -> list[ExamResult]:
        return [ExamResult.from_record(r) for r in self._store.get_all(Collection.EXAMS)]

    def save(self, result: ExamResult) -> None:
        self._store.save_one(Collection.EXAMS, result.to_record())

    def delete_for_student(self, student_id: str) -> int:
        removed = 0
        for r in self.list_all():
            if r.student_id == student_id and self._store.delete_one(Collection.EXAMS, r.result_id):
                removed += 1
        return removed
