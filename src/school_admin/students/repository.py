from __future__ import annotations

from typing import Optional

from ..core.constants import FIRST_ROLL_NO
from ..core.enums import Collection
from ..storage.repository import RecordStore
from .model import Student


class StudentRepository:
    def __init__(self, store: RecordStore):
        self._store = store

    def list_all(self) -> list[Student]:
        return [Student.from_record(r) for r in self._store.get_all(Collection.STUDENTS)]

    def get_by_id(self, student_id: str) -> Optional[Student]:
        for s in self.list_all():
            if s.student_id == student_id:
                return s
        return None

    def save(self, student: Student) -> None:
        self._store.save_one(Collection.STUDENTS, student.to_record())

    def delete_by_id(self, student_id: str) -> bool:
        return self._store.delete_one(Collection.STUDENTS, student_id)

    def count(self) -> int:
        return len(self._store.get_all(Collection.STUDENTS))

    def next_roll_no(self) -> int:
        students = self.list_all()
        if not students:
            return FIRST_ROLL_NO
        return max(s.roll_no for s in students) + 1
