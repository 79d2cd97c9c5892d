from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.enums import Collection
from ..storage.repository import RecordStore
from .model import Teacher, TeacherAttendance


class TeacherRepository:
    def __init__(self, store: RecordStore):
        self._store = store

    def list_all(self) -> list[Teacher]:
        return [Teacher.from_record(r) for r in self._store.get_all(Collection.TEACHERS)]

    def get_by_id(self, teacher_id: str) -> Optional[Teacher]:
        for t in self.list_all():
            if t.teacher_id == teacher_id:
                return t
        return None

    def save(self, teacher: Teacher) -> None:
        self._store.save_one(Collection.TEACHERS, teacher.to_record())

    def delete_by_id(self, teacher_id: str) -> bool:
        return self._store.delete_one(Collection.TEACHERS, teacher_id)

    def count(self) -> int:
        return len(self._store.get_all(Collection.TEACHERS))


class TeacherAttendanceRepository:
    def __init__(self, store: RecordStore):
        self._store = store

    def list_for_date(self, attendance_date: date) -> list[TeacherAttendance]:
        rows = [TeacherAttendance.from_record(r) for r in self._store.get_all(Collection.TEACHER_ATTENDANCE)]
        return [r for r in rows if r.attendance_date == attendance_date]

    def save(self, record: TeacherAttendance) -> None:
        self._store.save_one(Collection.TEACHER_ATTENDANCE, record.to_record())
