from __future__ import annotations

from datetime import date

from ..core.enums import Collection
from ..storage.repository import RecordStore
from .model import AttendanceRecord


class AttendanceRepository:
    def __init__(self, store: RecordStore):
        self._store = store

    def list_all(self) -> list[AttendanceRecord]:
        return [AttendanceRecord.from_record(r) for r in self._store.get_all(Collection.ATTENDANCE)]

    def list_for_date(self, attendance_date: date) -> list[AttendanceRecord]:
        return [r for r in self.list_all() if r.attendance_date == attendance_date]

    def list_for_student(self, student_id: str) -> list[AttendanceRecord]:
        rows = [r for r in self.list_all() if r.student_id == student_id]
        rows.sort(key=lambda r: r.attendance_date, reverse=True)
        return rows

    def save(self, record: AttendanceRecord) -> None:
        self._store.save_one(Collection.ATTENDANCE, record.to_record())

    def delete_for_student(self, student_id: str) -> int:
        removed = 0
        for r in self.list_all():
            if r.student_id == student_id and self._store.delete_one(Collection.ATTENDANCE, r.record_id):
                removed += 1
        return removed
