from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..common.validators import require_choice
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError
from ..students.repository import StudentRepository
from .model import AttendanceRecord, AttendanceSummary, attendance_record_id
from .repository import AttendanceRepository


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, students: StudentRepository):
        self._attendance = attendance
        self._students = students

    def mark(self, student_id: str, attendance_date: date, status: AttendanceStatus | str) -> AttendanceRecord:
        """Save the day's status; marking the same day again overwrites it."""

        status = require_choice(AttendanceStatus, status, "Status")
        if not self._students.get_by_id(student_id):
            raise NotFoundError(f"Student {student_id} not found")

        record = AttendanceRecord(
            record_id=attendance_record_id(student_id, attendance_date),
            student_id=student_id,
            attendance_date=attendance_date,
            status=status,
        )
        self._attendance.save(record)
        return record

    def mark_all(self, attendance_date: date, status: AttendanceStatus | str) -> int:
        status = require_choice(AttendanceStatus, status, "Status")
        students = self._students.list_all()
        for s in students:
            self._attendance.save(
                AttendanceRecord(
                    record_id=attendance_record_id(s.student_id, attendance_date),
                    student_id=s.student_id,
                    attendance_date=attendance_date,
                    status=status,
                )
            )
        return len(students)

    def statuses_for_date(self, attendance_date: date) -> dict[str, AttendanceStatus]:
        return {r.student_id: r.status for r in self._attendance.list_for_date(attendance_date)}

    def records_for_student(self, student_id: str) -> list[AttendanceRecord]:
        return self._attendance.list_for_student(student_id)

    def present_count(self, attendance_date: date) -> int:
        return sum(1 for s in self.statuses_for_date(attendance_date).values() if s is AttendanceStatus.PRESENT)

    def summarize(self, records: Optional[Iterable[AttendanceRecord]] = None) -> AttendanceSummary:
        records = list(self._attendance.list_all() if records is None else records)

        counts = {status: 0 for status in AttendanceStatus}
        by_date: dict[str, dict[str, int]] = {}
        for r in records:
            counts[r.status] += 1
            day = by_date.setdefault(r.attendance_date.strftime("%Y-%m-%d"), {"present": 0, "absent": 0})
            if r.status is AttendanceStatus.PRESENT:
                day["present"] += 1
            elif r.status is AttendanceStatus.ABSENT:
                day["absent"] += 1

        return AttendanceSummary(
            total_records=len(records),
            counts=counts,
            by_date=dict(sorted(by_date.items())),
        )
