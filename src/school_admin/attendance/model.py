from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from ..common.datetime_utils import parse_iso_date, to_iso
from ..core.enums import AttendanceStatus


def attendance_record_id(student_id: str, attendance_date: date) -> str:
    return f"{student_id}-{to_iso(attendance_date)}"


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's attendance for one day."""

    record_id: str
    student_id: str
    attendance_date: date
    status: AttendanceStatus

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.record_id,
            "studentId": self.student_id,
            "date": to_iso(self.attendance_date),
            "status": self.status.value,
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "AttendanceRecord":
        return cls(
            record_id=str(data["id"]),
            student_id=str(data["studentId"]),
            attendance_date=parse_iso_date(data["date"]),
            status=AttendanceStatus(data["status"]),
        )


@dataclass(frozen=True)
class AttendanceSummary:
    """Read-model: counts over a set of attendance records."""

    total_records: int
    counts: dict[AttendanceStatus, int]
    by_date: dict[str, dict[str, int]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalRecords": self.total_records,
            "counts": {status.value: n for status, n in self.counts.items()},
            "byDate": self.by_date,
        }
