from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..common.datetime_utils import parse_iso_date, to_iso
from ..core.enums import TeacherAttendanceStatus


def teacher_attendance_id(teacher_id: str, attendance_date: date) -> str:
    return f"{teacher_id}-{to_iso(attendance_date)}"


@dataclass(frozen=True)
class Teacher:
    teacher_id: str
    full_name: str
    email: str
    phone: str
    subject: str
    qualification: str
    salary: float
    join_date: Optional[date]

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.teacher_id,
            "fullName": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "subject": self.subject,
            "qualification": self.qualification,
            "salary": self.salary,
            "joinDate": to_iso(self.join_date) or "",
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "Teacher":
        joined = data.get("joinDate")
        return cls(
            teacher_id=str(data["id"]),
            full_name=str(data.get("fullName", "")),
            email=str(data.get("email", "")),
            phone=str(data.get("phone", "")),
            subject=str(data.get("subject", "")),
            qualification=str(data.get("qualification", "")),
            salary=data.get("salary", 0),
            join_date=parse_iso_date(joined) if joined else None,
        )


@dataclass(frozen=True)
class TeacherAttendance:
    record_id: str
    teacher_id: str
    attendance_date: date
    status: TeacherAttendanceStatus

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.record_id,
            "teacherId": self.teacher_id,
            "date": to_iso(self.attendance_date),
            "status": self.status.value,
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "TeacherAttendance":
        return cls(
            record_id=str(data["id"]),
            teacher_id=str(data["teacherId"]),
            attendance_date=parse_iso_date(data["date"]),
            status=TeacherAttendanceStatus(data["status"]),
        )
