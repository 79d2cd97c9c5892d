from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import timestamp_token, today
from ..common.validators import (
    require_choice,
    require_date,
    require_email,
    require_non_empty,
    require_phone,
    require_positive,
)
from ..core.enums import TeacherAttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import Teacher, TeacherAttendance, teacher_attendance_id
from .repository import TeacherAttendanceRepository, TeacherRepository

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "full_name",
    "email",
    "phone",
    "subject",
    "qualification",
    "salary",
    "join_date",
)


class TeacherService:
    """Use case: teacher directory and daily teacher attendance."""

    def __init__(self, teachers: TeacherRepository, attendance: TeacherAttendanceRepository):
        self._teachers = teachers
        self._attendance = attendance

    def save_teacher(
        self,
        *,
        full_name: str,
        subject: str,
        salary: float,
        email: str = "",
        phone: str = "",
        qualification: str = "",
        join_date: date | str | None = None,
        teacher_id: Optional[str] = None,
    ) -> Teacher:
        """Create (no id) or replace (existing id) a teacher."""

        email = (email or "").strip()
        phone = (phone or "").strip()
        teacher = Teacher(
            teacher_id=(teacher_id or "").strip() or timestamp_token(),
            full_name=require_non_empty(full_name, "Full Name"),
            email=require_email(email) if email else "",
            phone=require_phone(phone, "Phone number") if phone else "",
            subject=require_non_empty(subject, "Subject"),
            qualification=(qualification or "").strip(),
            salary=require_positive(salary, "Salary"),
            join_date=require_date(join_date, "Join Date") if join_date else today(),
        )
        self._teachers.save(teacher)
        return teacher

    def add_teacher(self, *, teacher_id: Optional[str] = None, **fields) -> Teacher:
        """Create only; an id that is already taken is rejected."""

        teacher_id = (teacher_id or "").strip()
        if teacher_id and self._teachers.get_by_id(teacher_id):
            raise ValidationError(f"Teacher {teacher_id} already exists")
        return self.save_teacher(teacher_id=teacher_id or None, **fields)

    def update_teacher(self, teacher_id: str, **changes) -> Teacher:
        """Apply the given fields over the stored teacher."""

        existing = self.get(teacher_id)
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")

        data = {name: getattr(existing, name) for name in EDITABLE_FIELDS}
        data.update(changes)
        return self.save_teacher(teacher_id=existing.teacher_id, **data)

    def get(self, teacher_id: str) -> Teacher:
        teacher = self._teachers.get_by_id(teacher_id)
        if not teacher:
            raise NotFoundError(f"Teacher {teacher_id} not found")
        return teacher

    def list_teachers(self, *, search: Optional[str] = None) -> list[Teacher]:
        term = (search or "").strip().lower()
        return [
            t
            for t in self._teachers.list_all()
            if not term or term in t.full_name.lower() or term in t.subject.lower()
        ]

    def delete(self, teacher_id: str) -> None:
        if not self._teachers.delete_by_id(teacher_id):
            raise NotFoundError(f"Teacher {teacher_id} not found")
        logger.info("Deleted teacher %s", teacher_id)

    def count(self) -> int:
        return self._teachers.count()

    def mark_attendance(
        self,
        teacher_id: str,
        attendance_date: date,
        status: TeacherAttendanceStatus | str,
    ) -> TeacherAttendance:
        status = require_choice(TeacherAttendanceStatus, status, "Status")
        self.get(teacher_id)

        record = TeacherAttendance(
            record_id=teacher_attendance_id(teacher_id, attendance_date),
            teacher_id=teacher_id,
            attendance_date=attendance_date,
            status=status,
        )
        self._attendance.save(record)
        return record

    def attendance_for_date(self, attendance_date: date) -> dict[str, TeacherAttendanceStatus]:
        return {r.teacher_id: r.status for r in self._attendance.list_for_date(attendance_date)}
