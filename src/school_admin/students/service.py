from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import today
from ..common.validators import (
    require_choice,
    require_date,
    require_min_length,
    require_non_empty,
    require_person_name,
    require_phone,
)
from ..core.constants import STUDENT_ID_PREFIX
from ..core.enums import Gender
from ..core.exceptions import NotFoundError, ValidationError
from ..exams.repository import ExamRepository
from ..fees.repository import FeeRepository
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "roll_no",
    "full_name",
    "gender",
    "date_of_birth",
    "contact_number",
    "address",
    "class_name",
    "section",
    "admission_date",
)


@dataclass(frozen=True)
class DeletionReport:
    student_id: str
    fee_records: int
    attendance_records: int
    exam_results: int


class StudentService:
    """Use case: student registration, updates and removal."""

    def __init__(
        self,
        students: StudentRepository,
        fees: FeeRepository,
        attendance: AttendanceRepository,
        exams: ExamRepository,
    ):
        self._students = students
        self._fees = fees
        self._attendance = attendance
        self._exams = exams

    def generate_credentials(self, *, on: Optional[date] = None) -> tuple[str, int]:
        roll_no = self._students.next_roll_no()
        year = (on or today()).year
        return f"{STUDENT_ID_PREFIX}-{year}-{roll_no}", roll_no

    def _validate(self, data: dict[str, Any], *, current_id: Optional[str], on: date) -> Student:
        student_id = require_non_empty(data.get("student_id"), "Student ID")

        roll_no = data.get("roll_no")
        if isinstance(roll_no, bool) or not isinstance(roll_no, int) or roll_no <= 0:
            raise ValidationError("Enter a valid positive roll number")

        dob = require_date(data.get("date_of_birth"), "Date of Birth")
        if dob >= on:
            raise ValidationError("Date of Birth cannot be in the future")
        admitted = require_date(data.get("admission_date"), "Admission Date")
        if admitted <= dob:
            raise ValidationError("Admission Date must be after Date of Birth")

        address = require_non_empty(data.get("address"), "Address")
        require_min_length(address, "Address", 5)

        student = Student(
            student_id=student_id,
            roll_no=roll_no,
            full_name=require_person_name(data.get("full_name")),
            gender=require_choice(Gender, data.get("gender"), "Gender"),
            date_of_birth=dob,
            contact_number=require_phone(data.get("contact_number"), "Contact Number"),
            address=address,
            class_name=require_non_empty(data.get("class_name"), "Class"),
            section=require_non_empty(data.get("section"), "Section"),
            admission_date=admitted,
        )

        for other in self._students.list_all():
            if other.student_id == current_id:
                continue
            if other.student_id.lower() == student.student_id.lower():
                raise ValidationError("Student ID already exists")
            if other.roll_no == student.roll_no:
                raise ValidationError(f"Roll number {student.roll_no} is already assigned")
        return student

    def register(
        self,
        *,
        full_name: str,
        gender: Gender | str,
        date_of_birth: date | str,
        contact_number: str,
        address: str,
        class_name: str,
        section: str,
        admission_date: date | str | None = None,
        student_id: Optional[str] = None,
        roll_no: Optional[int] = None,
        on: Optional[date] = None,
    ) -> Student:
        on = on or today()
        generated_id, generated_roll = self.generate_credentials(on=on)
        data = {
            "student_id": student_id or generated_id,
            "roll_no": roll_no if roll_no is not None else generated_roll,
            "full_name": full_name,
            "gender": gender,
            "date_of_birth": date_of_birth,
            "contact_number": contact_number,
            "address": address,
            "class_name": class_name,
            "section": section,
            "admission_date": admission_date or on,
        }
        student = self._validate(data, current_id=None, on=on)
        self._students.save(student)
        logger.info("Registered student %s (roll %s)", student.student_id, student.roll_no)
        return student

    def update(self, student_id: str, *, on: Optional[date] = None, **changes: Any) -> Student:
        """Update fields in place; the id itself never changes."""

        existing = self.get(student_id)
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")

        data = {name: getattr(existing, name) for name in EDITABLE_FIELDS}
        data.update(changes)
        data["student_id"] = existing.student_id

        student = self._validate(data, current_id=existing.student_id, on=on or today())
        self._students.save(student)
        return student

    def get(self, student_id: str) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError(f"Student {student_id} not found")
        return student

    def list_students(
        self,
        *,
        search: Optional[str] = None,
        class_name: Optional[str] = None,
        section: Optional[str] = None,
    ) -> list[Student]:
        term = (search or "").strip().lower()
        rows = []
        for s in self._students.list_all():
            if term and term not in s.full_name.lower() and term not in str(s.roll_no) and term not in s.student_id.lower():
                continue
            if class_name and s.class_name != class_name:
                continue
            if section and s.section != section:
                continue
            rows.append(s)
        rows.sort(key=lambda s: s.roll_no)
        return rows

    def delete(self, student_id: str) -> DeletionReport:
        """Remove the student and every fee, attendance and exam record of theirs."""

        self.get(student_id)
        # Student row goes last so no dependent record is ever left without it.
        report = DeletionReport(
            student_id=student_id,
            fee_records=self._fees.delete_for_student(student_id),
            attendance_records=self._attendance.delete_for_student(student_id),
            exam_results=self._exams.delete_for_student(student_id),
        )
        self._students.delete_by_id(student_id)
        logger.info(
            "Deleted student %s with %s fee, %s attendance and %s exam records",
            student_id,
            report.fee_records,
            report.attendance_records,
            report.exam_results,
        )
        return report
