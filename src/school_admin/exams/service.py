from __future__ import annotations

import math
from typing import Mapping

from ..common.validators import require_choice, require_non_empty
from ..core.constants import PASS_MARKS, SUBJECTS, TOTAL_MARKS
from ..core.enums import ExamType
from ..core.exceptions import NotFoundError, ValidationError
from ..students.repository import StudentRepository
from .model import ExamResult, exam_result_id
from .repository import ExamRepository


def grade_for(marks: float) -> str:
    if marks >= 90:
        return "A+"
    if marks >= 80:
        return "A"
    if marks >= 70:
        return "B"
    if marks >= 60:
        return "C"
    if marks >= 40:
        return "D"
    return "F"


def _require_marks(value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError("Marks must be a number")
    if not math.isfinite(value):
        raise ValidationError("Marks must be a number")
    if value < 0 or value > TOTAL_MARKS:
        raise ValidationError(f"Marks must be between 0 and {TOTAL_MARKS}")
    return value


def _require_subject(value) -> str:
    subject = require_non_empty(value, "Subject")
    if subject not in SUBJECTS:
        raise ValidationError(f"Subject must be one of: {', '.join(SUBJECTS)}")
    return subject


class ExamService:
    """Use case: marks entry per (student, exam, subject)."""

    def __init__(self, exams: ExamRepository, students: StudentRepository):
        self._exams = exams
        self._students = students

    def _build(self, student_id: str, exam_type: ExamType, subject: str, marks) -> ExamResult:
        return ExamResult(
            result_id=exam_result_id(student_id, exam_type, subject),
            student_id=student_id,
            subject=subject,
            marks_obtained=_require_marks(marks),
            exam_type=exam_type,
        )

    def record_marks(self, student_id: str, exam_type: ExamType | str, subject: str, marks) -> ExamResult:
        """Save one score; saving the same combination again overwrites it."""

        exam_type = require_choice(ExamType, exam_type, "Exam type")
        subject = _require_subject(subject)
        if not self._students.get_by_id(student_id):
            raise NotFoundError(f"Student {student_id} not found")

        result = self._build(student_id, exam_type, subject, marks)
        self._exams.save(result)
        return result

    def record_many(self, exam_type: ExamType | str, subject: str, marks_by_student: Mapping[str, float]) -> list[ExamResult]:
        """Validate every score first, then save them all (all or nothing)."""

        exam_type = require_choice(ExamType, exam_type, "Exam type")
        subject = _require_subject(subject)
        known = {s.student_id for s in self._students.list_all()}

        results = []
        for student_id, marks in marks_by_student.items():
            if student_id not in known:
                raise NotFoundError(f"Student {student_id} not found")
            results.append(self._build(student_id, exam_type, subject, marks))

        for r in results:
            self._exams.save(r)
        return results

    def results_for(self, exam_type: ExamType | str, subject: str) -> dict[str, float]:
        exam_type = require_choice(ExamType, exam_type, "Exam type")
        return {
            r.student_id: r.marks_obtained
            for r in self._exams.list_all()
            if r.exam_type is exam_type and r.subject == subject
        }

    def results_for_student(self, student_id: str) -> list[ExamResult]:
        return [r for r in self._exams.list_all() if r.student_id == student_id]

    def pass_percentage(self) -> int:
        results = self._exams.list_all()
        if not results:
            return 0
        passed = sum(1 for r in results if r.marks_obtained >= PASS_MARKS)
        # Half-up, not banker's rounding.
        return int(passed * 100 / len(results) + 0.5)
