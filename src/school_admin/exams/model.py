from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.constants import TOTAL_MARKS
from ..core.enums import ExamType


def exam_result_id(student_id: str, exam_type: ExamType, subject: str) -> str:
    return f"{student_id}-{exam_type.value}-{subject}"


@dataclass(frozen=True)
class ExamResult:
    """Domain entity: marks of one student in one subject of one exam."""

    result_id: str
    student_id: str
    subject: str
    marks_obtained: float
    exam_type: ExamType
    total_marks: int = TOTAL_MARKS

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.result_id,
            "studentId": self.student_id,
            "subject": self.subject,
            "marksObtained": self.marks_obtained,
            "totalMarks": self.total_marks,
            "examType": self.exam_type.value,
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "ExamResult":
        return cls(
            result_id=str(data["id"]),
            student_id=str(data["studentId"]),
            subject=str(data["subject"]),
            marks_obtained=data["marksObtained"],
            exam_type=ExamType(data["examType"]),
            total_marks=int(data.get("totalMarks", TOTAL_MARKS)),
        )
