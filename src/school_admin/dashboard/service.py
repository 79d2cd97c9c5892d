from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..attendance.service import AttendanceService
from ..common.datetime_utils import today
from ..core.enums import Gender
from ..exams.service import ExamService
from ..fees.service import FeeService
from ..students.repository import StudentRepository
from ..teachers.service import TeacherService


@dataclass(frozen=True)
class DashboardStats:
    total_students: int
    total_teachers: int
    total_revenue: float
    attendance_today: int
    pass_percentage: int
    male_students: int
    female_students: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalStudents": self.total_students,
            "totalTeachers": self.total_teachers,
            "totalRevenue": self.total_revenue,
            "attendanceToday": self.attendance_today,
            "passPercentage": self.pass_percentage,
            "genderStats": {"male": self.male_students, "female": self.female_students},
        }


class DashboardService:
    def __init__(
        self,
        students: StudentRepository,
        teachers: TeacherService,
        fees: FeeService,
        attendance: AttendanceService,
        exams: ExamService,
    ):
        self._students = students
        self._teachers = teachers
        self._fees = fees
        self._attendance = attendance
        self._exams = exams

    def stats(self, *, on: Optional[date] = None) -> DashboardStats:
        students = self._students.list_all()
        return DashboardStats(
            total_students=len(students),
            total_teachers=self._teachers.count(),
            total_revenue=self._fees.collected_for_paid_semesters(),
            attendance_today=self._attendance.present_count(on or today()),
            pass_percentage=self._exams.pass_percentage(),
            male_students=sum(1 for s in students if s.gender is Gender.MALE),
            female_students=sum(1 for s in students if s.gender is Gender.FEMALE),
        )
