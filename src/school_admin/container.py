from __future__ import annotations

from dataclasses import dataclass

from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.service import AuthService
from .core.constants import DEFAULT_ACADEMIC_YEAR, SEMESTER_FEE
from .dashboard.service import DashboardService
from .exams.repository import ExamRepository
from .exams.service import ExamService
from .fees.repository import FeeRepository
from .fees.service import FeeService
from .storage.connection import DBConfig, DatabaseConnection
from .storage.memory_store import InMemoryRecordStore
from .storage.mysql_store import MySQLRecordStore
from .storage.repository import RecordStore
from .students.repository import StudentRepository
from .students.service import StudentService
from .teachers.repository import TeacherAttendanceRepository, TeacherRepository
from .teachers.service import TeacherService


@dataclass(frozen=True)
class Container:
    store: RecordStore

    students_repo: StudentRepository
    teachers_repo: TeacherRepository
    teacher_attendance_repo: TeacherAttendanceRepository
    fees_repo: FeeRepository
    attendance_repo: AttendanceRepository
    exams_repo: ExamRepository

    auth_service: AuthService
    student_service: StudentService
    teacher_service: TeacherService
    fee_service: FeeService
    attendance_service: AttendanceService
    exam_service: ExamService
    dashboard_service: DashboardService


def build_store(*, backend: str, db_config: dict | None = None) -> RecordStore:
    backend = (backend or "mysql").lower()
    if backend == "memory":
        return InMemoryRecordStore()
    if backend == "mysql":
        if not db_config:
            raise ValueError("DB_CONFIG is required for the mysql storage backend")
        return MySQLRecordStore(DatabaseConnection.get_instance(DBConfig.from_settings(db_config)))
    raise ValueError(f"Unknown storage backend: {backend!r}")


def build_container(
    *,
    store: RecordStore,
    admin_username: str = "admin",
    admin_password: str = "1234",
    semester_fee: float = SEMESTER_FEE,
    academic_year: str = DEFAULT_ACADEMIC_YEAR,
) -> Container:
    students_repo = StudentRepository(store)
    teachers_repo = TeacherRepository(store)
    teacher_attendance_repo = TeacherAttendanceRepository(store)
    fees_repo = FeeRepository(store)
    attendance_repo = AttendanceRepository(store)
    exams_repo = ExamRepository(store)

    auth_service = AuthService.from_plain_password(admin_username, admin_password)
    student_service = StudentService(students_repo, fees_repo, attendance_repo, exams_repo)
    teacher_service = TeacherService(teachers_repo, teacher_attendance_repo)
    fee_service = FeeService(
        fees_repo,
        students_repo,
        semester_fee=semester_fee,
        academic_year=academic_year,
    )
    attendance_service = AttendanceService(attendance_repo, students_repo)
    exam_service = ExamService(exams_repo, students_repo)
    dashboard_service = DashboardService(
        students_repo,
        teacher_service,
        fee_service,
        attendance_service,
        exam_service,
    )

    return Container(
        store=store,
        students_repo=students_repo,
        teachers_repo=teachers_repo,
        teacher_attendance_repo=teacher_attendance_repo,
        fees_repo=fees_repo,
        attendance_repo=attendance_repo,
        exams_repo=exams_repo,
        auth_service=auth_service,
        student_service=student_service,
        teacher_service=teacher_service,
        fee_service=fee_service,
        attendance_service=attendance_service,
        exam_service=exam_service,
        dashboard_service=dashboard_service,
    )
