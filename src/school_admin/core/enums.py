from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Session role. Only the configured administrator can log in."""

    ADMIN = "admin"


class Collection(str, Enum):
    """Entity types used as record store keys."""

    STUDENTS = "students"
    TEACHERS = "teachers"
    TEACHER_ATTENDANCE = "teacher_attendance"
    FEES = "fees"
    ATTENDANCE = "attendance"
    EXAMS = "exams"


class FeeStatus(str, Enum):
    """Derived payment state of one semester."""

    PENDING = "PENDING"
    PARTIAL = "PARTIAL"
    PAID = "PAID"


class PaymentMode(str, Enum):
    CASH = "CASH"
    UPI = "UPI"
    CHEQUE = "CHEQUE"
    ONLINE = "ONLINE"


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"
    EXCUSED = "Excused"


class TeacherAttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"


class ExamType(str, Enum):
    MID_TERM = "Mid-Term"
    FINAL = "Final"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"
