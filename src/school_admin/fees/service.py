from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..common.datetime_utils import today
from ..core.constants import DEFAULT_ACADEMIC_YEAR, SEMESTER_FEE, SEMESTERS
from ..core.enums import FeeStatus, PaymentMode
from ..core.exceptions import NotFoundError, ValidationError
from ..students.model import Student
from ..students.repository import StudentRepository
from . import ledger
from .model import FeeRecord, FeeSummary, SemesterStatus, Transaction
from .receipt import Receipt, build_receipt
from .repository import FeeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StudentFeeRow:
    """Read-model: one line of the fees table."""

    student: Student
    record: FeeRecord
    semester1: SemesterStatus
    semester2: SemesterStatus

    @property
    def total_paid(self) -> float:
        return ledger.total_paid(self.record)

    def to_dict(self) -> dict[str, Any]:
        return {
            "studentId": self.student.student_id,
            "rollNo": self.student.roll_no,
            "fullName": self.student.full_name,
            "className": self.student.class_name,
            "section": self.student.section,
            "academicYear": self.record.academic_year,
            "semester1": self.semester1.to_dict(),
            "semester2": self.semester2.to_dict(),
            "totalPaid": self.total_paid,
            "lastPaymentDate": self.record.to_record().get("lastPaymentDate"),
            "transactions": [t.to_record() for t in self.record.transactions],
        }


def _matches_filter(row: StudentFeeRow, status_filter: Optional[FeeStatus]) -> bool:
    statuses = (row.semester1.status, row.semester2.status)
    if status_filter is None:
        return True
    if status_filter is FeeStatus.PAID:
        return all(s is FeeStatus.PAID for s in statuses)
    if status_filter is FeeStatus.PARTIAL:
        return FeeStatus.PARTIAL in statuses
    if status_filter is FeeStatus.PENDING:
        return FeeStatus.PENDING in statuses
    raise ValueError(f"Unhandled fee status filter: {status_filter!r}")


class FeeService:
    """Use case: fee collection for one configured academic year.

    This is the single write path for fee records: every save goes through
    ``_save`` which re-derives the cached PAID flags first.
    """

    def __init__(
        self,
        fees: FeeRepository,
        students: StudentRepository,
        *,
        semester_fee: float = SEMESTER_FEE,
        academic_year: str = DEFAULT_ACADEMIC_YEAR,
    ):
        self._fees = fees
        self._students = students
        self._semester_fee = semester_fee
        self._academic_year = academic_year

    @property
    def semester_fee(self) -> float:
        return self._semester_fee

    @property
    def academic_year(self) -> str:
        return self._academic_year

    def _year(self, academic_year: Optional[str]) -> str:
        return (academic_year or "").strip() or self._academic_year

    def _require_student(self, student_id: str) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError(f"Student {student_id} not found")
        return student

    def _save(self, record: FeeRecord) -> FeeRecord:
        record = ledger.with_cached_flags(record, semester_fee=self._semester_fee)
        self._fees.save(record)
        return record

    def _row(self, student: Student, record: FeeRecord) -> StudentFeeRow:
        return StudentFeeRow(
            student=student,
            record=record,
            semester1=ledger.derive_semester_status(record, 1, semester_fee=self._semester_fee),
            semester2=ledger.derive_semester_status(record, 2, semester_fee=self._semester_fee),
        )

    def get_fee_record(self, student_id: str, academic_year: Optional[str] = None) -> FeeRecord:
        """Stored record, or a zero-state one when the student has not paid yet."""

        year = self._year(academic_year)
        return self._fees.get(student_id, year) or FeeRecord.empty(student_id, year)

    def semester_status(self, student_id: str, semester: int, academic_year: Optional[str] = None) -> SemesterStatus:
        record = self.get_fee_record(student_id, academic_year)
        return ledger.derive_semester_status(record, semester, semester_fee=self._semester_fee)

    def student_fees(self, student_id: str, academic_year: Optional[str] = None) -> StudentFeeRow:
        student = self._require_student(student_id)
        return self._row(student, self.get_fee_record(student_id, academic_year))

    def collect_payment(
        self,
        *,
        student_id: str,
        semester: int,
        amount: float,
        payment_date: Optional[date] = None,
        mode: PaymentMode | str = PaymentMode.CASH,
        transaction_id: Optional[str] = None,
        academic_year: Optional[str] = None,
    ) -> tuple[FeeRecord, Transaction]:
        self._require_student(student_id)
        record = self.get_fee_record(student_id, academic_year)

        current = ledger.derive_semester_status(record, semester, semester_fee=self._semester_fee)
        if current.status is FeeStatus.PAID:
            raise ValidationError(f"Semester {semester} fees are already fully paid.")

        if transaction_id and self.find_transaction(transaction_id.strip()):
            raise ValidationError(f"Transaction {transaction_id.strip()} already exists")

        updated = ledger.record_payment(
            record,
            semester,
            amount,
            payment_date or today(),
            mode,
            transaction_id,
            semester_fee=self._semester_fee,
        )
        saved = self._save(updated)
        txn = saved.transactions[-1]
        logger.info(
            "Collected %s (%s) from %s for semester %s of %s",
            txn.amount,
            txn.mode.value,
            student_id,
            semester,
            saved.academic_year,
        )
        return saved, txn

    def list_student_fees(
        self,
        *,
        academic_year: Optional[str] = None,
        search: Optional[str] = None,
        status_filter: Optional[FeeStatus] = None,
    ) -> list[StudentFeeRow]:
        year = self._year(academic_year)
        records = {r.student_id: r for r in self._fees.list_all() if r.academic_year == year}
        term = (search or "").strip().lower()

        rows = []
        for student in self._students.list_all():
            if term and term not in student.full_name.lower() and term not in str(student.roll_no):
                continue
            row = self._row(student, records.get(student.student_id) or FeeRecord.empty(student.student_id, year))
            if _matches_filter(row, status_filter):
                rows.append(row)
        return rows

    def summary(self, academic_year: Optional[str] = None) -> FeeSummary:
        student_ids = [s.student_id for s in self._students.list_all()]
        return ledger.summarize(
            student_ids,
            self._fees.list_all(),
            self._year(academic_year),
            semester_fee=self._semester_fee,
        )

    def collected_for_paid_semesters(self) -> float:
        """Revenue counted only for fully paid semesters (dashboard figure)."""

        total = 0
        for record in self._fees.list_all():
            for semester in SEMESTERS:
                if ledger.derive_semester_status(record, semester, semester_fee=self._semester_fee).status is FeeStatus.PAID:
                    total += self._semester_fee
        return total

    def find_transaction(self, transaction_id: str) -> Optional[tuple[FeeRecord, Transaction]]:
        for record in self._fees.list_all():
            for txn in record.transactions:
                if txn.transaction_id == transaction_id:
                    return record, txn
        return None

    def get_receipt(self, transaction_id: str) -> Receipt:
        found = self.find_transaction(transaction_id)
        if not found:
            raise NotFoundError(f"Receipt {transaction_id} not found")
        record, txn = found
        student = self._require_student(record.student_id)
        return build_receipt(student, record, txn)