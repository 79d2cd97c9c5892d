from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..common.datetime_utils import parse_iso_date, to_iso
from ..core.enums import FeeStatus, PaymentMode


def fee_record_id(student_id: str, academic_year: str) -> str:
    return f"{student_id}-{academic_year}"


@dataclass(frozen=True)
class Transaction:
    """One payment towards a semester. Never changed once created."""

    transaction_id: str
    payment_date: date
    amount: float
    mode: PaymentMode
    semester: int

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.transaction_id,
            "date": to_iso(self.payment_date),
            "amount": self.amount,
            "type": self.mode.value,
            "semester": self.semester,
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "Transaction":
        return cls(
            transaction_id=str(data["id"]),
            payment_date=parse_iso_date(data["date"]),
            amount=data["amount"],
            mode=PaymentMode(data["type"]),
            semester=int(data["semester"]),
        )


@dataclass(frozen=True)
class FeeRecord:
    """Fee ledger of one student for one academic year.

    ``semester1_paid``/``semester2_paid`` mirror the derived PAID state and are
    only rewritten by the ledger; ``transactions`` is the source of truth.
    """

    record_id: str
    student_id: str
    academic_year: str
    semester1_paid: bool = False
    semester2_paid: bool = False
    last_payment_date: Optional[date] = None
    transactions: tuple[Transaction, ...] = ()

    @classmethod
    def empty(cls, student_id: str, academic_year: str) -> "FeeRecord":
        return cls(
            record_id=fee_record_id(student_id, academic_year),
            student_id=student_id,
            academic_year=academic_year,
        )

    def to_record(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.record_id,
            "studentId": self.student_id,
            "academicYear": self.academic_year,
            "semester1Paid": self.semester1_paid,
            "semester2Paid": self.semester2_paid,
            "transactions": [t.to_record() for t in self.transactions],
        }
        if self.last_payment_date:
            data["lastPaymentDate"] = to_iso(self.last_payment_date)
        return data

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "FeeRecord":
        last = data.get("lastPaymentDate")
        return cls(
            record_id=str(data["id"]),
            student_id=str(data["studentId"]),
            academic_year=str(data["academicYear"]),
            semester1_paid=bool(data.get("semester1Paid", False)),
            semester2_paid=bool(data.get("semester2Paid", False)),
            last_payment_date=parse_iso_date(last) if last else None,
            transactions=tuple(Transaction.from_record(t) for t in data.get("transactions") or []),
        )


@dataclass(frozen=True)
class SemesterStatus:
    """Read-model: derived payment state of one semester."""

    semester: int
    paid_amount: float
    due_amount: float
    status: FeeStatus

    def to_dict(self) -> dict[str, Any]:
        return {
            "semester": self.semester,
            "paid": self.paid_amount,
            "due": self.due_amount,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class FeeSummary:
    total_students: int
    total_expected_revenue: float
    total_collected: float
    pending_revenue: float
    defaulters_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalStudents": self.total_students,
            "totalExpectedRevenue": self.total_expected_revenue,
            "totalCollected": self.total_collected,
            "pendingRevenue": self.pending_revenue,
            "defaultersCount": self.defaulters_count,
        }
