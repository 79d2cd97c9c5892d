from __future__ import annotations

import io
from dataclasses import dataclass
from datetime import date
from typing import Any

import qrcode

from ..common.datetime_utils import to_iso
from ..core.enums import PaymentMode
from ..students.model import Student
from .model import FeeRecord, Transaction


@dataclass(frozen=True)
class Receipt:
    """Read-model for a printed fee receipt."""

    receipt_no: str
    student_id: str
    student_name: str
    roll_no: int
    class_name: str
    section: str
    academic_year: str
    semester: int
    amount: float
    mode: PaymentMode
    payment_date: date

    def to_dict(self) -> dict[str, Any]:
        return {
            "receiptNo": self.receipt_no,
            "studentId": self.student_id,
            "studentName": self.student_name,
            "rollNo": self.roll_no,
            "className": self.class_name,
            "section": self.section,
            "academicYear": self.academic_year,
            "semester": self.semester,
            "amount": self.amount,
            "mode": self.mode.value,
            "date": to_iso(self.payment_date),
        }

    def qr_payload(self) -> str:
        # Compact, pipe-separated so the code stays at a low QR version.
        return "|".join(
            [
                "FEE-RECEIPT",
                self.receipt_no,
                self.student_id,
                self.academic_year,
                f"S{self.semester}",
                f"{self.amount}",
                self.mode.value,
                to_iso(self.payment_date) or "",
            ]
        )


def build_receipt(student: Student, record: FeeRecord, txn: Transaction) -> Receipt:
    return Receipt(
        receipt_no=txn.transaction_id,
        student_id=student.student_id,
        student_name=student.full_name,
        roll_no=student.roll_no,
        class_name=student.class_name,
        section=student.section,
        academic_year=record.academic_year,
        semester=txn.semester,
        amount=txn.amount,
        mode=txn.mode,
        payment_date=txn.payment_date,
    )


def render_receipt_qr(receipt: Receipt) -> bytes:
    """PNG image of a QR code carrying the receipt payload."""

    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=8,
        border=2,
    )
    qr.add_data(receipt.qr_payload())
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
