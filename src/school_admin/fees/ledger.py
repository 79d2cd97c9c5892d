"""Fee ledger: payment status derivation and the payment mutation.

Everything here is pure. A FeeRecord goes in, a new FeeRecord (or a
ValidationError) comes out; persisting the result is the caller's job.

Per semester the state only moves forward::

    PENDING -> PARTIAL -> PAID

PAID is terminal. There is no refund or reversal: transactions are
append-only.
"""

from __future__ import annotations

import math
from dataclasses import replace
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import timestamp_token
from ..common.validators import require_choice
from ..core.constants import SEMESTER_FEE, SEMESTERS
from ..core.enums import FeeStatus, PaymentMode
from ..core.exceptions import ValidationError
from .model import FeeRecord, FeeSummary, SemesterStatus, Transaction


def _require_semester(semester) -> int:
    if isinstance(semester, bool) or semester not in SEMESTERS:
        raise ValidationError("Semester must be 1 or 2")
    return int(semester)


def _require_amount(amount) -> float:
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise ValidationError("Please enter a valid amount.")
    if not math.isfinite(amount) or amount <= 0:
        raise ValidationError("Please enter a valid amount.")
    return amount


def sum_amounts(amounts: Iterable[float]) -> float:
    """Exactly rounded total, so the result never depends on payment order."""
    total = math.fsum(amounts)
    return int(total) if total.is_integer() else total


def status_for(paid_amount: float, semester_fee: float = SEMESTER_FEE) -> FeeStatus:
    if paid_amount >= semester_fee:
        return FeeStatus.PAID
    if paid_amount > 0:
        return FeeStatus.PARTIAL
    return FeeStatus.PENDING


def derive_semester_status(
    record: FeeRecord,
    semester: int,
    *,
    semester_fee: float = SEMESTER_FEE,
) -> SemesterStatus:
    """Sum the semester's transactions and classify the result.

    Order of transactions does not matter. ``due_amount`` is not clamped.
    """

    semester = _require_semester(semester)
    paid = sum_amounts(t.amount for t in record.transactions if t.semester == semester)
    return SemesterStatus(
        semester=semester,
        paid_amount=paid,
        due_amount=semester_fee - paid,
        status=status_for(paid, semester_fee),
    )


def with_cached_flags(record: FeeRecord, *, semester_fee: float = SEMESTER_FEE) -> FeeRecord:
    """Rewrite the legacy boolean flags from the derived status."""

    return replace(
        record,
        semester1_paid=derive_semester_status(record, 1, semester_fee=semester_fee).status is FeeStatus.PAID,
        semester2_paid=derive_semester_status(record, 2, semester_fee=semester_fee).status is FeeStatus.PAID,
    )


def record_payment(
    record: FeeRecord,
    semester: int,
    amount: float,
    payment_date: date,
    mode: PaymentMode | str = PaymentMode.CASH,
    transaction_id: Optional[str] = None,
    *,
    semester_fee: float = SEMESTER_FEE,
) -> FeeRecord:
    """Append one payment and return the updated record.

    Raises ValidationError, leaving ``record`` untouched, when the amount is not
    positive, the semester is already PAID or the amount exceeds the due.
    """

    semester = _require_semester(semester)
    amount = _require_amount(amount)
    mode = require_choice(PaymentMode, mode, "Payment mode")

    current = derive_semester_status(record, semester, semester_fee=semester_fee)
    if current.status is FeeStatus.PAID:
        raise ValidationError(f"Semester {semester} fees are already fully paid.")
    if amount > current.due_amount:
        raise ValidationError(f"Amount exceeds the due balance of {current.due_amount}")

    transaction_id = (transaction_id or "").strip() or f"TXN-{timestamp_token()}"
    if any(t.transaction_id == transaction_id for t in record.transactions):
        raise ValidationError(f"Transaction {transaction_id} already exists")

    txn = Transaction(
        transaction_id=transaction_id,
        payment_date=payment_date,
        amount=amount,
        mode=mode,
        semester=semester,
    )
    updated = replace(
        record,
        transactions=record.transactions + (txn,),
        last_payment_date=payment_date,
    )
    return with_cached_flags(updated, semester_fee=semester_fee)


def total_paid(record: FeeRecord) -> float:
    return sum_amounts(t.amount for t in record.transactions)


def is_defaulter(record: FeeRecord, *, semester_fee: float = SEMESTER_FEE) -> bool:
    return any(
        derive_semester_status(record, s, semester_fee=semester_fee).status is not FeeStatus.PAID
        for s in SEMESTERS
    )


def summarize(
    student_ids: Sequence[str],
    records: Iterable[FeeRecord],
    academic_year: str,
    *,
    semester_fee: float = SEMESTER_FEE,
) -> FeeSummary:
    """Population-wide fee statistics, recomputed in full on every call.

    ``total_collected`` counts every transaction of every record, whatever its
    academic year; defaulters are counted for ``academic_year`` only.
    """

    records = list(records)
    by_key = {(r.student_id, r.academic_year): r for r in records}

    expected = len(student_ids) * semester_fee * len(SEMESTERS)
    collected = sum_amounts(t.amount for r in records for t in r.transactions)
    defaulters = sum(
        1
        for sid in student_ids
        if is_defaulter(by_key.get((sid, academic_year)) or FeeRecord.empty(sid, academic_year), semester_fee=semester_fee)
    )

    return FeeSummary(
        total_students=len(student_ids),
        total_expected_revenue=expected,
        total_collected=collected,
        pending_revenue=expected - collected,
        defaulters_count=defaulters,
    )
