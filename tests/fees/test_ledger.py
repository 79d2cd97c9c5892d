from __future__ import annotations

from datetime import date
from itertools import permutations

import pytest

from school_admin.core.enums import FeeStatus, PaymentMode
from school_admin.core.exceptions import ValidationError
from school_admin.fees.ledger import derive_semester_status, record_payment, status_for, summarize
from school_admin.fees.model import FeeRecord, Transaction

FEE = 11000


def _txn(tid: str, amount: float, semester: int = 1) -> Transaction:
    return Transaction(
        transaction_id=tid,
        payment_date=date(2024, 1, 10),
        amount=amount,
        mode=PaymentMode.CASH,
        semester=semester,
    )


def test_empty_record_is_pending():
    record = FeeRecord.empty("UV-2024-1001", "2023-2024")

    s = derive_semester_status(record, 1, semester_fee=FEE)

    assert (s.paid_amount, s.due_amount, s.status) == (0, 11000, FeeStatus.PENDING)
    assert record.record_id == "UV-2024-1001-2023-2024"


def test_partial_then_paid_then_rejected():
    record = FeeRecord.empty("S1", "2023-2024")

    record = record_payment(record, 1, 5000, date(2024, 1, 5), "CASH", "TXN-1", semester_fee=FEE)
    s = derive_semester_status(record, 1, semester_fee=FEE)
    assert (s.paid_amount, s.due_amount, s.status) == (5000, 6000, FeeStatus.PARTIAL)
    assert record.semester1_paid is False

    record = record_payment(record, 1, 6000, date(2024, 2, 5), PaymentMode.UPI, "TXN-2", semester_fee=FEE)
    s = derive_semester_status(record, 1, semester_fee=FEE)
    assert (s.paid_amount, s.due_amount, s.status) == (11000, 0, FeeStatus.PAID)
    assert record.semester1_paid is True
    assert record.semester2_paid is False
    assert record.last_payment_date == date(2024, 2, 5)

    with pytest.raises(ValidationError, match="already fully paid"):
        record_payment(record, 1, 1, date(2024, 3, 1), "CASH", semester_fee=FEE)


def test_overpayment_rejected_and_record_unchanged():
    record = record_payment(FeeRecord.empty("S1", "2023-2024"), 1, 5000, date(2024, 1, 5), "CASH", "TXN-1")
    before = record.transactions

    with pytest.raises(ValidationError, match="6000"):
        record_payment(record, 1, 7000, date(2024, 1, 6), "CASH", "TXN-2")

    assert record.transactions == before
    assert len(record.transactions) == 1


@pytest.mark.parametrize("amount", [0, -50, None, "100", True, float("nan"), float("inf"), float("-inf")])
def test_non_positive_non_numeric_or_non_finite_amount_rejected(amount):
    record = FeeRecord.empty("S1", "2023-2024")

    with pytest.raises(ValidationError):
        record_payment(record, 1, amount, date(2024, 1, 5), "CASH")

    assert record.transactions == ()


def test_invalid_semester_and_mode_rejected():
    record = FeeRecord.empty("S1", "2023-2024")

    with pytest.raises(ValidationError):
        record_payment(record, 3, 100, date(2024, 1, 5), "CASH")
    with pytest.raises(ValidationError):
        record_payment(record, 1, 100, date(2024, 1, 5), "BITCOIN")
    with pytest.raises(ValidationError):
        derive_semester_status(record, 0)


def test_cheque_is_a_stored_payment_mode():
    record = record_payment(FeeRecord.empty("S1", "2023-2024"), 2, 2000, date(2024, 7, 1), "CHEQUE", "CHQ-77")

    txn = record.transactions[-1]
    assert txn.mode is PaymentMode.CHEQUE
    assert txn.to_record()["type"] == "CHEQUE"
    assert FeeRecord.from_record(record.to_record()) == record


def test_generated_transaction_id_and_duplicate_id_rejected():
    record = record_payment(FeeRecord.empty("S1", "2023-2024"), 1, 100, date(2024, 1, 5), "CASH")
    assert record.transactions[0].transaction_id.startswith("TXN-")

    with pytest.raises(ValidationError, match="already exists"):
        record_payment(record, 2, 100, date(2024, 1, 5), "CASH", record.transactions[0].transaction_id)


def test_due_after_payment_never_negative():
    record = FeeRecord.empty("S1", "2023-2024")
    for i, amount in enumerate([1000, 2500, 7500]):
        due_before = derive_semester_status(record, 2).due_amount
        record = record_payment(record, 2, amount, date(2024, 8, i + 1), "ONLINE", f"T{i}")
        due_after = derive_semester_status(record, 2).due_amount
        assert due_after == due_before - amount
        assert due_after >= 0


def test_derivation_is_order_independent_and_idempotent():
    txns = [_txn("a", 3000), _txn("b", 4000), _txn("c", 4000), _txn("d", 999, semester=2)]
    expected = derive_semester_status(FeeRecord("r", "S1", "2023-2024", transactions=tuple(txns)), 1)

    for perm in permutations(txns):
        record = FeeRecord("r", "S1", "2023-2024", transactions=tuple(perm))
        assert derive_semester_status(record, 1) == expected
        assert derive_semester_status(record, 1) == derive_semester_status(record, 1)

    assert expected.status is FeeStatus.PAID
    assert expected.paid_amount == 11000


def test_fractional_amounts_sum_the_same_in_any_order():
    txns = [_txn("a", 0.1), _txn("b", 0.2), _txn("c", 0.3)]

    paid = {
        derive_semester_status(FeeRecord("r", "S1", "2023-2024", transactions=tuple(perm)), 1).paid_amount
        for perm in permutations(txns)
    }

    assert paid == {0.6}


def test_non_finite_payment_cannot_unlock_overpayment():
    record = FeeRecord.empty("S1", "2023-2024")
    with pytest.raises(ValidationError):
        record_payment(record, 1, float("nan"), date(2024, 1, 5), "CASH")

    with pytest.raises(ValidationError, match="11000"):
        record_payment(record, 1, 50000, date(2024, 1, 5), "CASH")


def test_status_classification_is_exhaustive():
    assert status_for(0, FEE) is FeeStatus.PENDING
    assert status_for(0.5, FEE) is FeeStatus.PARTIAL
    assert status_for(10999, FEE) is FeeStatus.PARTIAL
    assert status_for(11000, FEE) is FeeStatus.PAID
    assert status_for(12000, FEE) is FeeStatus.PAID


def test_legacy_record_without_transactions_loads_as_pending():
    record = FeeRecord.from_record(
        {
            "id": "S1-2023-2024",
            "studentId": "S1",
            "academicYear": "2023-2024",
            "semester1Paid": False,
            "semester2Paid": False,
        }
    )

    assert record.transactions == ()
    assert derive_semester_status(record, 1).status is FeeStatus.PENDING


def test_summarize_population():
    paid = FeeRecord("A-2023-2024", "A", "2023-2024", transactions=(_txn("1", 11000, 1), _txn("2", 11000, 2)))
    partial = FeeRecord("B-2023-2024", "B", "2023-2024", transactions=(_txn("3", 5000, 1),))
    other_year = FeeRecord("A-2022-2023", "A", "2022-2023", transactions=(_txn("4", 1000, 1),))

    summary = summarize(["A", "B", "C"], [paid, partial, other_year], "2023-2024", semester_fee=FEE)

    assert summary.total_students == 3
    assert summary.total_expected_revenue == 3 * FEE * 2
    assert summary.total_collected == 11000 + 11000 + 5000 + 1000
    assert summary.pending_revenue == 66000 - 28000
    # B is partial, C has no record at all
    assert summary.defaulters_count == 2
