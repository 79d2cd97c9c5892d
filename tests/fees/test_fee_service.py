from __future__ import annotations

from datetime import date

import pytest

from school_admin.container import build_container
from school_admin.core.enums import Collection, FeeStatus
from school_admin.core.exceptions import NotFoundError, ValidationError
from school_admin.storage.memory_store import InMemoryRecordStore

ON = date(2024, 6, 1)


def _container():
    store = InMemoryRecordStore()
    return store, build_container(store=store, semester_fee=11000, academic_year="2023-2024")


def _register(c, name: str, **overrides):
    fields = dict(
        full_name=name,
        gender="Male",
        date_of_birth=date(2012, 3, 4),
        contact_number="9876543210",
        address="12 MG Road, Pune",
        class_name="6",
        section="A",
        admission_date=date(2020, 6, 1),
        on=ON,
    )
    fields.update(overrides)
    return c.student_service.register(**fields)


def test_missing_record_is_zero_state_not_error():
    store, c = _container()
    s = _register(c, "Asha Rao")

    record = c.fee_service.get_fee_record(s.student_id)

    assert record.transactions == ()
    assert record.record_id == f"{s.student_id}-2023-2024"
    assert store.get_all(Collection.FEES) == []


def test_collect_payment_persists_whole_record_with_flags():
    store, c = _container()
    s = _register(c, "Asha Rao")

    c.fee_service.collect_payment(student_id=s.student_id, semester=1, amount=5000, payment_date=date(2024, 1, 2), transaction_id="TXN-1")
    record, txn = c.fee_service.collect_payment(
        student_id=s.student_id, semester=1, amount=6000, payment_date=date(2024, 2, 2), mode="UPI", transaction_id="TXN-2"
    )

    assert txn.transaction_id == "TXN-2"
    stored = store.get_all(Collection.FEES)
    assert len(stored) == 1
    assert stored[0]["semester1Paid"] is True
    assert stored[0]["semester2Paid"] is False
    assert stored[0]["lastPaymentDate"] == "2024-02-02"
    assert [t["id"] for t in stored[0]["transactions"]] == ["TXN-1", "TXN-2"]
    assert c.fee_service.semester_status(s.student_id, 1).status is FeeStatus.PAID


def test_paid_semester_rejects_further_payment_at_call_site():
    store, c = _container()
    s = _register(c, "Asha Rao")
    c.fee_service.collect_payment(student_id=s.student_id, semester=2, amount=11000, payment_date=ON)

    with pytest.raises(ValidationError, match="already fully paid"):
        c.fee_service.collect_payment(student_id=s.student_id, semester=2, amount=1, payment_date=ON)

    assert len(store.get_all(Collection.FEES)[0]["transactions"]) == 1


def test_rejected_payment_persists_nothing():
    store, c = _container()
    s = _register(c, "Asha Rao")

    with pytest.raises(ValidationError):
        c.fee_service.collect_payment(student_id=s.student_id, semester=1, amount=12000, payment_date=ON)

    assert store.get_all(Collection.FEES) == []


def test_unknown_student_cannot_pay():
    _, c = _container()

    with pytest.raises(NotFoundError):
        c.fee_service.collect_payment(student_id="nobody", semester=1, amount=100)


def test_transaction_ids_are_unique_across_records():
    _, c = _container()
    a = _register(c, "Asha Rao")
    b = _register(c, "Bala Iyer")
    c.fee_service.collect_payment(student_id=a.student_id, semester=1, amount=100, transaction_id="RCPT-1")

    with pytest.raises(ValidationError, match="already exists"):
        c.fee_service.collect_payment(student_id=b.student_id, semester=1, amount=100, transaction_id="RCPT-1")


def test_stale_cached_flags_are_rewritten_on_save():
    store, c = _container()
    s = _register(c, "Asha Rao")
    store.save_one(
        Collection.FEES,
        {
            "id": f"{s.student_id}-2023-2024",
            "studentId": s.student_id,
            "academicYear": "2023-2024",
            "semester1Paid": True,
            "semester2Paid": True,
            "transactions": [],
        },
    )

    c.fee_service.collect_payment(student_id=s.student_id, semester=1, amount=100, payment_date=ON)

    stored = store.get_all(Collection.FEES)[0]
    assert stored["semester1Paid"] is False
    assert stored["semester2Paid"] is False


def test_summary_and_status_filters():
    _, c = _container()
    paid = _register(c, "Asha Rao")
    partial = _register(c, "Bala Iyer")
    pending = _register(c, "Chitra Das")
    c.fee_service.collect_payment(student_id=paid.student_id, semester=1, amount=11000)
    c.fee_service.collect_payment(student_id=paid.student_id, semester=2, amount=11000)
    c.fee_service.collect_payment(student_id=partial.student_id, semester=1, amount=4000)

    summary = c.fee_service.summary()
    assert summary.total_expected_revenue == 66000
    assert summary.total_collected == 26000
    assert summary.pending_revenue == 40000
    assert summary.defaulters_count == 2

    def ids(status):
        return [r.student.student_id for r in c.fee_service.list_student_fees(status_filter=status)]

    assert ids(FeeStatus.PAID) == [paid.student_id]
    assert ids(FeeStatus.PARTIAL) == [partial.student_id]
    # semester 2 of the partial student is still pending
    assert ids(FeeStatus.PENDING) == [partial.student_id, pending.student_id]
    assert len(ids(None)) == 3


def test_search_by_name_or_roll_number():
    _, c = _container()
    a = _register(c, "Asha Rao")
    _register(c, "Bala Iyer")

    assert [r.student.student_id for r in c.fee_service.list_student_fees(search="asha")] == [a.student_id]
    assert [r.student.student_id for r in c.fee_service.list_student_fees(search=str(a.roll_no))] == [a.student_id]


def test_receipt_lookup():
    _, c = _container()
    s = _register(c, "Asha Rao")
    c.fee_service.collect_payment(student_id=s.student_id, semester=2, amount=2500, payment_date=date(2024, 8, 9), mode="CHEQUE", transaction_id="CHQ-9")

    receipt = c.fee_service.get_receipt("CHQ-9")

    assert receipt.student_name == "Asha Rao"
    assert receipt.roll_no == s.roll_no
    assert receipt.to_dict()["mode"] == "CHEQUE"
    assert receipt.semester == 2
    with pytest.raises(NotFoundError):
        c.fee_service.get_receipt("missing")


def test_dashboard_revenue_counts_fully_paid_semesters_only():
    _, c = _container()
    s = _register(c, "Asha Rao")
    c.fee_service.collect_payment(student_id=s.student_id, semester=1, amount=11000)
    c.fee_service.collect_payment(student_id=s.student_id, semester=2, amount=500)

    assert c.fee_service.collected_for_paid_semesters() == 11000
