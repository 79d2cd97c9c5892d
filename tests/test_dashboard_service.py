from datetime import date

from school_admin.container import build_container
from school_admin.storage.memory_store import InMemoryRecordStore

ON = date(2024, 6, 3)


def _register(c, name, gender):
    return c.student_service.register(
        full_name=name,
        gender=gender,
        date_of_birth=date(2012, 1, 1),
        contact_number="9876543210",
        address="12 MG Road",
        class_name="6",
        section="A",
        admission_date=date(2020, 6, 1),
        on=ON,
    )


def test_empty_school_has_zero_stats():
    c = build_container(store=InMemoryRecordStore())

    stats = c.dashboard_service.stats(on=ON).to_dict()

    assert stats == {
        "totalStudents": 0,
        "totalTeachers": 0,
        "totalRevenue": 0,
        "attendanceToday": 0,
        "passPercentage": 0,
        "genderStats": {"male": 0, "female": 0},
    }


def test_headline_numbers():
    c = build_container(store=InMemoryRecordStore())
    a = _register(c, "Asha Rao", "Female")
    b = _register(c, "Bala Iyer", "Male")
    _register(c, "Kiran Shah", "Other")
    c.teacher_service.save_teacher(full_name="Meera Nair", subject="Science", salary=40000)
    c.fee_service.collect_payment(student_id=a.student_id, semester=1, amount=11000, payment_date=ON)
    c.fee_service.collect_payment(student_id=b.student_id, semester=1, amount=5000, payment_date=ON)
    c.attendance_service.mark(a.student_id, ON, "Present")
    c.attendance_service.mark(b.student_id, ON, "Late")
    c.attendance_service.mark(b.student_id, date(2024, 6, 2), "Present")
    c.exam_service.record_many("Final", "Science", {a.student_id: 80, b.student_id: 30})

    stats = c.dashboard_service.stats(on=ON)

    assert stats.total_students == 3
    assert stats.total_teachers == 1
    # the partial payment is not counted
    assert stats.total_revenue == 11000
    assert stats.attendance_today == 1
    assert stats.pass_percentage == 50
    assert (stats.male_students, stats.female_students) == (1, 1)
