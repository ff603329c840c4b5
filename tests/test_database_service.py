# /tests/test_database_service.py

from datetime import datetime

import pytest

from engagement_api.services.database_service import DatabaseService
from engagement_api.services.database_helpers.filters import AlertFilter, AttendanceFilter, DateRange


def test_service_requires_a_session():
    with pytest.raises(ValueError):
        DatabaseService(db_session=None)


def test_add_and_get_student(db_service, make_student):
    student = make_student(name="Ada Lovelace")
    retrieved = db_service.get_student_by_id(student.id)
    assert retrieved is not None
    assert retrieved.name == "Ada Lovelace"
    assert retrieved.createdAt is not None


def test_get_non_existent_student(db_service):
    """Tests that getting a non-existent student returns None from an empty database."""
    assert db_service.get_student_by_id("stu_no_exist") is None


def test_find_conflicting_student(db_service, make_student):
    student = make_student(email="taken@school.test", studentId="EXT-TAKEN")

    assert db_service.find_conflicting_student("taken@school.test", None).id == student.id
    assert db_service.find_conflicting_student(None, "EXT-TAKEN").id == student.id
    assert db_service.find_conflicting_student("free@school.test", "EXT-FREE") is None
    assert db_service.find_conflicting_student(None, None) is None
    # A student never conflicts with itself.
    assert db_service.find_conflicting_student("taken@school.test", None, exclude_id=student.id) is None


def test_list_students_sorting_and_paging(db_service, make_student):
    make_student(name="Charlie")
    make_student(name="Alice")
    make_student(name="Bob")

    names = [s.name for s in db_service.list_students(0, 10, sort_by="name", descending=False)]
    assert names == ["Alice", "Bob", "Charlie"]

    second_page = db_service.list_students(2, 2, sort_by="name", descending=True)
    assert [s.name for s in second_page] == ["Alice"]

    # Unknown sort keys fall back to creation time instead of failing.
    assert len(db_service.list_students(0, 10, sort_by="password", descending=True)) == 3


def test_count_active_students_uses_inclusive_window(db_service, make_student, make_attendance, make_performance):
    s1, s2, s3 = make_student(), make_student(), make_student()
    start, end = datetime(2025, 3, 1), datetime(2025, 3, 31)
    make_attendance(s1.id, start)
    make_performance(s2.id, end)
    make_attendance(s3.id, datetime(2025, 2, 28))

    assert db_service.count_active_students(start, end) == 2
    assert db_service.count_active_students(datetime(2025, 4, 1), datetime(2025, 4, 30)) == 0


def test_attendance_filters_and_day_lookup(db_service, make_student, make_attendance):
    student = make_student()
    make_attendance(student.id, datetime(2025, 3, 3, 8, 0), "PRESENT")
    make_attendance(student.id, datetime(2025, 3, 4, 8, 0), "ABSENT")

    in_range = db_service.get_attendance(
        AttendanceFilter(student_id=student.id, date_range=DateRange(start=datetime(2025, 3, 4), end=None))
    )
    assert [r.status for r in in_range] == ["ABSENT"]

    assert db_service.find_attendance_for_day(student.id, datetime(2025, 3, 3, 8, 0)) is not None
    assert db_service.find_attendance_for_day(student.id, datetime(2025, 3, 3, 9, 0)) is None


def test_deleting_student_cascades(db_service, make_student, make_attendance, make_performance, make_point, make_alert):
    student = make_student()
    make_attendance(student.id, datetime(2025, 3, 3))
    make_performance(student.id, datetime(2025, 3, 3))
    make_point(student.id, datetime(2025, 3, 3), 50)
    make_alert(student.id)

    assert db_service.delete_student(student.id) is True
    assert db_service.get_attendance(AttendanceFilter(student_id=student.id)) == []
    assert db_service.count_alerts(AlertFilter(student_id=student.id)) == 0
    assert db_service.delete_student(student.id) is False


def test_alert_metadata_round_trips_through_json_column(db_service, make_student, make_alert):
    student = make_student()
    alert = make_alert(student.id, details={"previousRate": 92.5, "currentRate": 71.0})
    stored = db_service.get_alert_by_id(alert.id)
    assert stored.details == {"previousRate": 92.5, "currentRate": 71.0}
