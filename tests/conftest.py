# /tests/conftest.py

import itertools
from datetime import datetime

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from engagement_api.db.base import Base, init_db
from engagement_api.db.database import build_engine
from engagement_api.services.database_service import DatabaseService

# A fixed "now" so every window in the analytics tests is deterministic.
FIXED_NOW = datetime(2025, 3, 31, 12, 0, 0)


@pytest.fixture
def engine():
    """A fresh in-memory SQLite database for each test function."""
    test_engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def db_service(db_session):
    """A real DatabaseService backed by the in-memory database."""
    return DatabaseService(db_session=db_session)


@pytest.fixture
def make_student(db_service):
    """Factory that inserts a student directly through the repository layer."""
    counter = itertools.count(1)

    def _make(**overrides):
        n = next(counter)
        record = {
            "id": f"stu_{n:04d}",
            "name": f"Student {n}",
            "email": f"student{n}@school.test",
            "studentId": f"EXT-{n:04d}",
            "enrollmentDate": datetime(2024, 9, 1),
            "engagementScore": 0.0,
            "attendanceRate": 0.0,
        }
        record.update(overrides)
        return db_service.add_student(record)

    return _make


@pytest.fixture
def make_attendance(db_service):
    counter = itertools.count(1)

    def _make(student_id, date, status="PRESENT", **overrides):
        record = {"id": f"att_{next(counter):04d}", "student_id": student_id, "date": date, "status": status}
        record.update(overrides)
        return db_service.add_attendance(record)

    return _make


@pytest.fixture
def make_performance(db_service):
    counter = itertools.count(1)

    def _make(student_id, date, subject="Math", gpa=3.0, **overrides):
        record = {
            "id": f"perf_{next(counter):04d}",
            "student_id": student_id,
            "subject": subject,
            "score": 85,
            "maxScore": 100,
            "letterGrade": "B",
            "gpa": gpa,
            "date": date,
            "type": "quiz",
        }
        record.update(overrides)
        return db_service.add_performance(record)

    return _make


@pytest.fixture
def make_point(db_service):
    counter = itertools.count(1)

    def _make(student_id, timestamp, value, metric="engagement"):
        return db_service.add_analytics_point({
            "id": f"anl_{next(counter):04d}",
            "student_id": student_id,
            "metric": metric,
            "value": value,
            "timestamp": timestamp,
        })

    return _make


@pytest.fixture
def make_alert(db_service):
    counter = itertools.count(1)

    def _make(student_id, status="ACTIVE", is_read=False, **overrides):
        record = {
            "id": f"alr_{next(counter):04d}",
            "student_id": student_id,
            "type": "ATTENDANCE_LOW",
            "severity": "HIGH",
            "message": "Attendance dropped below 80% this month.",
            "status": status,
            "isRead": is_read,
        }
        record.update(overrides)
        return db_service.add_alert(record)

    return _make
