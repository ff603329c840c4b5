# /engagement_api/services/database_service.py

from datetime import datetime
from typing import Dict, Generator, List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

# --- Core Database Setup ---
from ..db.database import get_db

# --- Repository Imports ---
from .database_helpers.student_repository_sql import StudentRepositorySQL
from .database_helpers.attendance_repository_sql import AttendanceRepositorySQL
from .database_helpers.performance_repository_sql import PerformanceRepositorySQL
from .database_helpers.alert_repository_sql import AlertRepositorySQL
from .database_helpers.analytics_repository_sql import AnalyticsRepositorySQL
from .database_helpers.filters import AlertFilter, AnalyticsFilter, AttendanceFilter, PerformanceFilter


class DatabaseService:
    def __init__(self, db_session: Session):
        """
        Initializes the DatabaseService with one SQLAlchemy session.
        Every repository shares that session, so a request sees one
        consistent unit of work.
        """
        if db_session is None:
            raise ValueError("A database session is required.")
        self.session = db_session
        self.student_repo = StudentRepositorySQL(db_session)
        self.attendance_repo = AttendanceRepositorySQL(db_session)
        self.performance_repo = PerformanceRepositorySQL(db_session)
        self.alert_repo = AlertRepositorySQL(db_session)
        self.analytics_repo = AnalyticsRepositorySQL(db_session)

    def rollback(self) -> None:
        """Discards whatever the session has pending after a failed write."""
        self.session.rollback()

    # --- STUDENT METHODS (DELEGATED) ---
    def get_student_by_id(self, student_id: str): return self.student_repo.get_student_by_id(student_id)
    def find_conflicting_student(self, email: Optional[str], external_id: Optional[str], exclude_id: Optional[str] = None):
        return self.student_repo.find_conflicting_student(email, external_id, exclude_id=exclude_id)
    def list_students(self, offset: int, limit: int, sort_by: str, descending: bool) -> List:
        return self.student_repo.list_students(offset, limit, sort_by=sort_by, descending=descending)
    def get_all_students(self) -> List: return self.student_repo.get_all_students()
    def count_students(self) -> int: return self.student_repo.count_students()
    def count_active_students(self, start: datetime, end: datetime) -> int: return self.student_repo.count_active_students(start, end)
    def add_student(self, student_record: Dict): return self.student_repo.add_student(student_record)
    def update_student(self, student_id: str, student_update_data: Dict): return self.student_repo.update_student(student_id, student_update_data)
    def delete_student(self, student_id: str) -> bool: return self.student_repo.delete_student(student_id)

    # --- ATTENDANCE METHODS (DELEGATED) ---
    def get_attendance(self, criteria: AttendanceFilter) -> List: return self.attendance_repo.get_attendance(criteria)
    def get_attendance_with_students(self, criteria: AttendanceFilter) -> List: return self.attendance_repo.get_attendance_with_students(criteria)
    def get_attendance_by_id(self, attendance_id: str): return self.attendance_repo.get_attendance_by_id(attendance_id)
    def find_attendance_for_day(self, student_id: str, date: datetime): return self.attendance_repo.find_attendance_for_day(student_id, date)
    def add_attendance(self, attendance_record: Dict): return self.attendance_repo.add_attendance(attendance_record)
    def add_attendance_many(self, attendance_records: List[Dict]) -> int: return self.attendance_repo.add_attendance_many(attendance_records)
    def update_attendance(self, attendance_id: str, data: Dict): return self.attendance_repo.update_attendance(attendance_id, data)
    def delete_attendance(self, attendance_id: str) -> bool: return self.attendance_repo.delete_attendance(attendance_id)

    # --- PERFORMANCE METHODS (DELEGATED) ---
    def get_performance(self, criteria: PerformanceFilter) -> List: return self.performance_repo.get_performance(criteria)
    def get_performance_by_id(self, performance_id: str): return self.performance_repo.get_performance_by_id(performance_id)
    def add_performance(self, performance_record: Dict): return self.performance_repo.add_performance(performance_record)
    def update_performance(self, performance_id: str, data: Dict): return self.performance_repo.update_performance(performance_id, data)
    def delete_performance(self, performance_id: str) -> bool: return self.performance_repo.delete_performance(performance_id)

    # --- ALERT METHODS (DELEGATED) ---
    def get_alerts(self, criteria: AlertFilter, offset: int, limit: int) -> List: return self.alert_repo.get_alerts(criteria, offset, limit)
    def count_alerts(self, criteria: AlertFilter) -> int: return self.alert_repo.count_alerts(criteria)
    def get_alert_by_id(self, alert_id: str): return self.alert_repo.get_alert_by_id(alert_id)
    def add_alert(self, alert_record: Dict): return self.alert_repo.add_alert(alert_record)
    def update_alert(self, alert_id: str, data: Dict): return self.alert_repo.update_alert(alert_id, data)
    def mark_all_alerts_read(self) -> int: return self.alert_repo.mark_all_read()
    def delete_alert(self, alert_id: str) -> bool: return self.alert_repo.delete_alert(alert_id)

    # --- ANALYTICS METHODS (DELEGATED) ---
    def get_analytics_points(self, criteria: AnalyticsFilter) -> List: return self.analytics_repo.get_points(criteria)
    def add_analytics_point(self, point_record: Dict): return self.analytics_repo.add_point(point_record)


def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """
    FastAPI dependency that provides a DatabaseService instance bound to the
    request's session.
    """
    yield DatabaseService(db_session=db)
