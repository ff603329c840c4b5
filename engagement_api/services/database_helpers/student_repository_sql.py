# /engagement_api/services/database_helpers/student_repository_sql.py

"""
This module contains the raw SQLAlchemy queries for the Student table,
including the population-wide reads the dashboard summary relies on.
"""

from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ...db.models.student_models import Student
from ...db.models.record_models import AttendanceRecord, PerformanceRecord

# Columns a caller may sort the student listing by.
SORTABLE_COLUMNS = {
    "name": Student.name,
    "email": Student.email,
    "studentId": Student.studentId,
    "enrollmentDate": Student.enrollmentDate,
    "engagementScore": Student.engagementScore,
    "attendanceRate": Student.attendanceRate,
    "createdAt": Student.createdAt,
}


class StudentRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_student_by_id(self, student_id: str) -> Optional[Student]:
        return self.db.query(Student).filter(Student.id == student_id).first()

    def find_conflicting_student(
        self,
        email: Optional[str],
        external_id: Optional[str],
        exclude_id: Optional[str] = None,
    ) -> Optional[Student]:
        """
        Returns any student that already uses the given email or external
        studentId, optionally ignoring the student being updated.
        """
        conditions = []
        if email:
            conditions.append(Student.email == email)
        if external_id:
            conditions.append(Student.studentId == external_id)
        if not conditions:
            return None
        query = self.db.query(Student).filter(or_(*conditions))
        if exclude_id is not None:
            query = query.filter(Student.id != exclude_id)
        return query.first()

    def list_students(self, offset: int, limit: int, sort_by: str = "createdAt", descending: bool = True) -> List[Student]:
        column = SORTABLE_COLUMNS.get(sort_by, Student.createdAt)
        order = column.desc() if descending else column.asc()
        return self.db.query(Student).order_by(order, Student.id).offset(offset).limit(limit).all()

    def get_all_students(self) -> List[Student]:
        return self.db.query(Student).all()

    def count_students(self) -> int:
        return self.db.query(Student).count()

    def count_active_students(self, start: datetime, end: datetime) -> int:
        """
        Counts students with at least one attendance or performance record
        dated inside `[start, end]`.
        """
        has_attendance = Student.attendance_records.any(
            (AttendanceRecord.date >= start) & (AttendanceRecord.date <= end)
        )
        has_performance = Student.performance_records.any(
            (PerformanceRecord.date >= start) & (PerformanceRecord.date <= end)
        )
        return self.db.query(Student).filter(or_(has_attendance, has_performance)).count()

    def add_student(self, record: Dict) -> Student:
        new_student = Student(**record)
        self.db.add(new_student)
        self.db.commit()
        self.db.refresh(new_student)
        return new_student

    def update_student(self, student_id: str, data: Dict) -> Optional[Student]:
        db_student = self.get_student_by_id(student_id)
        if db_student:
            for key, value in data.items():
                setattr(db_student, key, value)
            self.db.commit()
            self.db.refresh(db_student)
        return db_student

    def delete_student(self, student_id: str) -> bool:
        db_student = self.get_student_by_id(student_id)
        if db_student:
            # The cascade on the model removes the student's records and alerts.
            self.db.delete(db_student)
            self.db.commit()
            return True
        return False
