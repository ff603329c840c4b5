# /engagement_api/services/database_helpers/attendance_repository_sql.py

from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from ...db.models.record_models import AttendanceRecord
from ...db.models.student_models import Student
from .filters import AttendanceFilter


class AttendanceRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def _filtered(self, criteria: AttendanceFilter):
        query = self.db.query(AttendanceRecord)
        if criteria.student_id is not None:
            query = query.filter(AttendanceRecord.student_id == criteria.student_id)
        if criteria.status is not None:
            query = query.filter(AttendanceRecord.status == criteria.status)
        if criteria.date_range is not None:
            query = criteria.date_range.apply(query, AttendanceRecord.date)
        return query

    def get_attendance(self, criteria: AttendanceFilter) -> List[AttendanceRecord]:
        """Returns matching records, newest first."""
        return self._filtered(criteria).order_by(AttendanceRecord.date.desc()).all()

    def get_attendance_with_students(self, criteria: AttendanceFilter) -> List[AttendanceRecord]:
        """Returns matching records ordered by the owning student's name."""
        return (
            self._filtered(criteria)
            .join(Student, AttendanceRecord.student_id == Student.id)
            .order_by(Student.name.asc())
            .all()
        )

    def get_attendance_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        return self.db.query(AttendanceRecord).filter(AttendanceRecord.id == attendance_id).first()

    def find_attendance_for_day(self, student_id: str, date: datetime) -> Optional[AttendanceRecord]:
        """Exact (student, date) match, the same key as the table's unique constraint."""
        return (
            self.db.query(AttendanceRecord)
            .filter(AttendanceRecord.student_id == student_id, AttendanceRecord.date == date)
            .first()
        )

    def add_attendance(self, record: Dict) -> AttendanceRecord:
        new_record = AttendanceRecord(**record)
        self.db.add(new_record)
        self.db.commit()
        self.db.refresh(new_record)
        return new_record

    def add_attendance_many(self, records: List[Dict]) -> int:
        """Inserts all records in a single commit and returns how many were written."""
        self.db.add_all([AttendanceRecord(**record) for record in records])
        self.db.commit()
        return len(records)

    def update_attendance(self, attendance_id: str, data: Dict) -> Optional[AttendanceRecord]:
        db_record = self.get_attendance_by_id(attendance_id)
        if db_record:
            for key, value in data.items():
                setattr(db_record, key, value)
            self.db.commit()
            self.db.refresh(db_record)
        return db_record

    def delete_attendance(self, attendance_id: str) -> bool:
        db_record = self.get_attendance_by_id(attendance_id)
        if db_record:
            self.db.delete(db_record)
            self.db.commit()
            return True
        return False
