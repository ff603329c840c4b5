# /engagement_api/services/database_helpers/performance_repository_sql.py

from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from ...db.models.record_models import PerformanceRecord
from .filters import PerformanceFilter


class PerformanceRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_performance(self, criteria: PerformanceFilter) -> List[PerformanceRecord]:
        """Returns matching records, newest first."""
        query = self.db.query(PerformanceRecord)
        if criteria.student_id is not None:
            query = query.filter(PerformanceRecord.student_id == criteria.student_id)
        if criteria.subject is not None:
            query = query.filter(PerformanceRecord.subject == criteria.subject)
        if criteria.type is not None:
            query = query.filter(PerformanceRecord.type == criteria.type)
        if criteria.date_range is not None:
            query = criteria.date_range.apply(query, PerformanceRecord.date)
        return query.order_by(PerformanceRecord.date.desc()).all()

    def get_performance_by_id(self, performance_id: str) -> Optional[PerformanceRecord]:
        return self.db.query(PerformanceRecord).filter(PerformanceRecord.id == performance_id).first()

    def add_performance(self, record: Dict) -> PerformanceRecord:
        new_record = PerformanceRecord(**record)
        self.db.add(new_record)
        self.db.commit()
        self.db.refresh(new_record)
        return new_record

    def update_performance(self, performance_id: str, data: Dict) -> Optional[PerformanceRecord]:
        """Applies every field in `data` and commits them together."""
        db_record = self.get_performance_by_id(performance_id)
        if db_record:
            for key, value in data.items():
                setattr(db_record, key, value)
            self.db.commit()
            self.db.refresh(db_record)
        return db_record

    def delete_performance(self, performance_id: str) -> bool:
        db_record = self.get_performance_by_id(performance_id)
        if db_record:
            self.db.delete(db_record)
            self.db.commit()
            return True
        return False
