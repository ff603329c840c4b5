# /engagement_api/services/database_helpers/alert_repository_sql.py

from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from ...db.models.alert_models import Alert
from .filters import AlertFilter


class AlertRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def _filtered(self, criteria: AlertFilter):
        query = self.db.query(Alert)
        if criteria.student_id is not None:
            query = query.filter(Alert.student_id == criteria.student_id)
        if criteria.type is not None:
            query = query.filter(Alert.type == criteria.type)
        if criteria.severity is not None:
            query = query.filter(Alert.severity == criteria.severity)
        if criteria.status is not None:
            query = query.filter(Alert.status == criteria.status)
        if criteria.is_read is not None:
            query = query.filter(Alert.isRead == criteria.is_read)
        return query

    def get_alerts(self, criteria: AlertFilter, offset: int, limit: int) -> List[Alert]:
        return (
            self._filtered(criteria)
            .order_by(Alert.createdAt.desc(), Alert.id)
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count_alerts(self, criteria: AlertFilter) -> int:
        return self._filtered(criteria).count()

    def get_alert_by_id(self, alert_id: str) -> Optional[Alert]:
        return self.db.query(Alert).filter(Alert.id == alert_id).first()

    def add_alert(self, record: Dict) -> Alert:
        new_alert = Alert(**record)
        self.db.add(new_alert)
        self.db.commit()
        self.db.refresh(new_alert)
        return new_alert

    def update_alert(self, alert_id: str, data: Dict) -> Optional[Alert]:
        db_alert = self.get_alert_by_id(alert_id)
        if db_alert:
            for key, value in data.items():
                setattr(db_alert, key, value)
            self.db.commit()
            self.db.refresh(db_alert)
        return db_alert

    def mark_all_read(self) -> int:
        count = (
            self.db.query(Alert)
            .filter(Alert.isRead.is_(False))
            .update({Alert.isRead: True}, synchronize_session=False)
        )
        self.db.commit()
        return count

    def delete_alert(self, alert_id: str) -> bool:
        db_alert = self.get_alert_by_id(alert_id)
        if db_alert:
            self.db.delete(db_alert)
            self.db.commit()
            return True
        return False
