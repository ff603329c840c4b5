# /engagement_api/services/database_helpers/analytics_repository_sql.py

from typing import Dict, List

from sqlalchemy.orm import Session

from ...db.models.analytics_models import AnalyticsPoint
from .filters import AnalyticsFilter


class AnalyticsRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_points(self, criteria: AnalyticsFilter) -> List[AnalyticsPoint]:
        """Returns matching metric points, oldest first."""
        query = self.db.query(AnalyticsPoint)
        if criteria.metric is not None:
            query = query.filter(AnalyticsPoint.metric == criteria.metric)
        if criteria.student_id is not None:
            query = query.filter(AnalyticsPoint.student_id == criteria.student_id)
        if criteria.date_range is not None:
            query = criteria.date_range.apply(query, AnalyticsPoint.timestamp)
        return query.order_by(AnalyticsPoint.timestamp.asc(), AnalyticsPoint.id).all()

    def add_point(self, record: Dict) -> AnalyticsPoint:
        new_point = AnalyticsPoint(**record)
        self.db.add(new_point)
        self.db.commit()
        self.db.refresh(new_point)
        return new_point
