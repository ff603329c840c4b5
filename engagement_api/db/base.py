# /engagement_api/db/base.py

# This file acts as a central registry for all our SQLAlchemy models.
# By importing them all here, we ensure that the Base class knows about them
# before `create_all` or an Alembic auto-generation scan runs.

from .base_class import Base

from .models.student_models import Student
from .models.record_models import AttendanceRecord, PerformanceRecord
from .models.alert_models import Alert
from .models.analytics_models import AnalyticsPoint


def init_db(bind) -> None:
    """Creates any missing tables on the given engine."""
    Base.metadata.create_all(bind=bind)
