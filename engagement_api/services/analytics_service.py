# /engagement_api/services/analytics_service.py

"""
This service module builds the dashboard analytics: the summary snapshot
with its period-over-period trends, and the engagement time series.

Two different kinds of number come out of `get_dashboard_summary`:

* The `average*` fields are snapshots. Attendance and engagement are means
  over every student's stored `attendanceRate` / `engagementScore`.
* The `*Trend` fields compare two equal, back-to-back windows of raw rows:
  attendance marks, "engagement" analytics points and performance GPAs.
  Each metric keeps its own window query and null handling.
"""

import logging
import uuid
from datetime import datetime
from typing import Dict, List, Optional

from ..models import analytics_model
from ..models.alert_model import AlertStatus
from ..models.dashboard_model import DashboardSummary
from .database_service import DatabaseService
from .database_helpers.filters import AlertFilter, AnalyticsFilter, AttendanceFilter, DateRange, PerformanceFilter
from .analytics_helpers.aggregation import compute_attendance_rate, mean_gpa, mean_value
from .analytics_helpers.timestamps import as_naive_utc, to_iso_string, utcnow
from .analytics_helpers.trends import calculate_trend, reporting_periods, round_half_up
from .exceptions import ResourceNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_SUMMARY_DAYS = 30
ENGAGEMENT_METRIC = "engagement"


# --- Per-Period Trend Inputs ---

def _attendance_for_period(db: DatabaseService, period: DateRange) -> float:
    return compute_attendance_rate(db.get_attendance(AttendanceFilter(date_range=period)))


def _engagement_for_period(db: DatabaseService, period: DateRange) -> float:
    return mean_value(db.get_analytics_points(AnalyticsFilter(metric=ENGAGEMENT_METRIC, date_range=period)))


def _performance_for_period(db: DatabaseService, period: DateRange) -> float:
    return mean_gpa(db.get_performance(PerformanceFilter(date_range=period)))


# --- Core Public Functions ---

def get_dashboard_summary(db: DatabaseService, days: Optional[int] = None, now: Optional[datetime] = None) -> DashboardSummary:
    """
    Calculates the dashboard summary statistics as of `now`.

    Args:
        db: An instance of the DatabaseService, provided by dependency injection.
        days: Length of the reporting window. Missing or 0 means 30.
        now: The end of the reporting window. Defaults to the current UTC time.

    Returns:
        A DashboardSummary Pydantic object. Empty tables give zeros and
        "stable" trends, never an error.
    """
    days = days or DEFAULT_SUMMARY_DAYS
    now = as_naive_utc(now) if now else utcnow()
    current_period, previous_period = reporting_periods(now, days)

    try:
        total_students = db.count_students()
        active_students = db.count_active_students(current_period.start, current_period.end)

        students = db.get_all_students()
        average_attendance = (
            sum(s.attendanceRate or 0 for s in students) / len(students) if students else 0
        )
        average_engagement = (
            sum(s.engagementScore or 0 for s in students) / len(students) if students else 0
        )
        average_performance = mean_gpa(db.get_performance(PerformanceFilter(date_range=current_period)))

        pending_alerts = db.count_alerts(AlertFilter(status=AlertStatus.ACTIVE.value, is_read=False))

        attendance_trend = calculate_trend(
            _attendance_for_period(db, current_period), _attendance_for_period(db, previous_period)
        )
        engagement_trend = calculate_trend(
            _engagement_for_period(db, current_period), _engagement_for_period(db, previous_period)
        )
        performance_trend = calculate_trend(
            _performance_for_period(db, current_period), _performance_for_period(db, previous_period)
        )

        return DashboardSummary(
            totalStudents=total_students,
            activeStudents=active_students,
            averageAttendance=round_half_up(average_attendance),
            averageEngagement=round_half_up(average_engagement),
            averagePerformance=round_half_up(average_performance),
            pendingAlerts=pending_alerts,
            attendanceTrend=attendance_trend,
            engagementTrend=engagement_trend,
            performanceTrend=performance_trend,
        )
    except Exception:
        logger.exception("Error calculating dashboard summary")
        # Re-raise so the router layer answers with a 500.
        raise


def get_engagement_time_series(
    db: DatabaseService,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    student_id: Optional[str] = None,
) -> List[Dict]:
    """
    Projects stored "engagement" points into `{date, value}` pairs, oldest
    first. Nothing is aggregated: without `student_id` every student's
    points are interleaved, one output row per stored row.
    """
    date_range = None
    if start_date or end_date:
        date_range = DateRange(
            start=as_naive_utc(start_date) if start_date else None,
            end=as_naive_utc(end_date) if end_date else None,
        )
    points = db.get_analytics_points(
        AnalyticsFilter(metric=ENGAGEMENT_METRIC, student_id=student_id, date_range=date_range)
    )
    return [{"date": to_iso_string(p.timestamp), "value": p.value} for p in points]


def record_metric(point_data: analytics_model.AnalyticsPointCreate, db: DatabaseService):
    """
    Appends one metric observation for a student.

    Raises:
        ResourceNotFoundError: If the student does not exist.
    """
    if not db.get_student_by_id(point_data.student_id):
        raise ResourceNotFoundError(f"Student with ID {point_data.student_id} not found")

    record = {
        "id": f"anl_{uuid.uuid4().hex[:12]}",
        "student_id": point_data.student_id,
        "metric": point_data.metric,
        "value": point_data.value,
        "timestamp": as_naive_utc(point_data.timestamp) if point_data.timestamp else utcnow(),
    }
    return db.add_analytics_point(record)
