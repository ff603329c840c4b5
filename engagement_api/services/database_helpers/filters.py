# /engagement_api/services/database_helpers/filters.py

"""
Small, typed filter objects passed from the services to the repositories.

Each optional field narrows the query only when it is set, so callers never
build loose `where` dictionaries by hand.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class DateRange:
    """
    Bounds on a datetime column. Each bound is independently optional and the
    start is always inclusive. The end is inclusive unless `include_end` is
    False, which gives the half-open window `[start, end)`.
    """
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    include_end: bool = True

    def apply(self, query, column):
        if self.start is not None:
            query = query.filter(column >= self.start)
        if self.end is not None:
            query = query.filter(column <= self.end if self.include_end else column < self.end)
        return query


@dataclass(frozen=True)
class AttendanceFilter:
    student_id: Optional[str] = None
    date_range: Optional[DateRange] = None
    status: Optional[str] = None


@dataclass(frozen=True)
class PerformanceFilter:
    student_id: Optional[str] = None
    subject: Optional[str] = None
    type: Optional[str] = None
    date_range: Optional[DateRange] = None


@dataclass(frozen=True)
class AnalyticsFilter:
    metric: Optional[str] = None
    student_id: Optional[str] = None
    date_range: Optional[DateRange] = None


@dataclass(frozen=True)
class AlertFilter:
    student_id: Optional[str] = None
    type: Optional[str] = None
    severity: Optional[str] = None
    status: Optional[str] = None
    is_read: Optional[bool] = None
