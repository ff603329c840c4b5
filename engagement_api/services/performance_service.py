# /engagement_api/services/performance_service.py

"""
This service module manages graded performance records and the GPA
aggregates built from them.

A record's `letterGrade` and `gpa` are always derived from its current
`score / maxScore`; they are computed here on create, and recomputed in the
same commit whenever an update touches either score field.
"""

import logging
import uuid
from datetime import datetime
from typing import Dict, List, Optional

from ..models import performance_model
from .database_service import DatabaseService
from .database_helpers.filters import DateRange, PerformanceFilter
from .analytics_helpers.aggregation import group_subject_gpas, mean_gpa
from .analytics_helpers.timestamps import as_naive_utc
from .exceptions import ResourceNotFoundError
from .grading import calculate_grade, percentage_of

logger = logging.getLogger(__name__)


def _date_range(start_date: Optional[datetime], end_date: Optional[datetime]) -> Optional[DateRange]:
    if not start_date and not end_date:
        return None
    return DateRange(
        start=as_naive_utc(start_date) if start_date else None,
        end=as_naive_utc(end_date) if end_date else None,
    )


def create_performance(performance_data: performance_model.PerformanceCreate, db: DatabaseService):
    """
    Stores a graded piece of work with its derived letter grade and GPA.

    Raises:
        ResourceNotFoundError: If the student does not exist.
        ValueError: If `maxScore` is zero.
    """
    if not db.get_student_by_id(performance_data.student_id):
        raise ResourceNotFoundError(f"Student with ID {performance_data.student_id} not found")

    grade = calculate_grade(percentage_of(performance_data.score, performance_data.maxScore))

    record = performance_data.model_dump()
    record.update(grade)
    record["id"] = f"perf_{uuid.uuid4().hex[:12]}"
    record["type"] = performance_data.type.value
    record["date"] = as_naive_utc(performance_data.date)

    performance = db.add_performance(record)
    logger.info("Performance record created: %s", performance.id)
    return performance


def get_performance(performance_id: str, db: DatabaseService):
    return db.get_performance_by_id(performance_id)


def get_performance_by_student(
    student_id: str,
    db: DatabaseService,
    subject: Optional[str] = None,
    type: Optional[performance_model.PerformanceType] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> List:
    criteria = PerformanceFilter(
        student_id=student_id,
        subject=subject,
        type=type.value if type else None,
        date_range=_date_range(start_date, end_date),
    )
    return db.get_performance(criteria)


def update_performance(performance_id: str, performance_update: performance_model.PerformanceUpdate, db: DatabaseService):
    """
    Applies a partial update. When `score` or `maxScore` is part of it, the
    letter grade and GPA are recomputed from the effective pair (new value
    where given, stored value otherwise) and written in the same commit.
    Returns None when the record does not exist.

    Raises:
        ValueError: If nothing was supplied, or the effective `maxScore` is zero.
    """
    update_data = {key: value for key, value in performance_update.model_dump(exclude_unset=True).items() if value is not None}
    if "notes" in performance_update.model_fields_set:
        update_data["notes"] = performance_update.notes
    if not update_data:
        raise ValueError("No update data provided.")

    existing = db.get_performance_by_id(performance_id)
    if not existing:
        return None

    if "type" in update_data:
        update_data["type"] = performance_update.type.value
    if "date" in update_data:
        update_data["date"] = as_naive_utc(update_data["date"])

    if "score" in update_data or "maxScore" in update_data:
        score = update_data.get("score", existing.score)
        max_score = update_data.get("maxScore", existing.maxScore)
        update_data.update(calculate_grade(percentage_of(score, max_score)))

    performance = db.update_performance(performance_id, update_data)
    logger.info("Performance updated: %s", performance_id)
    return performance


def delete_performance(performance_id: str, db: DatabaseService) -> bool:
    was_deleted = db.delete_performance(performance_id)
    if was_deleted:
        logger.info("Performance deleted: %s", performance_id)
    return was_deleted


def get_student_gpa(
    student_id: str,
    db: DatabaseService,
    subject: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> Dict:
    """
    Calculates a student's overall GPA and a per-subject breakdown.

    Args:
        student_id: The student whose records are aggregated.
        db: An instance of the DatabaseService, provided by dependency injection.
        subject: Only aggregate this subject.
        start_date: Inclusive lower bound on the record date.
        end_date: Inclusive upper bound on the record date.

    Returns:
        `{"overallGPA": float, "subjectGPAs": [{"subject", "gpa", "count"}]}`.
        A record with no GPA counts as 0. No matching records gives
        `{"overallGPA": 0, "subjectGPAs": []}`.
    """
    criteria = PerformanceFilter(
        student_id=student_id,
        subject=subject,
        date_range=_date_range(start_date, end_date),
    )
    records = db.get_performance(criteria)

    if not records:
        return {"overallGPA": 0, "subjectGPAs": []}

    return {
        "overallGPA": mean_gpa(records),
        "subjectGPAs": group_subject_gpas(records),
    }
