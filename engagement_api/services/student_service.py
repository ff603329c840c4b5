# /engagement_api/services/student_service.py

"""
This service module is the business logic layer for student records:
creation with duplicate detection, paginated listing, partial updates and
the manual engagement-score override.
"""

import logging
import math
import uuid
from typing import Dict

from ..models import student_model
from .database_service import DatabaseService
from .analytics_helpers.timestamps import as_naive_utc, utcnow
from .exceptions import ResourceConflictError

logger = logging.getLogger(__name__)

NULLABLE_FIELDS = frozenset({"grade", "section"})


def create_student(student_data: student_model.StudentCreate, db: DatabaseService):
    """
    Creates a student after checking that neither the email nor the external
    studentId is already taken.

    Raises:
        ResourceConflictError: If another student already uses the email or studentId.
    """
    existing = db.find_conflicting_student(student_data.email, student_data.studentId)
    if existing:
        if existing.email == student_data.email:
            raise ResourceConflictError("Student with this email already exists")
        raise ResourceConflictError("Student with this ID already exists")

    record = student_data.model_dump()
    record["id"] = f"stu_{uuid.uuid4().hex[:12]}"
    record["enrollmentDate"] = as_naive_utc(student_data.enrollmentDate) if student_data.enrollmentDate else utcnow()

    new_student = db.add_student(record)
    logger.info("Student created: %s", new_student.id)
    return new_student


def get_student(student_id: str, db: DatabaseService):
    return db.get_student_by_id(student_id)


def list_students(db: DatabaseService, page: int, limit: int, sort_by: str = "createdAt", sort_order: str = "desc") -> Dict:
    """Returns one page of students plus the pagination envelope."""
    offset = (page - 1) * limit
    students = db.list_students(offset, limit, sort_by=sort_by, descending=(sort_order != "asc"))
    total = db.count_students()
    return {
        "data": students,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "totalPages": math.ceil(total / limit) if limit else 0,
        },
    }


def update_student(student_id: str, student_update: student_model.StudentUpdate, db: DatabaseService):
    """
    Applies a partial update. Returns None when the student does not exist.

    Raises:
        ValueError: If nothing was supplied.
        ResourceConflictError: If the new email/studentId is
            already used by another student.
    """
    update_data = student_update.model_dump(exclude_unset=True)
    # Grade and section may be cleared with null; the other columns are NOT NULL.
    update_data = {
        key: value for key, value in update_data.items()
        if value is not None or key in NULLABLE_FIELDS
    }
    if not update_data:
        raise ValueError("No update data provided.")
    if not db.get_student_by_id(student_id):
        return None

    if update_data.get("email") or update_data.get("studentId"):
        conflict = db.find_conflicting_student(
            update_data.get("email"), update_data.get("studentId"), exclude_id=student_id
        )
        if conflict:
            raise ResourceConflictError("Email or Student ID already in use")

    if update_data.get("enrollmentDate") is not None:
        update_data["enrollmentDate"] = as_naive_utc(update_data["enrollmentDate"])

    updated = db.update_student(student_id, update_data)
    logger.info("Student updated: %s", student_id)
    return updated


def delete_student(student_id: str, db: DatabaseService) -> bool:
    was_deleted = db.delete_student(student_id)
    if was_deleted:
        logger.info("Student deleted: %s", student_id)
    return was_deleted


def update_engagement_score(student_id: str, score: float, db: DatabaseService):
    """
    Overrides a student's engagement score.

    Raises:
        ValueError: If the score is outside 0-100.
    """
    if score < 0 or score > 100:
        raise ValueError("Engagement score must be between 0 and 100")
    if not db.get_student_by_id(student_id):
        return None
    return db.update_student(student_id, {"engagementScore": score})
