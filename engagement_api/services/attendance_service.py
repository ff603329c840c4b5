# /engagement_api/services/attendance_service.py

"""
This service module owns attendance records and the denormalized
`Student.attendanceRate` derived from them.

Every create, update and delete (single or bulk) finishes by recomputing
the affected student's rate over their full attendance history. That
recompute is best-effort: if it fails, the failure is logged and the
attendance write that triggered it still succeeds.
"""

import logging
import uuid
from datetime import datetime, time
from typing import Dict, List, Optional

from ..models import attendance_model
from .database_service import DatabaseService
from .database_helpers.filters import AttendanceFilter, DateRange
from .analytics_helpers.aggregation import compute_attendance_rate, tally_attendance
from .analytics_helpers.timestamps import as_naive_utc
from .exceptions import ResourceConflictError, ResourceNotFoundError
from .side_effects import run_best_effort

logger = logging.getLogger(__name__)


# --- Denormalized Rate Maintenance ---

def refresh_student_attendance_rate(student_id: str, db: DatabaseService) -> Optional[float]:
    """
    Recomputes and persists one student's attendance rate from all of their
    records. A student with no records left is reset to 0. Returns the new
    rate, or None if the update failed.
    """
    def recompute() -> float:
        records = db.get_attendance(AttendanceFilter(student_id=student_id))
        rate = compute_attendance_rate(records)
        db.update_student(student_id, {"attendanceRate": rate})
        return rate

    return run_best_effort(
        recompute,
        f"attendance rate for student {student_id}",
        on_failure=db.rollback,
    )


# --- CRUD Operations ---

def create_attendance(attendance_data: attendance_model.AttendanceCreate, db: DatabaseService):
    """
    Records one attendance mark and refreshes the student's rate.

    Raises:
        ResourceNotFoundError: If the student does not exist.
        ResourceConflictError: If the student already has a mark for that date.
    """
    if not db.get_student_by_id(attendance_data.student_id):
        raise ResourceNotFoundError(f"Student with ID {attendance_data.student_id} not found")

    date = as_naive_utc(attendance_data.date)
    if db.find_attendance_for_day(attendance_data.student_id, date):
        raise ResourceConflictError("Attendance for this student and date already exists")

    record = {
        "id": f"att_{uuid.uuid4().hex[:12]}",
        "student_id": attendance_data.student_id,
        "date": date,
        "status": attendance_data.status.value,
        "notes": attendance_data.notes,
    }
    attendance = db.add_attendance(record)

    refresh_student_attendance_rate(attendance_data.student_id, db)

    logger.info("Attendance created: %s", attendance.id)
    return attendance


def bulk_create_attendance(bulk_data: attendance_model.BulkAttendanceCreate, db: DatabaseService) -> Dict[str, int]:
    """
    Records a register for one day. Entries for unknown students, students
    already marked that day, and repeats within the payload are skipped.
    Returns the number of records actually written.
    """
    date = as_naive_utc(bulk_data.date)
    new_records: List[Dict] = []
    seen = set()
    known_students = []

    for entry in bulk_data.records:
        if entry.student_id in seen:
            continue
        seen.add(entry.student_id)
        if not db.get_student_by_id(entry.student_id):
            logger.warning("Skipping attendance for unknown student %s", entry.student_id)
            continue
        known_students.append(entry.student_id)
        if db.find_attendance_for_day(entry.student_id, date):
            continue
        new_records.append({
            "id": f"att_{uuid.uuid4().hex[:12]}",
            "student_id": entry.student_id,
            "date": date,
            "status": entry.status.value,
            "notes": entry.notes,
        })

    count = db.add_attendance_many(new_records) if new_records else 0

    for student_id in known_students:
        refresh_student_attendance_rate(student_id, db)

    logger.info("Bulk attendance created: %s records", count)
    return {"count": count}


def get_attendance_by_student(
    student_id: str,
    db: DatabaseService,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    status: Optional[attendance_model.AttendanceStatus] = None,
) -> List:
    """A student's attendance, newest first, optionally narrowed by date and status."""
    date_range = None
    if start_date or end_date:
        date_range = DateRange(
            start=as_naive_utc(start_date) if start_date else None,
            end=as_naive_utc(end_date) if end_date else None,
        )
    criteria = AttendanceFilter(
        student_id=student_id,
        date_range=date_range,
        status=status.value if status else None,
    )
    return db.get_attendance(criteria)


def get_attendance_by_date(
    date: datetime,
    db: DatabaseService,
    status: Optional[attendance_model.AttendanceStatus] = None,
) -> List:
    """Every mark recorded on the calendar day of `date`, ordered by student name."""
    day = as_naive_utc(date).date()
    criteria = AttendanceFilter(
        date_range=DateRange(start=datetime.combine(day, time.min), end=datetime.combine(day, time.max)),
        status=status.value if status else None,
    )
    return db.get_attendance_with_students(criteria)


def update_attendance(attendance_id: str, attendance_update: attendance_model.AttendanceUpdate, db: DatabaseService):
    """
    Applies a partial update and refreshes the student's rate. Returns None
    when the record does not exist.

    Raises:
        ValueError: If nothing was supplied.
        ResourceConflictError: If the new date collides with another mark.
    """
    update_data = attendance_update.model_dump(exclude_unset=True)
    # Notes may be cleared with null; date and status may not.
    for key in ("date", "status"):
        if key in update_data and update_data[key] is None:
            del update_data[key]
    if not update_data:
        raise ValueError("No update data provided.")

    existing = db.get_attendance_by_id(attendance_id)
    if not existing:
        return None

    if "status" in update_data:
        update_data["status"] = attendance_update.status.value
    if "date" in update_data:
        update_data["date"] = as_naive_utc(update_data["date"])
        clash = db.find_attendance_for_day(existing.student_id, update_data["date"])
        if clash and clash.id != attendance_id:
            raise ResourceConflictError("Attendance for this student and date already exists")

    attendance = db.update_attendance(attendance_id, update_data)

    refresh_student_attendance_rate(attendance.student_id, db)

    logger.info("Attendance updated: %s", attendance_id)
    return attendance


def delete_attendance(attendance_id: str, db: DatabaseService) -> bool:
    """Deletes a record and refreshes the owning student's rate."""
    existing = db.get_attendance_by_id(attendance_id)
    if not existing:
        return False
    student_id = existing.student_id

    db.delete_attendance(attendance_id)
    refresh_student_attendance_rate(student_id, db)

    logger.info("Attendance deleted: %s", attendance_id)
    return True


# --- Statistics ---

def get_attendance_stats(student_id: str, db: DatabaseService) -> Dict[str, float]:
    """Per-status tallies and the attendance rate over a student's full history."""
    records = db.get_attendance(AttendanceFilter(student_id=student_id))
    return tally_attendance(records)
