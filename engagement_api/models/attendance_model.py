# /engagement_api/models/attendance_model.py

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

from .fields import student_ref


class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    EXCUSED = "EXCUSED"


# Statuses that count towards a student's attendance rate.
PRESENT_STATUSES = frozenset({AttendanceStatus.PRESENT.value, AttendanceStatus.LATE.value})


class AttendanceCreate(BaseModel):
    student_id: str = student_ref(description="The ID of the student this mark belongs to.")
    date: datetime
    status: AttendanceStatus
    notes: Optional[str] = None


class BulkAttendanceEntry(BaseModel):
    student_id: str = student_ref()
    status: AttendanceStatus
    notes: Optional[str] = None


class BulkAttendanceCreate(BaseModel):
    """A whole class register for a single day."""
    date: datetime
    records: List[BulkAttendanceEntry] = Field(default_factory=list)


class BulkAttendanceResult(BaseModel):
    count: int = Field(..., description="How many new records were written. Duplicates are skipped.")


class AttendanceUpdate(BaseModel):
    date: Optional[datetime] = None
    status: Optional[AttendanceStatus] = None
    notes: Optional[str] = None


class AttendanceRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str = student_ref()
    date: datetime
    status: AttendanceStatus
    notes: Optional[str] = None


class AttendanceStats(BaseModel):
    totalDays: int
    present: int
    absent: int
    late: int
    excused: int
    rate: float
