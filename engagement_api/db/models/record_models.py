# /engagement_api/db/models/record_models.py

"""
This module defines the SQLAlchemy ORM models for the two per-student
record streams: `AttendanceRecord` (one row per student per day) and
`PerformanceRecord` (one row per graded piece of work).
"""

from sqlalchemy import Column, String, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class AttendanceRecord(Base):
    """
    SQLAlchemy model for a single day's attendance mark.
    `status` holds one of PRESENT, ABSENT, LATE or EXCUSED.
    """
    __tablename__ = "attendance_records"
    __table_args__ = (UniqueConstraint("student_id", "date", name="uq_attendance_student_date"),)

    id = Column(String, primary_key=True, index=True)
    student_id = Column(String, ForeignKey("students.id"), nullable=False, index=True)
    date = Column(DateTime, nullable=False, index=True)
    status = Column(String, nullable=False, index=True)
    notes = Column(String, nullable=True)
    createdAt = Column(DateTime, nullable=False, server_default=func.now())

    student = relationship("Student", back_populates="attendance_records")


class PerformanceRecord(Base):
    """
    SQLAlchemy model for one graded quiz, test, assignment or exam.

    `letterGrade` and `gpa` are derived from `score / maxScore` by the
    performance service whenever either of those changes.
    """
    __tablename__ = "performance_records"

    id = Column(String, primary_key=True, index=True)
    student_id = Column(String, ForeignKey("students.id"), nullable=False, index=True)
    subject = Column(String, nullable=False, index=True)
    score = Column(Float, nullable=False)
    maxScore = Column(Float, nullable=False)
    letterGrade = Column(String, nullable=True)
    gpa = Column(Float, nullable=True)
    date = Column(DateTime, nullable=False, index=True)
    type = Column(String, nullable=False)
    notes = Column(String, nullable=True)
    createdAt = Column(DateTime, nullable=False, server_default=func.now())

    student = relationship("Student", back_populates="performance_records")
