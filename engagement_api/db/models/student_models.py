# /engagement_api/db/models/student_models.py

"""
This module defines the SQLAlchemy ORM model for the `Student` entity, the
root of every engagement record in the system.
"""

from sqlalchemy import Column, String, Float, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class Student(Base):
    """
    SQLAlchemy model representing a single enrolled student.

    `attendanceRate` is a denormalized field: it is recomputed from the
    student's attendance history every time an attendance record is written.
    """
    __tablename__ = "students"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    # The external, school-issued identifier (not the primary key).
    studentId = Column(String, unique=True, index=True, nullable=False)

    enrollmentDate = Column(DateTime, nullable=False, server_default=func.now())
    grade = Column(String, nullable=True)
    section = Column(String, nullable=True)

    engagementScore = Column(Float, nullable=False, default=0.0)
    attendanceRate = Column(Float, nullable=False, default=0.0)

    createdAt = Column(DateTime, nullable=False, server_default=func.now())
    updatedAt = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    # Deleting a student removes everything recorded against them.
    attendance_records = relationship("AttendanceRecord", back_populates="student", cascade="all, delete-orphan")
    performance_records = relationship("PerformanceRecord", back_populates="student", cascade="all, delete-orphan")
    alerts = relationship("Alert", back_populates="student", cascade="all, delete-orphan")
    analytics = relationship("AnalyticsPoint", back_populates="student", cascade="all, delete-orphan")
