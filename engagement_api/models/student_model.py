# /engagement_api/models/student_model.py

# --- Core Imports ---
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

# --- Model Definitions ---

class StudentBase(BaseModel):
    """
    The base model for a Student. Contains fields common to create and read operations.
    """
    name: str = Field(..., min_length=2, max_length=100, description="The full name of the student.")
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", description="The student's unique email address.")
    studentId: str = Field(..., min_length=3, max_length=50, description="The official, school-issued ID number for the student.")
    grade: Optional[str] = Field(default=None, description="Grade level, e.g. '10'.")
    section: Optional[str] = Field(default=None)


class StudentCreate(StudentBase):
    """The model used for creating a new student. Enrollment defaults to now."""
    enrollmentDate: Optional[datetime] = Field(default=None)


class StudentUpdate(BaseModel):
    """
    The model for updating a student. All fields are optional to allow for
    partial updates.
    """
    model_config = ConfigDict(from_attributes=True)

    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    email: Optional[str] = Field(default=None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    studentId: Optional[str] = Field(default=None, min_length=3, max_length=50)
    enrollmentDate: Optional[datetime] = Field(default=None)
    grade: Optional[str] = Field(default=None)
    section: Optional[str] = Field(default=None)


class EngagementScoreUpdate(BaseModel):
    # Range is enforced by the service so the API answers 400, not 422.
    score: float = Field(..., description="The new engagement score, 0-100.")


class Student(StudentBase):
    """
    The full representation of a Student resource, as it is stored in the
    database and returned by the API.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="The unique, server-generated identifier for the student.")
    enrollmentDate: datetime
    engagementScore: float = Field(default=0, ge=0, le=100)
    attendanceRate: float = Field(
        default=0,
        ge=0,
        le=100,
        description="Percentage of attendance days marked present or late. Maintained by the server."
    )
    createdAt: datetime
    updatedAt: datetime


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int


class StudentPage(BaseModel):
    data: List[Student]
    pagination: Pagination
