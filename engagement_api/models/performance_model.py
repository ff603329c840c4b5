# /engagement_api/models/performance_model.py

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

from .fields import student_ref


class PerformanceType(str, Enum):
    QUIZ = "quiz"
    TEST = "test"
    ASSIGNMENT = "assignment"
    EXAM = "exam"


class PerformanceCreate(BaseModel):
    """
    Incoming data for a graded piece of work. The letter grade and GPA are
    never accepted from the caller; they are derived from the score.
    """
    student_id: str = student_ref()
    subject: str = Field(..., min_length=1, max_length=100)
    score: float = Field(..., ge=0)
    maxScore: float = Field(..., ge=0)
    date: datetime
    type: PerformanceType
    notes: Optional[str] = None


class PerformanceUpdate(BaseModel):
    subject: Optional[str] = Field(default=None, min_length=1, max_length=100)
    score: Optional[float] = Field(default=None, ge=0)
    maxScore: Optional[float] = Field(default=None, ge=0)
    date: Optional[datetime] = None
    type: Optional[PerformanceType] = None
    notes: Optional[str] = None


class PerformanceRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str = student_ref()
    subject: str
    score: float
    maxScore: float
    letterGrade: Optional[str] = None
    gpa: Optional[float] = None
    date: datetime
    type: PerformanceType
    notes: Optional[str] = None
    createdAt: Optional[datetime] = None


class SubjectGPA(BaseModel):
    subject: str
    gpa: float
    count: int


class StudentGPA(BaseModel):
    overallGPA: float
    subjectGPAs: List[SubjectGPA]
