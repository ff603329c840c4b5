# /engagement_api/models/analytics_model.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict

from .fields import student_ref


class AnalyticsPointCreate(BaseModel):
    """One metric observation. The timestamp defaults to the time of the request."""
    student_id: str = student_ref()
    metric: str = Field(default="engagement", min_length=1, max_length=50)
    value: float
    timestamp: Optional[datetime] = None


class AnalyticsPoint(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str = student_ref()
    metric: str
    value: float
    timestamp: datetime
