# /engagement_api/models/alert_model.py

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, Field, ConfigDict

from .fields import student_ref


# --- Core Enumerations ---
class AlertType(str, Enum):
    ENGAGEMENT_DROP = "ENGAGEMENT_DROP"; ATTENDANCE_LOW = "ATTENDANCE_LOW"
    GRADE_DROP = "GRADE_DROP"; BEHAVIORAL = "BEHAVIORAL"

class AlertSeverity(str, Enum):
    LOW = "LOW"; MEDIUM = "MEDIUM"; HIGH = "HIGH"; CRITICAL = "CRITICAL"

class AlertStatus(str, Enum):
    ACTIVE = "ACTIVE"
    ACKNOWLEDGED = "ACKNOWLEDGED"
    RESOLVED = "RESOLVED"


# --- API Contract Models ---

class AlertCreate(BaseModel):
    student_id: str = student_ref()
    type: AlertType
    severity: AlertSeverity
    message: str = Field(..., min_length=10, max_length=500)
    metadata: Optional[Dict[str, Any]] = None


class AlertStatusUpdate(BaseModel):
    status: AlertStatus


class Alert(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str = student_ref()
    type: AlertType
    severity: AlertSeverity
    message: str
    # The ORM column attribute is `details`; the API keeps the name `metadata`.
    metadata: Optional[Dict[str, Any]] = Field(default=None, validation_alias=AliasChoices("details", "metadata"))
    status: AlertStatus
    isRead: bool
    createdAt: datetime
    updatedAt: datetime


class AlertList(BaseModel):
    alerts: List[Alert]
    total: int


class AlertCount(BaseModel):
    count: int
