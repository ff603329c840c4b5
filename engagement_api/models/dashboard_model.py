# /engagement_api/models/dashboard_model.py

# --- Core Imports ---
from enum import Enum

from pydantic import BaseModel, Field


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


# --- Model Definition ---

class DashboardSummary(BaseModel):
    """
    Defines the data contract for the response of the dashboard summary endpoint.

    The three `average*` fields are whole-population snapshots. The three
    `*Trend` fields compare rolling windows of raw records and are computed
    from different quantities; the two must not be read as the same number.
    """

    totalStudents: int = Field(..., description="Every student on record.", examples=[112])
    activeStudents: int = Field(
        ...,
        description="Students with an attendance or performance record inside the reporting window.",
        examples=[97]
    )
    averageAttendance: float = Field(..., description="Mean of every student's attendance rate, 2 decimals.", examples=[91.25])
    averageEngagement: float = Field(..., description="Mean of every student's engagement score, 2 decimals.", examples=[74.5])
    averagePerformance: float = Field(..., description="Mean GPA of performance records in the window, 2 decimals.", examples=[3.12])
    pendingAlerts: int = Field(..., description="Active alerts nobody has read yet.", examples=[6])
    attendanceTrend: Trend
    engagementTrend: Trend
    performanceTrend: Trend


class TimeSeriesPoint(BaseModel):
    date: str = Field(..., description="ISO-8601 timestamp, UTC, millisecond precision.")
    value: float
