# /engagement_api/routers/analytics_router.py

# --- Core FastAPI Imports ---
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

# --- Service and Model Imports ---
from ..services import analytics_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.exceptions import ResourceNotFoundError
from ..models import analytics_model
from ..models.dashboard_model import DashboardSummary, TimeSeriesPoint

router = APIRouter()

# A century of history is the longest reporting window the dashboard offers.
MAX_SUMMARY_DAYS = 36500


@router.get(
    "/summary",
    response_model=DashboardSummary,
    summary="Get Dashboard Summary",
    description="Population-wide statistics with period-over-period trends for the dashboard overview."
)
def get_dashboard_summary(
    days: Optional[int] = Query(None, ge=0, le=MAX_SUMMARY_DAYS, description="Reporting window in days. Defaults to 30."),
    db: DatabaseService = Depends(get_db_service),
):
    """
    Thin router layer: delegate straight to the analytics service. Any
    persistence failure propagates and becomes a 500.
    """
    return analytics_service.get_dashboard_summary(db=db, days=days)


@router.get("/engagement/timeseries", response_model=List[TimeSeriesPoint], summary="Get Engagement Time Series")
def get_engagement_time_series(
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    student_id: Optional[str] = Query(None, alias="studentId"),
    db: DatabaseService = Depends(get_db_service),
):
    return analytics_service.get_engagement_time_series(
        db=db, start_date=start_date, end_date=end_date, student_id=student_id
    )


@router.post("/points", response_model=analytics_model.AnalyticsPoint, status_code=status.HTTP_201_CREATED, summary="Record a Metric Point")
def record_metric(point_create: analytics_model.AnalyticsPointCreate, db: DatabaseService = Depends(get_db_service)):
    try:
        return analytics_service.record_metric(point_data=point_create, db=db)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
