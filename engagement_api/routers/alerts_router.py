# /engagement_api/routers/alerts_router.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status, Response

from ..config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ..models import alert_model
from ..services import alert_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.exceptions import ResourceNotFoundError

router = APIRouter()

# --- ALERT COLLECTION ENDPOINTS (/api/alerts) ---

@router.post("", response_model=alert_model.Alert, status_code=status.HTTP_201_CREATED, summary="Raise an Alert")
def create_alert(alert_create: alert_model.AlertCreate, db: DatabaseService = Depends(get_db_service)):
    try:
        return alert_service.create_alert(alert_data=alert_create, db=db)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.get("", response_model=alert_model.AlertList, summary="List Alerts")
def list_alerts(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    student_id: Optional[str] = Query(None, alias="studentId"),
    type: Optional[alert_model.AlertType] = None,
    severity: Optional[alert_model.AlertSeverity] = None,
    status_filter: Optional[alert_model.AlertStatus] = Query(None, alias="status"),
    is_read: Optional[bool] = Query(None, alias="isRead"),
    db: DatabaseService = Depends(get_db_service),
):
    return alert_service.list_alerts(
        db=db, page=page, limit=limit, student_id=student_id,
        type=type, severity=severity, status=status_filter, is_read=is_read,
    )

@router.get("/unread", response_model=alert_model.AlertCount, summary="Count Unread Active Alerts")
def get_unread_count(db: DatabaseService = Depends(get_db_service)):
    return {"count": alert_service.get_unread_count(db=db)}

@router.patch("/read-all", response_model=alert_model.AlertCount, summary="Mark Every Alert as Read")
def mark_all_as_read(db: DatabaseService = Depends(get_db_service)):
    return {"count": alert_service.mark_all_as_read(db=db)}

# --- INDIVIDUAL ALERT ENDPOINTS (/api/alerts/{alert_id}) ---

@router.get("/{alert_id}", response_model=alert_model.Alert, summary="Get a Single Alert")
def get_alert(alert_id: str, db: DatabaseService = Depends(get_db_service)):
    alert = alert_service.get_alert(alert_id=alert_id, db=db)
    if alert is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Alert {alert_id} not found")
    return alert

@router.patch("/{alert_id}/read", response_model=alert_model.Alert, summary="Mark an Alert as Read")
def mark_as_read(alert_id: str, db: DatabaseService = Depends(get_db_service)):
    alert = alert_service.mark_as_read(alert_id=alert_id, db=db)
    if alert is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Alert {alert_id} not found")
    return alert

@router.patch("/{alert_id}/status", response_model=alert_model.Alert, summary="Change an Alert's Status")
def update_alert_status(alert_id: str, body: alert_model.AlertStatusUpdate, db: DatabaseService = Depends(get_db_service)):
    alert = alert_service.update_alert_status(alert_id=alert_id, status=body.status, db=db)
    if alert is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Alert {alert_id} not found")
    return alert

@router.delete("/{alert_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an Alert")
def delete_alert(alert_id: str, db: DatabaseService = Depends(get_db_service)):
    if not alert_service.delete_alert(alert_id=alert_id, db=db):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Alert {alert_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
