# /engagement_api/services/alert_service.py

import logging
import uuid
from typing import Dict, Optional

from ..models import alert_model
from .database_service import DatabaseService
from .database_helpers.filters import AlertFilter
from .exceptions import ResourceNotFoundError

logger = logging.getLogger(__name__)


def create_alert(alert_data: alert_model.AlertCreate, db: DatabaseService):
    """
    Raises:
        ResourceNotFoundError: If the student does not exist.
    """
    if not db.get_student_by_id(alert_data.student_id):
        raise ResourceNotFoundError(f"Student with ID {alert_data.student_id} not found")

    record = {
        "id": f"alr_{uuid.uuid4().hex[:12]}",
        "student_id": alert_data.student_id,
        "type": alert_data.type.value,
        "severity": alert_data.severity.value,
        "message": alert_data.message,
        "details": alert_data.metadata,
        "status": alert_model.AlertStatus.ACTIVE.value,
        "isRead": False,
    }
    alert = db.add_alert(record)
    logger.info("Alert created: %s", alert.id)
    return alert


def get_alert(alert_id: str, db: DatabaseService):
    return db.get_alert_by_id(alert_id)


def list_alerts(
    db: DatabaseService,
    page: int = 1,
    limit: int = 20,
    student_id: Optional[str] = None,
    type: Optional[alert_model.AlertType] = None,
    severity: Optional[alert_model.AlertSeverity] = None,
    status: Optional[alert_model.AlertStatus] = None,
    is_read: Optional[bool] = None,
) -> Dict:
    """One page of alerts, newest first, plus the total matching the filters."""
    criteria = AlertFilter(
        student_id=student_id,
        type=type.value if type else None,
        severity=severity.value if severity else None,
        status=status.value if status else None,
        is_read=is_read,
    )
    alerts = db.get_alerts(criteria, offset=(page - 1) * limit, limit=limit)
    return {"alerts": alerts, "total": db.count_alerts(criteria)}


def get_unread_count(db: DatabaseService) -> int:
    """Active alerts that have not been read."""
    return db.count_alerts(AlertFilter(status=alert_model.AlertStatus.ACTIVE.value, is_read=False))


def mark_as_read(alert_id: str, db: DatabaseService):
    alert = db.update_alert(alert_id, {"isRead": True})
    if alert:
        logger.info("Alert marked as read: %s", alert_id)
    return alert


def mark_all_as_read(db: DatabaseService) -> int:
    count = db.mark_all_alerts_read()
    logger.info("Marked %s alerts as read", count)
    return count


def update_alert_status(alert_id: str, status: alert_model.AlertStatus, db: DatabaseService):
    alert = db.update_alert(alert_id, {"status": status.value})
    if alert:
        logger.info("Alert status updated: %s -> %s", alert_id, status.value)
    return alert


def delete_alert(alert_id: str, db: DatabaseService) -> bool:
    was_deleted = db.delete_alert(alert_id)
    if was_deleted:
        logger.info("Alert deleted: %s", alert_id)
    return was_deleted
