# /engagement_api/db/models/alert_models.py

from sqlalchemy import Column, String, Boolean, DateTime, JSON, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class Alert(Base):
    """SQLAlchemy model for an early-warning alert raised against a student."""
    __tablename__ = "alerts"

    id = Column(String, primary_key=True, index=True)
    student_id = Column(String, ForeignKey("students.id"), nullable=False, index=True)
    type = Column(String, nullable=False)
    severity = Column(String, nullable=False)
    message = Column(String, nullable=False)
    # `metadata` is reserved on declarative classes, so the attribute is renamed.
    details = Column("metadata", JSON, nullable=True)
    status = Column(String, nullable=False, default="ACTIVE", index=True)
    isRead = Column(Boolean, nullable=False, default=False)
    createdAt = Column(DateTime, nullable=False, server_default=func.now())
    updatedAt = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    student = relationship("Student", back_populates="alerts")
