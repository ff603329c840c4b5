# /engagement_api/db/models/analytics_models.py

from sqlalchemy import Column, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class AnalyticsPoint(Base):
    """
    SQLAlchemy model for one append-only metric observation (e.g. a daily
    "engagement" value) used to draw trend charts.
    """
    __tablename__ = "analytics"

    id = Column(String, primary_key=True, index=True)
    student_id = Column(String, ForeignKey("students.id"), nullable=False, index=True)
    metric = Column(String, nullable=False, index=True)
    value = Column(Float, nullable=False)
    timestamp = Column(DateTime, nullable=False, index=True, server_default=func.now())

    student = relationship("Student", back_populates="analytics")
