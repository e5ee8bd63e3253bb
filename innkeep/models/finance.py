"""Per-property finance snapshots."""
from sqlalchemy import Column, Integer, Date, ForeignKey, DateTime
from sqlalchemy.sql import func
from innkeep.database import Base, JSONType


class Finance(Base):
    __tablename__ = "finance"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)

    daily_metrics = Column(JSONType, nullable=True)
    monthly_summaries = Column(JSONType, nullable=True)
    yearly_reports = Column(JSONType, nullable=True)
    forecast_data = Column(JSONType, nullable=True)
    expense_categories = Column(JSONType, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
