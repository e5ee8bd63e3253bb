"""Finance schemas."""
from datetime import date
from typing import Any
from pydantic import BaseModel


class FinanceCreate(BaseModel):
    property_id: int
    date: date
    daily_metrics: dict[str, Any] | None = None
    monthly_summaries: dict[str, Any] | None = None
    yearly_reports: dict[str, Any] | None = None
    forecast_data: dict[str, Any] | None = None
    expense_categories: dict[str, Any] | None = None


class FinanceUpdate(BaseModel):
    daily_metrics: dict[str, Any] | None = None
    monthly_summaries: dict[str, Any] | None = None
    yearly_reports: dict[str, Any] | None = None
    forecast_data: dict[str, Any] | None = None
    expense_categories: dict[str, Any] | None = None


class FinanceResponse(BaseModel):
    id: int
    property_id: int
    date: date
    daily_metrics: dict[str, Any] | None
    monthly_summaries: dict[str, Any] | None
    yearly_reports: dict[str, Any] | None
    forecast_data: dict[str, Any] | None
    expense_categories: dict[str, Any] | None

    class Config:
        from_attributes = True
