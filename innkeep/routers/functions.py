"""Notification functions: housekeeping reminder and booking confirmation.

Errors are rendered as {"error": message}, not the {"error", "code"} shape of the CRUD routes.
"""
import logging
from typing import Any
from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session
from innkeep.database import get_db
from innkeep.dependencies import get_current_user
from innkeep.models.user import User
from innkeep.schemas.booking import BookingEmailPayload, HousekeepingReminderRequest
from innkeep.services.booking_confirmation import BookingConfirmationError, send_booking_confirmation
from innkeep.services.housekeeping_reminder import run_housekeeping_reminder

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["functions"])


def _bad_request(e: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(e)})


@router.api_route("/housekeeping-reminder", methods=["GET", "POST"])
def housekeeping_reminder(
    body: dict[str, Any] | None = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """GET: overdue tasks for every property. POST {propertyId, checkOverdueOnly}: narrow or widen the run."""
    try:
        params = HousekeepingReminderRequest.model_validate(body or {})
    except ValidationError as e:
        return _bad_request(e)
    try:
        return run_housekeeping_reminder(db, property_id=params.propertyId, check_overdue_only=params.overdue_only)
    except Exception as e:
        logger.exception("[Housekeeping] reminder request failed")
        return JSONResponse(status_code=500, content={"error": str(e) or "Unknown error"})


@router.api_route("/send-booking-confirmation", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
def send_booking_confirmation_not_allowed(current_user: User = Depends(get_current_user)):
    return JSONResponse(status_code=405, content={"error": "Method not allowed"})


@router.post("/send-booking-confirmation")
def booking_confirmation(body: dict[str, Any] | None = Body(None), current_user: User = Depends(get_current_user)):
    try:
        payload = BookingEmailPayload.model_validate(body or {})
    except ValidationError as e:
        return _bad_request(e)
    try:
        return send_booking_confirmation(payload)
    except BookingConfirmationError as e:
        return JSONResponse(status_code=e.status_code, content={"error": e.message})
