"""Reservation schemas."""
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field, model_validator
from innkeep.models.reservation import ReservationStatus, PaymentStatus


class ReservationCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    property_id: int
    guest_id: int | None = None
    room_id: int | None = None
    check_in_date: date
    check_out_date: date
    adults: int = Field(default=1, ge=1)
    children: int | None = Field(default=None, ge=0)
    special_requests: str | None = None
    total_amount: float = Field(default=0, ge=0)
    currency: str = "USD"
    status: ReservationStatus | None = None
    payment_status: PaymentStatus | None = None
    source: str | None = None

    @model_validator(mode="after")
    def dates_in_order(self):
        if self.check_out_date <= self.check_in_date:
            raise ValueError("check_out_date must be after check_in_date")
        return self


class ReservationUpdate(BaseModel):
    """All optional; only provided fields are updated."""
    guest_id: int | None = None
    room_id: int | None = None
    check_in_date: date | None = None
    check_out_date: date | None = None
    adults: int | None = Field(default=None, ge=1)
    children: int | None = Field(default=None, ge=0)
    special_requests: str | None = None
    total_amount: float | None = Field(default=None, ge=0)
    currency: str | None = None
    source: str | None = None


class ReservationStatusUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    status: ReservationStatus


class PaymentStatusUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    payment_status: PaymentStatus


class ReservationRoomAssign(BaseModel):
    room_id: int


class ReservationResponse(BaseModel):
    id: int
    property_id: int
    room_id: int | None
    guest_id: int | None
    booking_number: str
    confirmation_code: str
    status: str
    check_in_date: date
    check_out_date: date
    adults: int
    children: int
    special_requests: str | None
    total_amount: float
    currency: str
    payment_status: str
    source: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class ReservationStatistics(BaseModel):
    totalReservations: int = 0
    confirmedReservations: int = 0
    cancelledReservations: int = 0
    noShowReservations: int = 0
    totalRevenue: float = 0
    averageDailyRate: float = 0
    occupancyRate: float = 0
