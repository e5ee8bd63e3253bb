"""Payloads for the notification functions (camelCase on the wire)."""
from pydantic import BaseModel, field_validator


class BookingEmailPayload(BaseModel):
    """Every field is optional here; send_booking_confirmation reports missing required ones."""
    bookingId: str | None = None
    guestEmail: str | None = None
    guestName: str | None = None
    propertyName: str | None = None
    checkInDate: str | None = None
    checkOutDate: str | None = None
    roomType: str | None = None
    totalAmount: float | None = None
    currency: str | None = None
    confirmationCode: str | None = None

    @field_validator("bookingId", mode="before")
    @classmethod
    def booking_id_as_str(cls, v):
        # Reservation ids are integers; the email only ever shows them as text
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class HousekeepingReminderRequest(BaseModel):
    propertyId: int | None = None
    # Anything but an explicit false means overdue tasks only
    checkOverdueOnly: bool | None = None

    @property
    def overdue_only(self) -> bool:
        return self.checkOverdueOnly is not False
