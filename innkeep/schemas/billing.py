"""Billing (invoice) schemas."""
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field, model_validator
from innkeep.models.billing import BillingStatus


class BillingItemCreate(BaseModel):
    name: str
    description: str | None = None
    quantity: int = Field(default=1, ge=1)
    unit_price: float = Field(ge=0)
    tax_rate: float = Field(default=0, ge=0)
    discount_amount: float = Field(default=0, ge=0)
    category: str | None = None
    service_date: date | None = None


class BillingCreate(BaseModel):
    """Without items, amount and tax_amount are taken as given."""
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    property_id: int
    reservation_id: int | None = None
    guest_id: int | None = None
    billing_date: date | None = None
    due_date: date | None = None
    amount: float = Field(default=0, ge=0)
    currency: str = "USD"
    tax_amount: float = Field(default=0, ge=0)
    tax_rate: float = Field(default=0, ge=0)
    category: str | None = None
    description: str | None = None
    status: BillingStatus | None = None
    payment_method: str | None = None
    payment_reference: str | None = None
    notes: str | None = None
    items: list[BillingItemCreate] = []

    @model_validator(mode="after")
    def due_after_billing(self):
        if self.billing_date and self.due_date and self.due_date < self.billing_date:
            raise ValueError("due_date must not be before billing_date")
        return self


class BillingUpdate(BaseModel):
    """All optional; only provided fields are updated."""
    reservation_id: int | None = None
    guest_id: int | None = None
    due_date: date | None = None
    amount: float | None = Field(default=None, ge=0)
    currency: str | None = None
    tax_amount: float | None = Field(default=None, ge=0)
    tax_rate: float | None = Field(default=None, ge=0)
    category: str | None = None
    description: str | None = None
    notes: str | None = None


class BillingStatusUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    status: BillingStatus


class BillingPayment(BaseModel):
    payment_method: str
    payment_reference: str | None = None
    amount: float = Field(gt=0)


class BillingItemResponse(BaseModel):
    id: int
    billing_id: int
    name: str
    description: str | None
    quantity: int
    unit_price: float
    tax_rate: float
    tax_amount: float
    discount_amount: float
    total_amount: float
    category: str | None
    service_date: date | None

    class Config:
        from_attributes = True


class BillingResponse(BaseModel):
    id: int
    property_id: int
    reservation_id: int | None
    guest_id: int | None
    invoice_number: str
    billing_date: date
    due_date: date
    amount: float
    currency: str
    tax_amount: float
    tax_rate: float
    category: str | None
    description: str | None
    status: str
    payment_method: str | None
    payment_reference: str | None
    payment_date: datetime | None
    amount_paid: float
    notes: str | None
    items: list[BillingItemResponse] = []
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class BillingStatistics(BaseModel):
    totalBillings: int = 0
    paidBillings: int = 0
    pendingBillings: int = 0
    overdueBillings: int = 0
    totalAmount: float = 0
    paidAmount: float = 0
    pendingAmount: float = 0
    overdueAmount: float = 0
