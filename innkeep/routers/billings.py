"""Billings (invoices): CRUD, line items, payments, overdue list and statistics."""
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
from innkeep.config import get_settings
from innkeep.database import get_db
from innkeep.dependencies import get_current_user
from innkeep.models.user import User
from innkeep.schemas.billing import (
    BillingCreate,
    BillingItemCreate,
    BillingItemResponse,
    BillingPayment,
    BillingResponse,
    BillingStatistics,
    BillingStatusUpdate,
    BillingUpdate,
)
from innkeep.services.billings import RANGE_FILTERS, BillingsService
from innkeep.utils.listing import paginated_list
from innkeep.utils.pagination import create_paginated_response

router = APIRouter(prefix="/billings", tags=["billings"])


@router.get("")
def list_billings(request: Request, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Filters: any billing column plus billing_date_from/_to, due_date_from/_to, created_at_from/_to, amount_min/_max."""
    return paginated_list(request, BillingsService(db), BillingResponse, tuple(RANGE_FILTERS))


@router.get("/overdue/{property_id}", response_model=list[BillingResponse])
def overdue_billings(property_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return BillingsService(db).get_overdue_billings(property_id)


@router.get("/statistics/{property_id}", response_model=BillingStatistics)
def billing_statistics(
    property_id: int,
    start: date,
    end: date,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if end < start:
        raise HTTPException(status_code=400, detail="end must not be before start")
    return BillingsService(db).get_property_statistics(property_id, start, end)


@router.get("/by-invoice/{invoice_number}", response_model=BillingResponse)
def billing_by_invoice(invoice_number: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    billing = BillingsService(db).get_by_invoice_number(invoice_number.upper())
    if billing is None:
        raise HTTPException(status_code=404, detail="Billing not found")
    return billing


@router.get("/by-reservation/{reservation_id}", response_model=list[BillingResponse])
def billings_for_reservation(reservation_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return BillingsService(db).get_by_reservation_id(reservation_id)


@router.get("/by-guest/{guest_id}")
def billings_for_guest(
    guest_id: int,
    page: int = 1,
    limit: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    settings = get_settings()
    page = max(1, page)
    limit = min(max(1, limit or settings.default_page_limit), settings.max_page_limit)
    rows, total = BillingsService(db).get_by_guest_id(guest_id, page, limit)
    return create_paginated_response(
        [BillingResponse.model_validate(b).model_dump(mode="json") for b in rows], page, limit, total
    )


@router.get("/{billing_id}", response_model=BillingResponse)
def get_billing(billing_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return BillingsService(db).require(billing_id)


@router.post("", response_model=BillingResponse, status_code=201)
def create_billing(data: BillingCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return BillingsService(db).create(data.model_dump(exclude_none=True))


@router.put("/{billing_id}", response_model=BillingResponse)
def update_billing(
    billing_id: int,
    data: BillingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return BillingsService(db).update(billing_id, data.model_dump(exclude_unset=True))


@router.patch("/{billing_id}/status", response_model=BillingResponse)
def update_billing_status(
    billing_id: int,
    data: BillingStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return BillingsService(db).update_status(billing_id, data.status)


@router.post("/{billing_id}/payments", response_model=BillingResponse)
def record_billing_payment(
    billing_id: int,
    data: BillingPayment,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return BillingsService(db).record_payment(billing_id, data.payment_method, data.payment_reference, data.amount)


@router.get("/{billing_id}/items", response_model=list[BillingItemResponse])
def billing_items(billing_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return BillingsService(db).get_items(billing_id)


@router.post("/{billing_id}/items", response_model=BillingItemResponse, status_code=201)
def add_billing_item(
    billing_id: int,
    data: BillingItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return BillingsService(db).add_item(billing_id, data.model_dump(exclude_none=True))


@router.delete("/{billing_id}/items/{item_id}", status_code=204)
def remove_billing_item(
    billing_id: int,
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    BillingsService(db).remove_item(billing_id, item_id)


@router.delete("/{billing_id}", status_code=204)
def delete_billing(billing_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    BillingsService(db).delete(billing_id)
