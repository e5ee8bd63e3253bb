"""Invoices: numbering, line items, payments, overdue lookups and per-property statistics."""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any

from innkeep.errors import NotFoundError, ValidationFailed
from innkeep.models.billing import Billing, BillingItem, BillingStatus
from innkeep.models.property import Property
from innkeep.services.base import BaseService

logger = logging.getLogger(__name__)

_STATUSES = {s.value for s in BillingStatus}
# Still owed by the guest
_OPEN = (BillingStatus.draft.value, BillingStatus.pending.value, BillingStatus.partially_paid.value)
_VOID = (BillingStatus.cancelled.value, BillingStatus.refunded.value)

# Range shorthands accepted by list(): key -> (column, operator)
RANGE_FILTERS = {
    "billing_date_from": ("billing_date", "gte"),
    "billing_date_to": ("billing_date", "lte"),
    "due_date_from": ("due_date", "gte"),
    "due_date_to": ("due_date", "lte"),
    "created_at_from": ("created_at", "gte"),
    "created_at_to": ("created_at", "lte"),
    "amount_min": ("amount", "gte"),
    "amount_max": ("amount", "lte"),
}


def line_totals(quantity: int, unit_price: float, tax_rate: float = 0, discount_amount: float = 0) -> tuple[float, float]:
    """(tax_amount, total_amount) for one line: tax is a percentage of quantity * unit_price, discount comes off last."""
    subtotal = float(unit_price) * int(quantity)
    tax = round(subtotal * float(tax_rate or 0) / 100, 2)
    return tax, round(subtotal + tax - float(discount_amount or 0), 2)


def _item_row(item: dict[str, Any]) -> dict[str, Any]:
    row = {**item}
    row.setdefault("quantity", 1)
    row.setdefault("tax_rate", 0)
    row.setdefault("discount_amount", 0)
    row["tax_amount"], row["total_amount"] = line_totals(
        row["quantity"], row.get("unit_price") or 0, row["tax_rate"], row["discount_amount"]
    )
    unknown = [k for k in row if k not in BillingItem.__table__.columns]
    if unknown:
        raise ValidationFailed(f"Unknown field(s) for billing_items: {', '.join(sorted(unknown))}")
    return row


def _outstanding(billing: Billing) -> float:
    return max(0.0, float(billing.amount or 0) - float(billing.amount_paid or 0))


class BillingsService(BaseService[Billing]):
    model = Billing
    search_fields = ("invoice_number", "description")
    filter_fields = (
        "property_id", "reservation_id", "guest_id", "invoice_number", "status",
        "category", "payment_method", "billing_date", "due_date", "currency",
    )

    def generate_invoice_number(self, property_id: int, today: date | None = None) -> str:
        """<first 3 letters of the property name, or INV><YYMMDD><3-digit sequence for that prefix and day>."""
        prop = self.db.get(Property, property_id)
        prefix = ((prop.name if prop else "") or "")[:3].upper() or "INV"
        stem = f"{prefix}{(today or date.today()).strftime('%y%m%d')}"
        try:
            taken = self.db.query(Billing.invoice_number).filter(Billing.invoice_number.like(f"{stem}%")).all()
        except Exception as e:
            self._handle_error(e)
        sequences = [int(n[len(stem):]) for (n,) in taken if n[len(stem):].isdigit()]
        return f"{stem}{max(sequences, default=0) + 1:03d}"

    def create(self, data: dict[str, Any]) -> Billing:
        """Create the invoice and its items together. With items, amount and tax_amount are their sums."""
        data = {**data}
        items = [_item_row(i) for i in data.pop("items", None) or []]
        if not data.get("property_id"):
            raise ValidationFailed("property_id is required")
        data.setdefault("billing_date", date.today())
        if data.get("due_date") is None:
            data["due_date"] = data["billing_date"]
        if data["due_date"] < data["billing_date"]:
            raise ValidationFailed("due_date must not be before billing_date")
        if not data.get("status"):
            data["status"] = BillingStatus.draft.value
        if items:
            data["amount"] = round(sum(i["total_amount"] for i in items), 2)
            data["tax_amount"] = round(sum(i["tax_amount"] for i in items), 2)
        data.setdefault("invoice_number", self.generate_invoice_number(data["property_id"], data["billing_date"]))
        self._check_columns(data)
        try:
            billing = Billing(**data)
            billing.items = [BillingItem(**i) for i in items]
            self.db.add(billing)
            self.db.commit()
            self.db.refresh(billing)
            logger.info("[Billing] invoice %s created (%d items)", billing.invoice_number, len(items))
            return billing
        except Exception as e:
            self._handle_error(e)

    def list(self, filters=None, page=1, limit=20, search=None, sort=None):
        """Also accepts the RANGE_FILTERS shorthands (billing_date_from, amount_max, ...)."""
        filters = dict(filters or {})
        for key, (column, op) in RANGE_FILTERS.items():
            value = filters.pop(key, None)
            if value is not None:
                filters[f"{column}_{op}"] = value
        return super().list(filters, page, limit, search, sort)

    def get_by_invoice_number(self, invoice_number: str) -> Billing | None:
        try:
            return self._query().filter(Billing.invoice_number == invoice_number).first()
        except Exception as e:
            self._handle_error(e)

    def update_status(self, id: int, status: str) -> Billing:
        status = getattr(status, "value", status)
        if status not in _STATUSES:
            raise ValidationFailed(f"Invalid billing status: {status}")
        return self.update(id, {"status": status})

    def record_payment(
        self,
        id: int,
        payment_method: str,
        payment_reference: str | None,
        amount: float,
        now: datetime | None = None,
    ) -> Billing:
        """Add a payment; the invoice is paid once payments cover its amount, partially_paid before that."""
        if amount is None or amount <= 0:
            raise ValidationFailed("Payment amount must be positive")
        billing = self.require(id)
        if billing.status in _VOID:
            raise ValidationFailed(f"Cannot record a payment on a {billing.status} invoice")
        paid = round(float(billing.amount_paid or 0) + float(amount), 2)
        status = BillingStatus.paid if paid >= float(billing.amount or 0) else BillingStatus.partially_paid
        return self.update(id, {
            "status": status.value,
            "amount_paid": paid,
            "payment_method": payment_method,
            "payment_reference": payment_reference,
            "payment_date": now or datetime.now(timezone.utc),
        })

    def get_items(self, billing_id: int) -> list[BillingItem]:
        return self.require(billing_id).items

    def _recalculate(self, billing: Billing) -> None:
        billing.amount = round(sum(float(i.total_amount or 0) for i in billing.items), 2)
        billing.tax_amount = round(sum(float(i.tax_amount or 0) for i in billing.items), 2)

    def add_item(self, billing_id: int, item: dict[str, Any]) -> BillingItem:
        billing = self.require(billing_id)
        try:
            row = BillingItem(**_item_row(item))
            billing.items.append(row)
            self._recalculate(billing)
            self.db.commit()
            self.db.refresh(row)
            return row
        except Exception as e:
            self._handle_error(e)

    def remove_item(self, billing_id: int, item_id: int) -> None:
        billing = self.require(billing_id)
        row = next((i for i in billing.items if i.id == item_id), None)
        if row is None:
            raise NotFoundError(f"billing_items {item_id} not found on billing {billing_id}")
        try:
            billing.items.remove(row)
            self._recalculate(billing)
            self.db.commit()
        except Exception as e:
            self._handle_error(e)

    def get_by_reservation_id(self, reservation_id: int) -> list[Billing]:
        try:
            return (
                self._query()
                .filter(Billing.reservation_id == reservation_id)
                .order_by(Billing.created_at.desc(), Billing.id.desc())
                .all()
            )
        except Exception as e:
            self._handle_error(e)

    def get_by_guest_id(self, guest_id: int, page: int = 1, limit: int = 20) -> tuple[list[Billing], int]:
        return self.list({"guest_id": guest_id}, page, limit)

    def get_overdue_billings(self, property_id: int, today: date | None = None) -> list[Billing]:
        """Draft or pending invoices past their due date, oldest due first."""
        try:
            return (
                self._query()
                .filter(
                    Billing.property_id == property_id,
                    Billing.due_date < (today or date.today()),
                    Billing.status.in_([BillingStatus.draft.value, BillingStatus.pending.value]),
                )
                .order_by(Billing.due_date.asc(), Billing.id)
                .all()
            )
        except Exception as e:
            self._handle_error(e)

    def get_property_statistics(
        self,
        property_id: int,
        start: date,
        end: date,
        today: date | None = None,
    ) -> dict[str, Any]:
        """Invoices with billing_date in [start, end]. Amounts leave out cancelled and refunded invoices."""
        today = today or date.today()
        try:
            rows = (
                self._query()
                .filter(
                    Billing.property_id == property_id,
                    Billing.billing_date >= start,
                    Billing.billing_date <= end,
                )
                .order_by(Billing.id)
                .all()
            )
        except Exception as e:
            self._handle_error(e)

        def is_overdue(b: Billing) -> bool:
            return b.status == BillingStatus.overdue.value or (b.status in _OPEN and b.due_date < today)

        live = [b for b in rows if b.status not in _VOID]
        overdue = [b for b in live if is_overdue(b)]
        pending = [b for b in live if b.status in _OPEN and not is_overdue(b)]
        paid = [b for b in live if b.status == BillingStatus.paid.value]

        def collected(b: Billing) -> float:
            if b.status == BillingStatus.paid.value:
                return float(b.amount or 0)
            return float(b.amount_paid or 0)

        return {
            "totalBillings": len(rows),
            "paidBillings": len(paid),
            "pendingBillings": len(pending),
            "overdueBillings": len(overdue),
            "totalAmount": round(sum(float(b.amount or 0) for b in live), 2),
            "paidAmount": round(sum(collected(b) for b in live), 2),
            "pendingAmount": round(sum(_outstanding(b) for b in pending), 2),
            "overdueAmount": round(sum(_outstanding(b) for b in overdue), 2),
        }
