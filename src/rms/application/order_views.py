"""Role-specific order summaries.

One formatting function, keyed on the requester's role, produces a tagged
variant: customers see who they bought from, vendors see who bought,
admins see both.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Literal, Union

from rms.domain.model.invoice import SalesInvoice
from rms.domain.model.order import SalesOrder
from rms.domain.model.payment import PaymentLedgerEntry
from rms.domain.model.principal import Principal, Role

OVERDUE_MESSAGE = (
    "Due date has expired please return your product or late fee will apply"
)


@dataclass(frozen=True)
class _OrderSummary:
    id: int
    status: str
    payment_plan: str
    total_order_value: Decimal
    payment_amount_pending: Decimal
    invoice_number: str | None
    message: str | None
    is_service: bool
    product_names: list[str]
    created_at: date


@dataclass(frozen=True)
class CustomerOrderView(_OrderSummary):
    vendor_id: str
    kind: Literal["customer"] = "customer"


@dataclass(frozen=True)
class VendorOrderView(_OrderSummary):
    customer_id: str
    kind: Literal["vendor"] = "vendor"


@dataclass(frozen=True)
class AdminOrderView(_OrderSummary):
    customer_id: str
    vendor_id: str
    kind: Literal["admin"] = "admin"


OrderView = Union[CustomerOrderView, VendorOrderView, AdminOrderView]


def format_order(
    order: SalesOrder,
    requester: Principal,
    invoices: list[SalesInvoice],
    payments: list[PaymentLedgerEntry],
    now: datetime,
) -> OrderView:
    """Summarize an order for the requester's role.

    The displayed status comes from the latest invoice when one exists,
    otherwise from the order itself.
    """
    total_paid = sum((p.amount_paid.amount for p in payments), Decimal("0"))
    latest = invoices[-1] if invoices else None
    common = dict(
        id=order.id,
        status=latest.delivery_status.value if latest else order.status.value,
        payment_plan=order.payment_plan.value,
        total_order_value=order.total_order_value.amount,
        payment_amount_pending=order.total_order_value.amount - total_paid,
        invoice_number=latest.invoice_number if latest else None,
        message=OVERDUE_MESSAGE if order.has_overdue_items(now) else None,
        is_service=order.is_service,
        product_names=[d.product_name for d in order.details],
        created_at=order.created_at.date(),
    )
    if requester.role is Role.CUSTOMER:
        return CustomerOrderView(vendor_id=order.vendor_id, **common)
    if requester.role is Role.VENDOR:
        return VendorOrderView(customer_id=order.customer_id, **common)
    return AdminOrderView(
        customer_id=order.customer_id, vendor_id=order.vendor_id, **common
    )
