"""SalesOrder aggregate: one vendor, one fulfillment type, one customer.

The order owns its detail lines.  The status machine itself is
permissive (vendors may move an order between any states), but the
transitions that touch stock are singled out so the lifecycle manager
can run the ledger side effects before the status is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from rms.domain.exceptions import ValidationError
from rms.domain.model.soft_delete import SoftDeletable
from rms.domain.model.value_objects import DateWindow, Money, Quantity, utcnow


class OrderStatus(Enum):
    DRAFT = "DRAFT"
    SENT = "SENT"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.REJECTED, OrderStatus.CANCELLED)


class PaymentPlan(Enum):
    FULL_UPFRONT = "FULL_UPFRONT"
    PARTIAL_MONTHLY = "PARTIAL_MONTHLY"


@dataclass
class SalesOrderDetail:
    """A priced line captured at checkout.

    ``unit_price`` is the product's daily price at checkout time; the
    subtotal already includes quantity and, for rentals, the billed days.
    """

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money
    subtotal: Money
    deposit_total: Money = field(default_factory=Money.zero)
    start_date: datetime | None = None
    end_date: datetime | None = None
    id: int | None = None

    @property
    def window(self) -> DateWindow:
        if self.start_date is None or self.end_date is None:
            raise ValidationError(
                f"Missing dates for rental item {self.product_name} "
                f"(detail {self.id})"
            )
        return DateWindow(self.start_date, self.end_date)

    def is_overdue(self, now: datetime) -> bool:
        return self.end_date is not None and now > self.end_date


@dataclass
class SalesOrder(SoftDeletable):
    """Aggregate root for a customer's order with one vendor.

    Use ``SalesOrder.create()`` for new orders; ``__init__`` stays simple
    so repositories can reconstitute persisted orders without
    re-validating.
    """

    id: int | None
    customer_id: str
    vendor_id: str
    is_service: bool
    details: list[SalesOrderDetail]
    status: OrderStatus = OrderStatus.DRAFT
    payment_plan: PaymentPlan = PaymentPlan.FULL_UPFRONT
    created_at: datetime = field(default_factory=utcnow)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_id: str,
        vendor_id: str,
        is_service: bool,
        details: list[SalesOrderDetail],
    ) -> SalesOrder:
        """Create a new order in its initial status.

        Purchases start APPROVED (no vendor confirmation step); rentals
        start DRAFT and wait for the vendor.
        """
        if not details:
            raise ValidationError("Order must contain at least one item")
        if is_service:
            missing = [d.product_name for d in details if d.end_date is None or d.start_date is None]
            if missing:
                raise ValidationError(
                    f"Start and end date required for rental item: {', '.join(missing)}"
                )
        status = OrderStatus.DRAFT if is_service else OrderStatus.APPROVED
        return SalesOrder(
            id=None,
            customer_id=customer_id,
            vendor_id=vendor_id,
            is_service=is_service,
            details=list(details),
            status=status,
        )

    # --- State transitions ----------------------------------------------------

    @staticmethod
    def needs_stock_for(new_status: OrderStatus, holding: bool) -> bool:
        """True when moving to ``new_status`` must reserve or deduct stock.

        ``holding`` says whether the ledger still carries this order's
        reservations or deductions.  Approving an order that holds stock
        is a no-op, whatever status it passed through in between.
        """
        return new_status is OrderStatus.APPROVED and not holding

    @staticmethod
    def releases_stock_for(new_status: OrderStatus, holding: bool) -> bool:
        return new_status.is_terminal and holding

    def change_status(self, new_status: OrderStatus) -> None:
        """Apply a status change.

        Stock side effects must already have been applied by the caller.
        """
        self.status = new_status

    # --- Computed properties --------------------------------------------------

    @property
    def total_order_value(self) -> Money:
        """Sum of line subtotals.  Deposits are tracked separately."""
        return Money.total(detail.subtotal for detail in self.details)

    @property
    def total_deposit(self) -> Money:
        return Money.total(detail.deposit_total for detail in self.details)

    @property
    def kind(self) -> str:
        return "rental" if self.is_service else "purchase"

    def has_overdue_items(self, now: datetime) -> bool:
        return any(detail.is_overdue(now) for detail in self.details)
