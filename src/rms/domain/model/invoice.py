"""SalesInvoice: billing document raised by the vendor against an order.

Delivery status moves along a strict line
``PROCESSING -> DISPATCHED -> DELIVERED``.  ``COMPLETED`` is only set by
the return settlement, and ``RETURNED`` is terminal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from rms.domain.exceptions import InvalidTransitionError
from rms.domain.model.soft_delete import SoftDeletable
from rms.domain.model.value_objects import Money, utcnow


class DeliveryStatus(Enum):
    PROCESSING = "PROCESSING"
    DISPATCHED = "DISPATCHED"
    DELIVERED = "DELIVERED"
    COMPLETED = "COMPLETED"
    RETURNED = "RETURNED"


# Allowed vendor-driven transitions (current -> next)
DELIVERY_SEQUENCE: dict[DeliveryStatus, DeliveryStatus] = {
    DeliveryStatus.PROCESSING: DeliveryStatus.DISPATCHED,
    DeliveryStatus.DISPATCHED: DeliveryStatus.DELIVERED,
}


@dataclass
class SalesInvoice(SoftDeletable):

    id: int | None
    order_id: int
    invoice_number: str
    tax_amount: Money
    grand_total: Money
    delivery_status: DeliveryStatus = DeliveryStatus.PROCESSING
    is_paid: bool = False
    created_at: datetime = field(default_factory=utcnow)

    def advance_to(self, new_status: DeliveryStatus) -> None:
        """Move one step along the delivery sequence."""
        expected = DELIVERY_SEQUENCE.get(self.delivery_status)
        if new_status is not expected:
            raise InvalidTransitionError(
                f"Invalid status transition from {self.delivery_status.value} "
                f"to {new_status.value}"
            )
        self.delivery_status = new_status

    def complete(self) -> None:
        """Close the invoice out after the return settlement."""
        self.delivery_status = DeliveryStatus.COMPLETED
