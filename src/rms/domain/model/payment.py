"""PaymentLedgerEntry: append-only record of money received for an order."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from rms.domain.exceptions import ValidationError
from rms.domain.model.soft_delete import SoftDeletable
from rms.domain.model.value_objects import DateWindow, Money, utcnow


@dataclass(frozen=True)
class PaymentPeriod:
    """Billing period a payment covers (instalment plans)."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        DateWindow(self.start, self.end)


@dataclass
class PaymentLedgerEntry(SoftDeletable):

    id: int | None
    order_id: int
    amount_paid: Money
    period: PaymentPeriod | None = None
    reference: str | None = None
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        if self.amount_paid.is_zero:
            raise ValidationError("Payment amount must be greater than zero")
