"""Application service: Record Payment use case.

Payments are appended to the ledger and never edited afterwards; the
sum of an order's entries is what the customer has paid.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from rms.application.authorization import require_owner, require_role
from rms.application.dto import PaymentDTO, payment_to_dto
from rms.domain.exceptions import NotFoundError
from rms.domain.model.payment import PaymentLedgerEntry, PaymentPeriod
from rms.domain.model.principal import Principal, Role
from rms.domain.model.value_objects import Money, as_utc, utcnow
from rms.domain.repository.unit_of_work import UnitOfWork


class RecordPaymentHandler:

    def __init__(
        self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow
    ) -> None:
        self._uow = uow
        self._clock = clock

    def handle(
        self,
        principal: Principal,
        order_id: int,
        amount: str,
        reference: str | None = None,
        period_start: datetime | None = None,
        period_end: datetime | None = None,
    ) -> PaymentDTO:
        require_role(principal, Role.VENDOR)
        period = None
        if period_start is not None and period_end is not None:
            period = PaymentPeriod(as_utc(period_start), as_utc(period_end))

        with self._uow.transaction():
            order = self._uow.orders.get_by_id(order_id)
            if order is None:
                raise NotFoundError("Order not found")
            require_owner(principal, order.vendor_id, "order")

            entry = PaymentLedgerEntry(
                id=None,
                order_id=order.id,
                amount_paid=Money.of(amount),
                period=period,
                reference=reference,
                created_at=self._clock(),
            )
            self._uow.payments.add(entry)
        return payment_to_dto(entry)
