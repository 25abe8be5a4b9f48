"""Application service: Calculate Return use case (settlement).

Sums invoices, payments, deposits and late fees for an order, then marks
every invoice of the order COMPLETED.  The invoices are only touched
after all figures were computed, inside the same transaction.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from rms.application.authorization import require_party
from rms.application.dto import ReturnSummaryDTO, return_summary_to_dto
from rms.domain.exceptions import NotFoundError
from rms.domain.model.principal import Principal
from rms.domain.model.value_objects import utcnow
from rms.domain.repository.unit_of_work import UnitOfWork
from rms.domain.service.settlement_calculator import calculate_return

logger = logging.getLogger(__name__)


class CalculateReturnHandler:

    def __init__(
        self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow
    ) -> None:
        self._uow = uow
        self._clock = clock

    def handle(self, principal: Principal, order_id: int) -> ReturnSummaryDTO:
        with self._uow.transaction():
            order = self._uow.orders.get_by_id(order_id)
            if order is None:
                raise NotFoundError("Order not found")
            require_party(principal, order)

            invoices = self._uow.invoices.list_for_order(order.id)
            summary = calculate_return(
                order,
                invoices,
                self._uow.payments.list_for_order(order.id),
                self._clock(),
            )

            for invoice in invoices:
                invoice.complete()
                self._uow.invoices.save(invoice)

        logger.info(
            "Return settled for order #%s: final payment %s", order.id, summary.final_payment
        )
        return return_summary_to_dto(summary)
