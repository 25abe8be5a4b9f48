"""Application service: Show Order use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from rms.application.authorization import require_party
from rms.application.dto import (
    InvoiceDTO,
    OrderDTO,
    PaymentDTO,
    invoice_to_dto,
    order_to_dto,
    payment_to_dto,
)
from rms.domain.exceptions import NotFoundError
from rms.domain.model.principal import Principal
from rms.domain.repository.unit_of_work import UnitOfWork


@dataclass(frozen=True)
class OrderDetailsDTO:
    order: OrderDTO
    invoices: list[InvoiceDTO]
    payments: list[PaymentDTO]


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, principal: Principal, order_id: int) -> OrderDetailsDTO:
        with self._uow.transaction():
            order = self._uow.orders.get_by_id(order_id)
            if order is None:
                raise NotFoundError("Order not found")
            require_party(principal, order)
            invoices = self._uow.invoices.list_for_order(order.id)
            payments = self._uow.payments.list_for_order(order.id)

        return OrderDetailsDTO(
            order=order_to_dto(order),
            invoices=[invoice_to_dto(i) for i in invoices],
            payments=[payment_to_dto(p) for p in payments],
        )
