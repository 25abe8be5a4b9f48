"""Application service: Update Invoice Status use case."""

from __future__ import annotations

from rms.application.authorization import require_owner, require_role
from rms.application.dto import InvoiceDTO, invoice_to_dto
from rms.domain.exceptions import NotFoundError
from rms.domain.model.invoice import DeliveryStatus
from rms.domain.model.principal import Principal, Role
from rms.domain.repository.unit_of_work import UnitOfWork


class UpdateInvoiceStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self, principal: Principal, invoice_id: int, new_status: DeliveryStatus
    ) -> InvoiceDTO:
        """Advance delivery one step: PROCESSING -> DISPATCHED -> DELIVERED."""
        require_role(principal, Role.VENDOR)

        with self._uow.transaction():
            invoice = self._uow.invoices.get_by_id(invoice_id)
            if invoice is None:
                raise NotFoundError("Invoice not found")
            order = self._uow.orders.get_by_id(invoice.order_id)
            if order is None:
                raise NotFoundError("Order not found")
            require_owner(principal, order.vendor_id, "invoice")

            invoice.advance_to(new_status)
            self._uow.invoices.save(invoice)
        return invoice_to_dto(invoice)
