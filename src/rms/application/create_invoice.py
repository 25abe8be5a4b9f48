"""Application service: Create Invoice use case.

tax         = sum(detail subtotal * product tax % / 100)
grand total = order value + tax

Invoice numbers are random per day, so a clash is possible; a fresh
number is drawn until an unused one is found or the attempts run out.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime

from rms.application.authorization import require_owner, require_role
from rms.application.dto import InvoiceDTO, invoice_to_dto
from rms.domain.exceptions import NotFoundError, ValidationError
from rms.domain.model.invoice import SalesInvoice
from rms.domain.model.order import SalesOrder
from rms.domain.model.principal import Principal, Role
from rms.domain.model.value_objects import Money, utcnow
from rms.domain.repository.unit_of_work import UnitOfWork
from rms.domain.service.invoice_numbers import generate_invoice_number

logger = logging.getLogger(__name__)


class CreateInvoiceHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        number_factory: Callable[[date], str] | None = None,
        max_attempts: int = 5,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._uow = uow
        self._number_factory = number_factory or generate_invoice_number
        self._max_attempts = max_attempts
        self._clock = clock

    def handle(self, principal: Principal, order_id: int) -> InvoiceDTO:
        require_role(principal, Role.VENDOR)

        with self._uow.transaction():
            order = self._uow.orders.get_by_id(order_id)
            if order is None:
                raise NotFoundError("Order not found")
            require_owner(principal, order.vendor_id, "order")

            tax_amount = self._tax_for(order)
            invoice = SalesInvoice(
                id=None,
                order_id=order.id,
                invoice_number=self._unique_number(),
                tax_amount=tax_amount,
                grand_total=order.total_order_value + tax_amount,
                created_at=self._clock(),
            )
            self._uow.invoices.save(invoice)

        logger.info("Invoice %s raised for order #%s", invoice.invoice_number, order.id)
        return invoice_to_dto(invoice)

    def _tax_for(self, order: SalesOrder) -> Money:
        tax = Money.zero()
        for detail in order.details:
            product = self._uow.products.get_by_id(detail.product_id, include_deleted=True)
            if product is None:
                raise NotFoundError(f"Product not found: '{detail.product_id}'")
            tax = tax + detail.subtotal.percent(product.tax_percentage)
        return tax

    def _unique_number(self) -> str:
        today = self._clock().date()
        for attempt in range(1, self._max_attempts + 1):
            number = self._number_factory(today)
            if not self._uow.invoices.number_exists(number):
                return number
            logger.warning("Invoice number %s already taken (attempt %d)", number, attempt)
        raise ValidationError(
            f"Could not allocate a unique invoice number after {self._max_attempts} attempts"
        )
