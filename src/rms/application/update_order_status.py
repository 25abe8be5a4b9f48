"""Application service: Update Order Status use case (lifecycle manager).

Vendors move their orders freely between statuses, closed ones included.
Two kinds of transition carry stock effects, decided by what the ledger
still holds for the order and applied before the new status is saved:

- to APPROVED while the order holds no stock: rentals re-check
  availability and book RENTAL movements; purchases deduct stock.
  Approving an order that still holds stock does nothing to the ledger,
  even after a detour through DRAFT or SENT.
- to REJECTED / CANCELLED while the order holds stock: its reservations
  and deductions are released.  Reopening it later books them again.

The whole transition is one transaction; a failed re-check leaves the
order and the ledger untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from rms.application.authorization import require_owner, require_role
from rms.application.dto import OrderDTO, order_to_dto
from rms.domain.exceptions import NotFoundError
from rms.domain.model.order import OrderStatus
from rms.domain.model.principal import Principal, Role
from rms.domain.model.value_objects import utcnow
from rms.domain.repository.unit_of_work import UnitOfWork
from rms.domain.service.inventory_ledger import InventoryLedger
from rms.domain.service.notifier import Notifier, notify_safely

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: Notifier | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._uow = uow
        self._notifier = notifier
        self._clock = clock

    def handle(
        self, principal: Principal, order_id: int, new_status: OrderStatus
    ) -> OrderDTO:
        require_role(principal, Role.VENDOR)

        with self._uow.transaction():
            order = self._uow.orders.get_by_id(order_id)
            if order is None:
                raise NotFoundError("Order not found")
            require_owner(principal, order.vendor_id, "order")

            previous = order.status
            ledger = InventoryLedger(self._uow.stock, self._clock)
            holding = ledger.holds_stock_for(order)
            if order.needs_stock_for(new_status, holding):
                if order.is_service:
                    ledger.reserve_rentals(order)
                else:
                    ledger.deduct_sales(order)
            elif order.releases_stock_for(new_status, holding):
                ledger.release_for_order(order)

            order.change_status(new_status)
            self._uow.orders.save(order)

        if previous is not new_status:
            logger.info(
                "Order #%s moved %s -> %s by vendor %s",
                order.id, previous.value, new_status.value, principal.id,
            )
            notify_safely(
                self._notifier,
                order.customer_id,
                f"Order #{order.id} {new_status.value.lower()}",
                f"Your order #{order.id} is now {new_status.value}.",
            )
        return order_to_dto(order)
