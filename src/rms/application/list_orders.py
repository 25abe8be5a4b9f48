"""Application service: List Orders use case (query).

Vendors see the orders placed with them, customers the orders they
placed, admins everything; newest first, paginated.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from rms.application.order_views import OrderView, format_order
from rms.domain.exceptions import ValidationError
from rms.domain.model.principal import Principal, Role
from rms.domain.model.value_objects import utcnow
from rms.domain.repository.unit_of_work import UnitOfWork


@dataclass(frozen=True)
class OrderPage:
    data: list[OrderView]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)


class ListOrdersHandler:

    def __init__(
        self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow
    ) -> None:
        self._uow = uow
        self._clock = clock

    def handle(self, principal: Principal, page: int = 1, limit: int = 10) -> OrderPage:
        if page < 1 or limit < 1:
            raise ValidationError("Page and limit must be positive")

        with self._uow.transaction():
            if principal.role is Role.VENDOR:
                orders = self._uow.orders.list_for_vendor(principal.id)
            elif principal.role is Role.CUSTOMER:
                orders = self._uow.orders.list_for_customer(principal.id)
            else:
                orders = self._uow.orders.list_all()

            now = self._clock()
            skip = (page - 1) * limit
            views = [
                format_order(
                    order,
                    principal,
                    self._uow.invoices.list_for_order(order.id),
                    self._uow.payments.list_for_order(order.id),
                    now,
                )
                for order in orders[skip:skip + limit]
            ]
        return OrderPage(data=views, total=len(orders), page=page, limit=limit)
