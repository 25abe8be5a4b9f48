"""Application service: Checkout Cart use case (cart aggregator).

Turns a customer's heterogeneous cart into one order per
(vendor, fulfillment type):

1. Validate every line against current availability.
2. Group lines by ``(vendor_id, is_service)``.
3. Price each line and build the order.
4. Persist; purchase orders start APPROVED and deduct stock right away,
   rental orders start DRAFT and wait for the vendor.
5. Clear the cart, only once every order was created.

Everything runs in one transaction: if any line fails, no order, no
movement and no cart change survives.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from rms.application.authorization import require_role
from rms.application.dto import OrderDTO, order_to_dto
from rms.domain.exceptions import EmptyCartError, NotFoundError
from rms.domain.model.cart import CartLine
from rms.domain.model.order import OrderStatus, SalesOrder
from rms.domain.model.principal import Principal, Role
from rms.domain.model.product import Product
from rms.domain.model.value_objects import utcnow
from rms.domain.repository.unit_of_work import UnitOfWork
from rms.domain.service.availability_calculator import AvailabilityCalculator
from rms.domain.service.inventory_ledger import InventoryLedger
from rms.domain.service.notifier import Notifier, notify_safely
from rms.domain.service.pricing import price_line

logger = logging.getLogger(__name__)


class CheckoutCartHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: Notifier | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._uow = uow
        self._notifier = notifier
        self._clock = clock

    def handle(self, principal: Principal) -> list[OrderDTO]:
        require_role(principal, Role.CUSTOMER)
        customer_id = principal.id

        with self._uow.transaction():
            lines = self._uow.carts.list_for_user(customer_id)
            if not lines:
                raise EmptyCartError("Cart is empty")

            products = self._load_products(lines)
            self._validate(lines, products)

            orders = []
            for (vendor_id, is_service), group in self._group(lines, products).items():
                orders.append(
                    self._create_order(customer_id, vendor_id, is_service, group, products)
                )

            self._uow.carts.clear(customer_id)

        logger.info(
            "Checkout for customer %s created order(s) %s",
            customer_id, ", ".join(f"#{o.id}" for o in orders),
        )
        for order in orders:
            notify_safely(
                self._notifier,
                customer_id,
                f"Order #{order.id} placed",
                f"Your {order.kind} order #{order.id} is {order.status.value}.",
            )
        return [order_to_dto(order) for order in orders]

    # --- Steps ----------------------------------------------------------------

    def _load_products(self, lines: list[CartLine]) -> dict[str, Product]:
        products: dict[str, Product] = {}
        for line in lines:
            product = self._uow.products.get_by_id(line.product_id)
            if product is None:
                raise NotFoundError(f"Product not found: '{line.product_id}'")
            products[line.product_id] = product
        return products

    def _validate(self, lines: list[CartLine], products: dict[str, Product]) -> None:
        availability = AvailabilityCalculator(self._uow.stock)
        for line in lines:
            availability.ensure_available(
                line.product_id,
                line.window,
                line.quantity.value,
                label=products[line.product_id].name,
            )

    @staticmethod
    def _group(
        lines: list[CartLine], products: dict[str, Product]
    ) -> dict[tuple[str, bool], list[CartLine]]:
        groups: dict[tuple[str, bool], list[CartLine]] = {}
        for line in lines:
            key = (products[line.product_id].vendor_id, line.is_service)
            groups.setdefault(key, []).append(line)
        return groups

    def _create_order(
        self,
        customer_id: str,
        vendor_id: str,
        is_service: bool,
        lines: list[CartLine],
        products: dict[str, Product],
    ) -> SalesOrder:
        details = [
            price_line(products[line.product_id], line.quantity, line.window)
            for line in lines
        ]
        order = SalesOrder.create(
            customer_id=customer_id,
            vendor_id=vendor_id,
            is_service=is_service,
            details=details,
        )
        order.created_at = self._clock()
        # Order id must exist before stock movements reference it
        self._uow.orders.save(order)

        if order.status is OrderStatus.APPROVED and not is_service:
            InventoryLedger(self._uow.stock, self._clock).deduct_sales(order)
        return order
