"""Application service: Set Stock use case."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from rms.application.authorization import require_owner, require_role
from rms.domain.exceptions import NotFoundError
from rms.domain.model.principal import Principal, Role
from rms.domain.model.value_objects import utcnow
from rms.domain.repository.unit_of_work import UnitOfWork
from rms.domain.service.inventory_ledger import InventoryLedger


class SetStockHandler:

    def __init__(
        self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow
    ) -> None:
        self._uow = uow
        self._clock = clock

    def handle(self, principal: Principal, product_id: str, quantity: int) -> int:
        """Set the total physical quantity for one of the vendor's products."""
        require_role(principal, Role.VENDOR)
        with self._uow.transaction():
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise NotFoundError(f"Product not found: '{product_id}'")
            require_owner(principal, product.vendor_id, "product")
            ledger = InventoryLedger(self._uow.stock, self._clock)
            stock = ledger.set_total(product_id, quantity)
        return stock.total_physical_quantity
