"""Application service: Remove Product use case.

Products are soft-deleted: orders keep referencing them, but they drop
out of the catalog and can no longer be carted.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from rms.application.authorization import require_owner, require_role
from rms.domain.exceptions import NotFoundError
from rms.domain.model.principal import Principal, Role
from rms.domain.model.value_objects import utcnow
from rms.domain.repository.unit_of_work import UnitOfWork


class RemoveProductHandler:

    def __init__(
        self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow
    ) -> None:
        self._uow = uow
        self._clock = clock

    def handle(self, principal: Principal, product_id: str) -> None:
        require_role(principal, Role.VENDOR)
        with self._uow.transaction():
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise NotFoundError(f"Product with ID '{product_id}' not found")
            require_owner(principal, product.vendor_id, "product")
            product.soft_delete(self._clock())
            self._uow.products.save(product)
