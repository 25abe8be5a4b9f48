"""Application service: Remove From Cart use case."""

from __future__ import annotations

from rms.application.authorization import require_role
from rms.domain.exceptions import NotFoundError
from rms.domain.model.principal import Principal, Role
from rms.domain.repository.unit_of_work import UnitOfWork


class RemoveFromCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, principal: Principal, product_id: str) -> None:
        require_role(principal, Role.CUSTOMER)
        with self._uow.transaction():
            if self._uow.carts.get(principal.id, product_id) is None:
                raise NotFoundError(f"Product '{product_id}' is not in the cart")
            self._uow.carts.delete(principal.id, product_id)
