"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from rms.application.authorization import require_role
from rms.application.dto import CartLineDTO, cart_line_to_dto
from rms.domain.model.principal import Principal, Role
from rms.domain.repository.unit_of_work import UnitOfWork


class ShowCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, principal: Principal) -> list[CartLineDTO]:
        require_role(principal, Role.CUSTOMER)
        with self._uow.transaction():
            lines = []
            for line in self._uow.carts.list_for_user(principal.id):
                product = self._uow.products.get_by_id(line.product_id, include_deleted=True)
                name = product.name if product else line.product_id
                lines.append(cart_line_to_dto(line, name))
        return lines
