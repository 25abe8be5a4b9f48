"""Application service: Add To Cart use case.

Upserts the customer's single line for a product.  The availability
check here is advisory (stock may move before checkout); checkout and
vendor approval re-check authoritatively.
"""

from __future__ import annotations

from datetime import datetime

from rms.application.authorization import require_role
from rms.application.dto import CartLineDTO, cart_line_to_dto
from rms.domain.exceptions import NotFoundError, ValidationError
from rms.domain.model.cart import CartLine
from rms.domain.model.principal import Principal, Role
from rms.domain.model.value_objects import as_utc
from rms.domain.repository.unit_of_work import UnitOfWork
from rms.domain.service.availability_calculator import AvailabilityCalculator


class AddToCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        principal: Principal,
        product_id: str,
        quantity: int,
        is_service: bool = True,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> CartLineDTO:
        require_role(principal, Role.CUSTOMER)
        line = CartLine.create(
            user_id=principal.id,
            product_id=product_id,
            quantity=quantity,
            is_service=is_service,
            start_date=as_utc(start_date) if start_date else None,
            end_date=as_utc(end_date) if end_date else None,
        )

        with self._uow.transaction():
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise NotFoundError("Product not found")
            if not product.is_orderable:
                raise ValidationError(f"Product '{product.name}' is not available")

            AvailabilityCalculator(self._uow.stock).ensure_available(
                product_id, line.window, quantity, label=product.name
            )
            self._uow.carts.save(line)

        return cart_line_to_dto(line, product.name)
