"""Application service: Add Product use case (vendor catalog seeding)."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from rms.application.authorization import require_role
from rms.application.dto import ProductDTO, product_to_dto
from rms.domain.exceptions import ValidationError
from rms.domain.model.principal import Principal, Role
from rms.domain.model.product import Product
from rms.domain.model.value_objects import Money
from rms.domain.repository.unit_of_work import UnitOfWork


def _optional_money(value: str | None) -> Money | None:
    return Money.of(value) if value not in (None, "") else None


def _percentage(value: str | None, label: str) -> Decimal:
    try:
        return Decimal(str(value or "0"))
    except InvalidOperation as exc:
        raise ValidationError(f"Invalid {label} percentage: {value!r}") from exc


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        principal: Principal,
        name: str,
        daily_price: str,
        security_deposit: str | None = None,
        tax_percentage: str | None = None,
        discount_percentage: str | None = None,
        hourly_price: str | None = None,
        weekly_price: str | None = None,
        monthly_price: str | None = None,
        is_published: bool = True,
    ) -> ProductDTO:
        """Add a product to the acting vendor's catalog."""
        require_role(principal, Role.VENDOR)
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        with self._uow.transaction():
            product = Product(
                id=self._uow.products.next_id(),
                vendor_id=principal.id,
                name=name.strip(),
                daily_price=Money.of(daily_price),
                hourly_price=_optional_money(hourly_price),
                weekly_price=_optional_money(weekly_price),
                monthly_price=_optional_money(monthly_price),
                discount_percentage=_percentage(discount_percentage, "discount"),
                tax_percentage=_percentage(tax_percentage, "tax"),
                security_deposit=_optional_money(security_deposit),
                is_published=is_published,
            )
            self._uow.products.save(product)
        return product_to_dto(product)
