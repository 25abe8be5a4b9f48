"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal

from rms.domain.model.product import Product
from rms.domain.repository.product_repository import ProductRepository
from rms.infrastructure.persistence.json_table import (
    JsonTable,
    dt_from_raw,
    dt_to_raw,
    money_from_raw,
    money_to_raw,
)


class JsonProductRepository(ProductRepository):

    def __init__(self, table: JsonTable) -> None:
        self._table = table

    # --- ProductRepository interface ------------------------------------------

    def _all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._table.load()]

    def save(self, product: Product) -> None:
        self._table.upsert(self._to_raw(product))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(p: Product) -> dict:
        return {
            "id": p.id,
            "vendor_id": p.vendor_id,
            "name": p.name,
            "daily_price": money_to_raw(p.daily_price),
            "hourly_price": money_to_raw(p.hourly_price),
            "weekly_price": money_to_raw(p.weekly_price),
            "monthly_price": money_to_raw(p.monthly_price),
            "discount_percentage": str(p.discount_percentage),
            "tax_percentage": str(p.tax_percentage),
            "security_deposit": money_to_raw(p.security_deposit),
            "is_available": p.is_available,
            "is_published": p.is_published,
            "deleted_at": dt_to_raw(p.deleted_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            vendor_id=raw["vendor_id"],
            name=raw["name"],
            daily_price=money_from_raw(raw["daily_price"]),
            hourly_price=money_from_raw(raw.get("hourly_price")),
            weekly_price=money_from_raw(raw.get("weekly_price")),
            monthly_price=money_from_raw(raw.get("monthly_price")),
            discount_percentage=Decimal(raw.get("discount_percentage", "0")),
            tax_percentage=Decimal(raw.get("tax_percentage", "0")),
            security_deposit=money_from_raw(raw.get("security_deposit")),
            is_available=raw.get("is_available", True),
            is_published=raw.get("is_published", False),
            deleted_at=dt_from_raw(raw.get("deleted_at")),
        )
