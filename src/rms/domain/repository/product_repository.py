"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer and the test fakes.  Implementations return every
stored record from ``_all``; the public query methods apply the
soft-delete filter.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from rms.domain.model.product import Product
from rms.domain.model.soft_delete import active


class ProductRepository(ABC):

    @abstractmethod
    def _all(self) -> list[Product]:
        """Return every stored product, deleted ones included."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    def next_id(self) -> str:
        ids = [int(p.id) for p in self._all() if p.id.isdigit()]
        return str(max(ids, default=0) + 1)

    def get_by_id(self, product_id: str, include_deleted: bool = False) -> Product | None:
        products = self._all() if include_deleted else active(self._all())
        for product in products:
            if product.id == product_id:
                return product
        return None

    def list_all(self) -> list[Product]:
        return active(self._all())

    def list_for_vendor(self, vendor_id: str) -> list[Product]:
        return [p for p in self.list_all() if p.vendor_id == vendor_id]
