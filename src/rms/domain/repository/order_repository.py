"""Abstract repository for SalesOrder aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from rms.domain.model.order import SalesOrder
from rms.domain.model.soft_delete import active


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique order ID."""

    @abstractmethod
    def _all(self) -> list[SalesOrder]:
        """Return every stored order, deleted ones included."""

    @abstractmethod
    def save(self, order: SalesOrder) -> None:
        """Persist a new or updated order (assigns the id when new)."""

    def get_by_id(self, order_id: int) -> SalesOrder | None:
        for order in active(self._all()):
            if order.id == order_id:
                return order
        return None

    def list_for_vendor(self, vendor_id: str) -> list[SalesOrder]:
        return self._newest_first(o for o in active(self._all()) if o.vendor_id == vendor_id)

    def list_for_customer(self, customer_id: str) -> list[SalesOrder]:
        return self._newest_first(
            o for o in active(self._all()) if o.customer_id == customer_id
        )

    def list_all(self) -> list[SalesOrder]:
        return self._newest_first(active(self._all()))

    @staticmethod
    def _newest_first(orders) -> list[SalesOrder]:
        return sorted(orders, key=lambda o: (o.created_at, o.id or 0), reverse=True)
