"""Abstract repository for the Inventory Ledger (stock rows + movements)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from rms.domain.model.soft_delete import active
from rms.domain.model.stock import Stock, StockMovement


class StockRepository(ABC):

    @abstractmethod
    def get_stock(self, product_id: str) -> Stock | None:
        """Return the stock row for a product, or None."""

    @abstractmethod
    def save_stock(self, stock: Stock) -> None:
        """Persist a new or updated stock row."""

    @abstractmethod
    def _all_movements(self) -> list[StockMovement]:
        """Return every stored movement, deleted ones included."""

    @abstractmethod
    def save_movement(self, movement: StockMovement) -> None:
        """Persist a movement, assigning its id when new."""

    def movements_for_product(self, product_id: str) -> list[StockMovement]:
        return [m for m in active(self._all_movements()) if m.product_id == product_id]

    def movements_for_order(self, order_id: int) -> list[StockMovement]:
        return [m for m in active(self._all_movements()) if m.order_id == order_id]

    def overlapping(
        self, product_id: str, start: datetime, end: datetime
    ) -> list[StockMovement]:
        """Active movements whose ``[start, end)`` intersects the given window."""
        return [
            m for m in self.movements_for_product(product_id) if m.overlaps(start, end)
        ]
