"""Domain service: Availability Calculator.

Answers whether a product has enough free stock for a requested
quantity, either over a rental window or (for purchases) against the
physical total alone.

Free stock over a window is the physical total minus the quantities of
every active rental movement whose ``[start, end)`` overlaps the
requested window.  The overlap is tested against the *requested*
window, not against the current time.
"""

from __future__ import annotations

import logging
from datetime import datetime

from rms.domain.exceptions import InsufficientStockError
from rms.domain.model.value_objects import DateWindow
from rms.domain.repository.stock_repository import StockRepository

logger = logging.getLogger(__name__)


class AvailabilityCalculator:

    def __init__(self, stock_repo: StockRepository) -> None:
        self._stock_repo = stock_repo

    def total_quantity(self, product_id: str) -> int:
        stock = self._stock_repo.get_stock(product_id)
        return stock.total_physical_quantity if stock is not None else 0

    def booked_quantity(self, product_id: str, window: DateWindow) -> int:
        return sum(
            m.quantity
            for m in self._stock_repo.overlapping(product_id, window.start, window.end)
            if m.move_type.reserves_window
        )

    def peak_booked_quantity(self, product_id: str, since: datetime) -> int:
        """Most units booked at any single instant from ``since`` onward."""
        events: list[tuple[datetime, int]] = []
        for m in self._stock_repo.movements_for_product(product_id):
            if not m.move_type.reserves_window or m.end_date <= since:
                continue
            events.append((max(m.start_date, since), m.quantity))
            events.append((m.end_date, -m.quantity))
        # Half-open windows: a booking ending at t frees its units before one starting at t
        events.sort(key=lambda e: (e[0], e[1]))
        peak = booked = 0
        for _, delta in events:
            booked += delta
            peak = max(peak, booked)
        return peak

    def available_quantity(self, product_id: str, window: DateWindow | None) -> int:
        """Free units for ``window``; ``None`` means a purchase (no time dimension)."""
        total = self.total_quantity(product_id)
        if window is None:
            return total
        return total - self.booked_quantity(product_id, window)

    def is_available(
        self, product_id: str, window: DateWindow | None, requested: int
    ) -> bool:
        return self.available_quantity(product_id, window) >= requested

    def ensure_available(
        self,
        product_id: str,
        window: DateWindow | None,
        requested: int,
        label: str | None = None,
        order_id: int | None = None,
    ) -> None:
        """Raise InsufficientStockError unless ``requested`` units are free."""
        available = self.available_quantity(product_id, window)
        if available >= requested:
            return
        name = label or product_id
        logger.warning(
            "Insufficient stock: order=%s product=%s window=%s requested=%d available=%d",
            order_id, product_id, window or "purchase", requested, available,
        )
        kind = "rental" if window is not None else "purchase"
        raise InsufficientStockError(
            f"Insufficient stock for {kind} item: {name} "
            f"(need {requested}, have {max(available, 0)} available)",
            product_id=product_id,
            requested=requested,
            available=available,
        )
