"""Domain service: Inventory Ledger.

The only writer of stock rows and stock movements.  Coordinates the
stock side of order transitions:

- rental approval  -> one RENTAL movement per line (stock total untouched)
- purchase approval -> deduct the physical total, one SALE movement per line
- rejection / cancellation of an order holding stock -> release it
- manual stock changes, never below what active rentals have booked

Each operation validates every line before mutating anything, so a
failure never leaves a partially-reserved order.  Callers still run it
inside a unit-of-work transaction so the check and the write are atomic
with respect to other requests.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from rms.domain.exceptions import InsufficientStockError, ValidationError
from rms.domain.model.order import SalesOrder
from rms.domain.model.stock import MoveType, Stock, StockMovement
from rms.domain.model.value_objects import DateWindow, utcnow
from rms.domain.repository.stock_repository import StockRepository
from rms.domain.service.availability_calculator import AvailabilityCalculator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockLevel:
    product_id: str
    total: int
    booked: int
    available: int


class InventoryLedger:

    def __init__(
        self,
        stock_repo: StockRepository,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._stock_repo = stock_repo
        self._clock = clock
        self._availability = AvailabilityCalculator(stock_repo)

    # --- Order-driven mutations -----------------------------------------------

    def reserve_rentals(self, order: SalesOrder) -> list[StockMovement]:
        """Book every line's window; authoritative re-check happens here."""
        # Phase 1: every line must fit in its window
        for detail in order.details:
            self._availability.ensure_available(
                detail.product_id,
                detail.window,
                detail.quantity.value,
                label=detail.product_name,
                order_id=order.id,
            )

        # Phase 2: record the reservations
        movements = []
        for detail in order.details:
            window = detail.window
            movement = StockMovement(
                id=None,
                product_id=detail.product_id,
                move_type=MoveType.RENTAL,
                quantity=detail.quantity.value,
                start_date=window.start,
                end_date=window.end,
                order_id=order.id,
            )
            self._stock_repo.save_movement(movement)
            movements.append(movement)
        logger.info("Reserved %d rental line(s) for order #%s", len(movements), order.id)
        return movements

    def deduct_sales(self, order: SalesOrder) -> list[StockMovement]:
        """Permanently remove purchased units from the physical total."""
        needed: dict[str, int] = defaultdict(int)
        for detail in order.details:
            needed[detail.product_id] += detail.quantity.value

        # Phase 1: load and validate
        rows: dict[str, Stock] = {}
        for detail in order.details:
            self._availability.ensure_available(
                detail.product_id,
                None,
                needed[detail.product_id],
                label=detail.product_name,
                order_id=order.id,
            )
            rows[detail.product_id] = self._stock_repo.get_stock(detail.product_id)

        # Phase 2: mutate and persist, line by line
        now = self._clock()
        movements = []
        for detail in order.details:
            stock = rows[detail.product_id]
            stock.deduct(detail.quantity.value)
            self._stock_repo.save_stock(stock)
            movement = StockMovement(
                id=None,
                product_id=detail.product_id,
                move_type=MoveType.SALE,
                quantity=detail.quantity.value,
                start_date=now,
                end_date=now,
                order_id=order.id,
            )
            self._stock_repo.save_movement(movement)
            movements.append(movement)
        logger.info("Deducted %d sale line(s) for order #%s", len(movements), order.id)
        return movements

    def release_for_order(self, order: SalesOrder) -> None:
        """Undo the stock effects of an order leaving a stock-holding status.

        Rental reservations are soft-deleted so they stop counting toward
        overlap; sold units are put back and a RETURN movement is recorded.
        """
        now = self._clock()
        for movement in self._stock_repo.movements_for_order(order.id):
            if movement.move_type is MoveType.RENTAL:
                movement.soft_delete(now)
                self._stock_repo.save_movement(movement)

        for product_id, quantity in self._net_sold(order.id).items():
            if quantity <= 0:
                continue
            stock = self._stock_repo.get_stock(product_id) or Stock(product_id=product_id)
            stock.restock(quantity)
            self._stock_repo.save_stock(stock)
            self._stock_repo.save_movement(
                StockMovement(
                    id=None,
                    product_id=product_id,
                    move_type=MoveType.RETURN,
                    quantity=quantity,
                    start_date=now,
                    end_date=now,
                    order_id=order.id,
                )
            )
        logger.info("Released stock held by order #%s", order.id)

    def holds_stock_for(self, order: SalesOrder) -> bool:
        """True while the order has live reservations or unreturned sales."""
        movements = self._stock_repo.movements_for_order(order.id)
        if any(m.move_type is MoveType.RENTAL for m in movements):
            return True
        return any(quantity > 0 for quantity in self._net_sold(order.id).values())

    def _net_sold(self, order_id: int) -> dict[str, int]:
        sold: dict[str, int] = defaultdict(int)
        for movement in self._stock_repo.movements_for_order(order_id):
            if movement.move_type is MoveType.SALE:
                sold[movement.product_id] += movement.quantity
            elif movement.move_type is MoveType.RETURN:
                sold[movement.product_id] -= movement.quantity
        return sold

    # --- Manual adjustments ---------------------------------------------------

    def set_total(self, product_id: str, quantity: int) -> Stock:
        """Set the physical total, recording the difference as IN/OUT.

        The new total may not drop below the units that running or upcoming
        rentals have booked at their busiest moment.
        """
        if quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")
        now = self._clock()
        booked = self._availability.peak_booked_quantity(product_id, now)
        if quantity < booked:
            logger.warning(
                "Refused stock change: product=%s requested_total=%d booked=%d",
                product_id, quantity, booked,
            )
            raise InsufficientStockError(
                f"Cannot set stock to {quantity}: {booked} unit(s) are booked by rentals",
                product_id=product_id,
                requested=booked,
                available=quantity,
            )
        stock = self._stock_repo.get_stock(product_id) or Stock(product_id=product_id)
        delta = quantity - stock.total_physical_quantity
        stock.total_physical_quantity = quantity
        self._stock_repo.save_stock(stock)
        if delta:
            self._stock_repo.save_movement(
                StockMovement(
                    id=None,
                    product_id=product_id,
                    move_type=MoveType.IN if delta > 0 else MoveType.OUT,
                    quantity=abs(delta),
                    start_date=now,
                    end_date=now,
                )
            )
        return stock

    # --- Queries --------------------------------------------------------------

    def level(self, product_id: str, window: DateWindow | None = None) -> StockLevel:
        total = self._availability.total_quantity(product_id)
        booked = self._availability.booked_quantity(product_id, window) if window else 0
        return StockLevel(
            product_id=product_id,
            total=total,
            booked=booked,
            available=total - booked,
        )
