"""Inventory Ledger records: the physical counter and stock movements.

``Stock`` holds the total physical quantity of a product.  Stock
movements are time-stamped records of what happened to that stock
(rentals, sales, adjustments).  Only rentals consume availability
through window overlap; sales and adjustments change the physical
counter directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from rms.domain.exceptions import InsufficientStockError, ValidationError
from rms.domain.model.soft_delete import SoftDeletable


class MoveType(Enum):
    RENTAL = "RENTAL"
    SALE = "SALE"
    RETURN = "RETURN"
    IN = "IN"
    OUT = "OUT"

    @property
    def reserves_window(self) -> bool:
        return self is MoveType.RENTAL


@dataclass
class Stock:
    """Physical-quantity counter for one product.

    Invariant: ``total_physical_quantity`` is never negative.
    """

    product_id: str
    total_physical_quantity: int = 0

    def __post_init__(self) -> None:
        if self.total_physical_quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")

    def deduct(self, quantity: int) -> None:
        """Permanently remove sold units."""
        if quantity <= 0:
            raise ValidationError("Deduction quantity must be positive")
        if quantity > self.total_physical_quantity:
            raise InsufficientStockError(
                f"Insufficient stock for product {self.product_id} "
                f"(need {quantity}, have {self.total_physical_quantity})",
                product_id=self.product_id,
                requested=quantity,
                available=self.total_physical_quantity,
            )
        self.total_physical_quantity -= quantity

    def restock(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Restock quantity must be positive")
        self.total_physical_quantity += quantity


@dataclass
class StockMovement(SoftDeletable):
    """A committed reservation, sale or adjustment against a product.

    The window is half-open: ``[start_date, end_date)``.  Sales and
    adjustments are stamped with a zero-length window at the moment they
    happened.
    """

    id: int | None
    product_id: str
    move_type: MoveType
    quantity: int
    start_date: datetime
    end_date: datetime
    order_id: int | None = None

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValidationError("Movement quantity must be positive")
        if self.end_date < self.start_date:
            raise ValidationError("Movement end date precedes its start date")

    def overlaps(self, start: datetime, end: datetime) -> bool:
        return self.start_date < end and self.end_date > start
