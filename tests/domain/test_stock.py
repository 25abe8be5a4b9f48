"""Unit tests for the Stock counter and stock movements."""

from datetime import datetime, timedelta, timezone

import pytest

from rms.domain.exceptions import InsufficientStockError, ValidationError
from rms.domain.model.stock import MoveType, Stock, StockMovement

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


class TestStock:

    def test_negative_total_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Stock(product_id="1", total_physical_quantity=-1)

    def test_deduct(self):
        stock = Stock(product_id="1", total_physical_quantity=10)
        stock.deduct(4)
        assert stock.total_physical_quantity == 6

    def test_deduct_more_than_total_rejected(self):
        stock = Stock(product_id="1", total_physical_quantity=3)
        with pytest.raises(InsufficientStockError) as exc_info:
            stock.deduct(4)
        assert exc_info.value.requested == 4
        assert exc_info.value.available == 3
        assert exc_info.value.status_code == 409
        assert stock.total_physical_quantity == 3

    def test_restock(self):
        stock = Stock(product_id="1", total_physical_quantity=3)
        stock.restock(2)
        assert stock.total_physical_quantity == 5


class TestStockMovement:

    def _rental(self, start_day: int, end_day: int) -> StockMovement:
        return StockMovement(
            id=None,
            product_id="1",
            move_type=MoveType.RENTAL,
            quantity=1,
            start_date=T0 + timedelta(days=start_day),
            end_date=T0 + timedelta(days=end_day),
        )

    def test_only_rentals_reserve_a_window(self):
        assert MoveType.RENTAL.reserves_window
        assert not any(
            t.reserves_window for t in (MoveType.SALE, MoveType.RETURN, MoveType.IN, MoveType.OUT)
        )

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError):
            StockMovement(
                id=None, product_id="1", move_type=MoveType.IN, quantity=0,
                start_date=T0, end_date=T0,
            )

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError, match="precedes"):
            self._rental(3, 1)

    def test_overlap_is_half_open(self):
        movement = self._rental(1, 5)
        assert movement.overlaps(T0 + timedelta(days=4), T0 + timedelta(days=6))
        assert not movement.overlaps(T0 + timedelta(days=5), T0 + timedelta(days=6))

    def test_soft_delete(self):
        movement = self._rental(1, 5)
        movement.soft_delete(T0)
        assert not movement.is_active
        assert movement.deleted_at == T0
