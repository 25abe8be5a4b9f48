"""Unit tests for the InventoryLedger domain service."""

from datetime import datetime, timedelta, timezone

import pytest

from rms.domain.exceptions import InsufficientStockError, ValidationError
from rms.domain.model.order import OrderStatus, SalesOrder, SalesOrderDetail
from rms.domain.model.stock import MoveType, Stock
from rms.domain.model.value_objects import DateWindow, Money, Quantity
from rms.domain.service.inventory_ledger import InventoryLedger
from tests.fakes import NOW, FakeStockRepository, fixed_clock

T0 = datetime(2024, 2, 1, tzinfo=timezone.utc)


def _detail(pid: str, qty: int, window: DateWindow | None = None) -> SalesOrderDetail:
    return SalesOrderDetail(
        product_id=pid,
        product_name=f"Product {pid}",
        quantity=Quantity(qty),
        unit_price=Money.of("10.00"),
        subtotal=Money.of("10.00") * qty,
        start_date=window.start if window else None,
        end_date=window.end if window else None,
    )


def _order(order_id: int, is_service: bool, *details: SalesOrderDetail) -> SalesOrder:
    order = SalesOrder(
        id=order_id, customer_id="c1", vendor_id="v1",
        is_service=is_service, details=list(details),
    )
    order.status = OrderStatus.DRAFT if is_service else OrderStatus.APPROVED
    return order


def _window(start_day: int, end_day: int) -> DateWindow:
    return DateWindow(T0 + timedelta(days=start_day), T0 + timedelta(days=end_day))


def _repo(**totals: int) -> FakeStockRepository:
    return FakeStockRepository(
        [Stock(product_id=pid.lstrip("p"), total_physical_quantity=q) for pid, q in totals.items()]
    )


class TestReserveRentals:

    def test_records_one_rental_movement_per_line(self):
        repo = _repo(p1=5, p2=5)
        ledger = InventoryLedger(repo, fixed_clock())
        order = _order(1, True, _detail("1", 2, _window(0, 3)), _detail("2", 1, _window(1, 2)))

        movements = ledger.reserve_rentals(order)

        assert [m.move_type for m in movements] == [MoveType.RENTAL, MoveType.RENTAL]
        assert all(m.order_id == 1 for m in movements)
        assert repo.get_stock("1").total_physical_quantity == 5  # total untouched
        assert ledger.level("1", _window(0, 3)).available == 3

    def test_failure_on_any_line_writes_nothing(self):
        repo = _repo(p1=5, p2=1)
        ledger = InventoryLedger(repo, fixed_clock())
        order = _order(1, True, _detail("1", 2, _window(0, 3)), _detail("2", 2, _window(0, 3)))

        with pytest.raises(InsufficientStockError, match="Product 2"):
            ledger.reserve_rentals(order)

        assert repo.movements_for_order(1) == []

    def test_disjoint_windows_can_share_a_unit(self):
        repo = _repo(p1=1)
        ledger = InventoryLedger(repo, fixed_clock())
        ledger.reserve_rentals(_order(1, True, _detail("1", 1, _window(0, 2))))
        ledger.reserve_rentals(_order(2, True, _detail("1", 1, _window(2, 4))))
        with pytest.raises(InsufficientStockError):
            ledger.reserve_rentals(_order(3, True, _detail("1", 1, _window(1, 3))))


class TestDeductSales:

    def test_deducts_total_and_records_sale(self):
        repo = _repo(p1=5)
        ledger = InventoryLedger(repo, fixed_clock())

        movements = ledger.deduct_sales(_order(1, False, _detail("1", 2)))

        assert repo.get_stock("1").total_physical_quantity == 3
        assert movements[0].move_type is MoveType.SALE
        assert movements[0].start_date == movements[0].end_date == NOW

    def test_lines_for_same_product_are_checked_together(self):
        repo = _repo(p1=3)
        ledger = InventoryLedger(repo, fixed_clock())
        with pytest.raises(InsufficientStockError, match="need 4"):
            ledger.deduct_sales(_order(1, False, _detail("1", 2), _detail("1", 2)))
        assert repo.get_stock("1").total_physical_quantity == 3

    def test_product_without_stock_row(self):
        ledger = InventoryLedger(FakeStockRepository(), fixed_clock())
        with pytest.raises(InsufficientStockError):
            ledger.deduct_sales(_order(1, False, _detail("9", 1)))

    def test_sale_does_not_reduce_rental_availability_twice(self):
        repo = _repo(p1=5)
        ledger = InventoryLedger(repo, fixed_clock())
        ledger.deduct_sales(_order(1, False, _detail("1", 2)))
        # Window around the sale timestamp sees only the reduced total
        window = DateWindow(NOW - timedelta(days=1), NOW + timedelta(days=1))
        assert ledger.level("1", window).available == 3


class TestReleaseForOrder:

    def test_rental_release_frees_window(self):
        repo = _repo(p1=2)
        ledger = InventoryLedger(repo, fixed_clock())
        order = _order(1, True, _detail("1", 2, _window(0, 3)))
        ledger.reserve_rentals(order)

        ledger.release_for_order(order)

        assert ledger.level("1", _window(0, 3)).available == 2
        assert repo.movements_for_order(1) == []

    def test_sale_release_restocks_once(self):
        repo = _repo(p1=5)
        ledger = InventoryLedger(repo, fixed_clock())
        order = _order(1, False, _detail("1", 2))
        ledger.deduct_sales(order)

        ledger.release_for_order(order)
        ledger.release_for_order(order)

        assert repo.get_stock("1").total_physical_quantity == 5
        returns = [m for m in repo.movements_for_order(1) if m.move_type is MoveType.RETURN]
        assert [m.quantity for m in returns] == [2]


class TestHoldsStock:

    def test_rental_holds_until_released(self):
        ledger = InventoryLedger(_repo(p1=2), fixed_clock())
        order = _order(1, True, _detail("1", 1, _window(0, 3)))
        assert not ledger.holds_stock_for(order)

        ledger.reserve_rentals(order)
        assert ledger.holds_stock_for(order)

        ledger.release_for_order(order)
        assert not ledger.holds_stock_for(order)

    def test_sale_holds_until_returned(self):
        ledger = InventoryLedger(_repo(p1=5), fixed_clock())
        order = _order(1, False, _detail("1", 2))

        ledger.deduct_sales(order)
        assert ledger.holds_stock_for(order)

        ledger.release_for_order(order)
        assert not ledger.holds_stock_for(order)


class TestSetTotal:

    def test_records_in_and_out_adjustments(self):
        repo = FakeStockRepository()
        ledger = InventoryLedger(repo, fixed_clock())

        ledger.set_total("1", 5)
        ledger.set_total("1", 3)
        ledger.set_total("1", 3)

        moves = repo.movements_for_product("1")
        assert [(m.move_type, m.quantity) for m in moves] == [(MoveType.IN, 5), (MoveType.OUT, 2)]
        assert repo.get_stock("1").total_physical_quantity == 3

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            InventoryLedger(FakeStockRepository()).set_total("1", -1)

    def test_cannot_drop_below_upcoming_bookings(self):
        repo = _repo(p1=3)
        ledger = InventoryLedger(repo, fixed_clock())
        ledger.reserve_rentals(_order(1, True, _detail("1", 2, _window(0, 3))))

        with pytest.raises(InsufficientStockError, match="2 unit\\(s\\) are booked"):
            ledger.set_total("1", 1)

        assert repo.get_stock("1").total_physical_quantity == 3
        assert ledger.set_total("1", 2).total_physical_quantity == 2


class TestLevel:

    def test_without_window_nothing_is_booked(self):
        repo = _repo(p1=4)
        ledger = InventoryLedger(repo, fixed_clock())
        ledger.reserve_rentals(_order(1, True, _detail("1", 3, _window(0, 3))))
        level = ledger.level("1")
        assert (level.total, level.booked, level.available) == (4, 0, 4)
