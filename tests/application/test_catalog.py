"""Integration tests for the vendor catalog and stock use cases."""

from datetime import timedelta
from decimal import Decimal

import pytest

from rms.application.add_product import AddProductHandler
from rms.application.remove_product import RemoveProductHandler
from rms.application.set_stock import SetStockHandler
from rms.application.show_stock import ShowStockHandler
from rms.application.update_order_status import UpdateOrderStatusHandler
from rms.domain.exceptions import (
    InsufficientStockError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from tests.fakes import fixed_clock
from rms.domain.model.order import OrderStatus
from rms.domain.model.value_objects import DateWindow
from rms.domain.service.inventory_ledger import InventoryLedger
from tests.application.helpers import (
    ALICE,
    END,
    START,
    VENDOR_ONE,
    VENDOR_TWO,
    checkout_rental,
    make_uow,
)
from tests.fakes import fixed_clock


class TestAddProduct:

    def test_happy_path(self):
        uow = make_uow()
        dto = AddProductHandler(uow).handle(
            VENDOR_TWO, name="  Drone ", daily_price="750", security_deposit="1000", tax_percentage="12"
        )
        assert dto.id == "4"
        assert dto.name == "Drone"
        assert dto.vendor_id == "v2"
        assert dto.tax_percentage == Decimal("12")

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            AddProductHandler(make_uow()).handle(VENDOR_ONE, name="Free", daily_price="0")

    def test_tax_out_of_range_rejected(self):
        with pytest.raises(ValidationError, match="between 0 and 100"):
            AddProductHandler(make_uow()).handle(
                VENDOR_ONE, name="Taxed", daily_price="1", tax_percentage="101"
            )

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            AddProductHandler(make_uow()).handle(VENDOR_ONE, name=" ", daily_price="1")

    def test_customer_cannot_add(self):
        with pytest.raises(UnauthorizedError):
            AddProductHandler(make_uow()).handle(ALICE, name="X", daily_price="1")


class TestRemoveProduct:

    def test_soft_deletes(self):
        uow = make_uow()
        RemoveProductHandler(uow).handle(VENDOR_ONE, "1")
        assert uow.products.get_by_id("1") is None
        assert uow.products.get_by_id("1", include_deleted=True) is not None
        # A fresh id never reuses the deleted one
        assert uow.products.next_id() == "4"

    def test_other_vendors_product(self):
        with pytest.raises(UnauthorizedError, match="this product"):
            RemoveProductHandler(make_uow()).handle(VENDOR_TWO, "1")


class TestStock:

    def test_set_and_show(self):
        uow = make_uow()
        assert SetStockHandler(uow).handle(VENDOR_ONE, "1", 8) == 8

        [level] = ShowStockHandler(uow).handle(product_id="1")

        assert (level.product_name, level.total, level.available) == ("Camera", 8, 8)

    def test_show_over_window_counts_bookings(self):
        uow = make_uow(camera=3)
        window = DateWindow(START, END)
        ledger = InventoryLedger(uow.stock)
        order_id = checkout_rental(uow, qty=2)
        ledger.reserve_rentals(uow.orders.get_by_id(order_id))

        [level] = ShowStockHandler(uow).handle(product_id="1", window=window)

        assert (level.total, level.booked, level.available) == (3, 2, 1)

    def test_unknown_product(self):
        with pytest.raises(NotFoundError):
            SetStockHandler(make_uow()).handle(VENDOR_ONE, "99", 1)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            SetStockHandler(make_uow()).handle(VENDOR_ONE, "1", -1)


class TestStockBelowBookings:

    def _booked_camera(self, camera: int = 2, qty: int = 2):
        uow = make_uow(camera=camera)
        order_id = checkout_rental(uow, qty=qty)
        UpdateOrderStatusHandler(uow, clock=fixed_clock()).handle(
            VENDOR_ONE, order_id, OrderStatus.APPROVED
        )
        return uow

    def test_cannot_drop_below_booked_units(self):
        uow = self._booked_camera()

        with pytest.raises(InsufficientStockError, match="2 unit\\(s\\) are booked"):
            SetStockHandler(uow, clock=fixed_clock()).handle(VENDOR_ONE, "1", 0)

        [level] = ShowStockHandler(uow).handle(product_id="1", window=DateWindow(START, END))
        assert (level.total, level.available) == (2, 0)

    def test_may_drop_to_exactly_booked_units(self):
        uow = self._booked_camera(camera=5)
        assert SetStockHandler(uow, clock=fixed_clock()).handle(VENDOR_ONE, "1", 2) == 2

    def test_finished_rentals_do_not_count(self):
        uow = self._booked_camera()
        after_return = fixed_clock(END + timedelta(days=1))
        assert SetStockHandler(uow, clock=after_return).handle(VENDOR_ONE, "1", 0) == 0
