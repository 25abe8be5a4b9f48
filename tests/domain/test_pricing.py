"""Unit tests for checkout line pricing."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from rms.domain.model.product import Product
from rms.domain.model.value_objects import DateWindow, Money, Quantity
from rms.domain.service.pricing import price_line

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _product(daily: str = "500.00", deposit: str | None = "200.00") -> Product:
    return Product(
        id="1",
        vendor_id="v1",
        name="Tent",
        daily_price=Money.of(daily),
        security_deposit=Money.of(deposit) if deposit else None,
        tax_percentage=Decimal("18"),
    )


class TestPriceLine:

    def test_rental_multiplies_by_days(self):
        window = DateWindow(T0, T0 + timedelta(days=3))
        detail = price_line(_product(), Quantity(2), window)
        assert detail.unit_price == Money.of("500.00")
        assert detail.subtotal == Money.of("3000.00")
        assert detail.start_date == T0

    def test_partial_day_bills_a_full_day(self):
        window = DateWindow(T0, T0 + timedelta(days=1, hours=3))
        assert price_line(_product(), Quantity(1), window).subtotal == Money.of("1000.00")

    def test_purchase_has_no_day_factor(self):
        detail = price_line(_product(), Quantity(3), None)
        assert detail.subtotal == Money.of("1500.00")
        assert detail.start_date is None and detail.end_date is None

    def test_deposit_per_unit(self):
        detail = price_line(_product(), Quantity(3), None)
        assert detail.deposit_total == Money.of("600.00")

    def test_no_deposit(self):
        detail = price_line(_product(deposit=None), Quantity(3), None)
        assert detail.deposit_total.is_zero

    def test_discount_is_not_applied(self):
        product = _product()
        product.discount_percentage = Decimal("10")
        assert price_line(product, Quantity(1), None).subtotal == Money.of("500.00")
