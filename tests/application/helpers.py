"""Shared setup for application-layer tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from rms.application.add_to_cart import AddToCartHandler
from rms.application.checkout_cart import CheckoutCartHandler
from rms.domain.model.principal import Principal
from rms.domain.model.product import Product
from rms.domain.model.stock import Stock
from rms.domain.model.value_objects import Money
from tests.fakes import FakeUnitOfWork, fixed_clock

START = datetime(2024, 1, 15, tzinfo=timezone.utc)
END = START + timedelta(days=3)

ALICE = Principal.customer("alice")
BOB = Principal.customer("bob")
VENDOR_ONE = Principal.vendor("v1")
VENDOR_TWO = Principal.vendor("v2")


def make_uow(camera: int = 5, tent: int = 5, lens: int = 5) -> FakeUnitOfWork:
    """Two vendors: v1 sells Camera (#1) and Tent (#2), v2 sells Lens (#3)."""
    products = [
        Product(
            id="1", vendor_id="v1", name="Camera", daily_price=Money.of("500.00"),
            security_deposit=Money.of("200.00"), tax_percentage=Decimal("18"),
            is_published=True,
        ),
        Product(
            id="2", vendor_id="v1", name="Tent", daily_price=Money.of("300.00"),
            tax_percentage=Decimal("5"), is_published=True,
        ),
        Product(
            id="3", vendor_id="v2", name="Lens", daily_price=Money.of("100.00"),
            security_deposit=Money.of("50.00"), is_published=True,
        ),
    ]
    stock = [
        Stock(product_id="1", total_physical_quantity=camera),
        Stock(product_id="2", total_physical_quantity=tent),
        Stock(product_id="3", total_physical_quantity=lens),
    ]
    return FakeUnitOfWork(products=products, stock=stock)


def checkout_rental(uow, customer: Principal = ALICE, product_id: str = "1", qty: int = 1) -> int:
    """Put one rental line in the cart and check it out; returns the order id."""
    AddToCartHandler(uow).handle(customer, product_id, qty, True, START, END)
    [order] = CheckoutCartHandler(uow, clock=fixed_clock()).handle(customer)
    return order.id
