"""Domain service: line pricing for checkout.

Rental:   subtotal = daily price * quantity * billed days
Purchase: subtotal = daily price * quantity
Deposit:  security deposit * quantity (zero when the product has none)

Deposits are never folded into the subtotal or the order value.
"""

from __future__ import annotations

from rms.domain.model.order import SalesOrderDetail
from rms.domain.model.product import Product
from rms.domain.model.value_objects import DateWindow, Quantity


def rental_days(window: DateWindow) -> int:
    return window.rental_days


def price_line(
    product: Product, quantity: Quantity, window: DateWindow | None
) -> SalesOrderDetail:
    """Build a priced order detail from a product snapshot."""
    unit_price = product.daily_price
    subtotal = unit_price * quantity.value
    if window is not None:
        subtotal = subtotal * rental_days(window)

    return SalesOrderDetail(
        product_id=product.id,
        product_name=product.name,
        quantity=quantity,
        unit_price=unit_price,
        subtotal=subtotal,
        deposit_total=product.deposit_per_unit * quantity.value,
        start_date=window.start if window else None,
        end_date=window.end if window else None,
    )
