"""CLI commands for the customer cart."""

from __future__ import annotations

from datetime import datetime

import click

from rms.application.add_to_cart import AddToCartHandler
from rms.application.remove_from_cart import RemoveFromCartHandler
from rms.application.show_cart import ShowCartHandler
from rms.domain.model.principal import Principal
from rms.infrastructure.bootstrap import unit_of_work
from rms.infrastructure.cli.common import DATE_FORMATS, emit, fmt_date, run


@click.command("add")
@click.option("--customer", required=True, help="Acting customer ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units wanted.")
@click.option("--buy", is_flag=True, default=False, help="Purchase instead of rent.")
@click.option("--start", type=click.DateTime(DATE_FORMATS), default=None, help="Rental start.")
@click.option("--end", type=click.DateTime(DATE_FORMATS), default=None, help="Rental end.")
def cart_add(
    customer: str,
    product_id: str,
    quantity: int,
    buy: bool,
    start: datetime | None,
    end: datetime | None,
) -> None:
    """Add a product to the cart (or update its line)."""
    handler = AddToCartHandler(unit_of_work())
    line = run(
        lambda: handler.handle(
            Principal.customer(customer),
            product_id,
            quantity,
            is_service=not buy,
            start_date=start,
            end_date=end,
        )
    )
    emit(
        "Cart updated",
        line,
        lambda dto: click.echo(f"{dto.quantity} x '{dto.product_name}' in cart"),
    )


@click.command("remove")
@click.option("--customer", required=True, help="Acting customer ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
def cart_remove(customer: str, product_id: str) -> None:
    """Remove a product from the cart."""
    handler = RemoveFromCartHandler(unit_of_work())
    run(lambda: handler.handle(Principal.customer(customer), product_id))
    emit("Item removed from cart", None, lambda _: click.echo("Item removed from cart"))


@click.command("show")
@click.option("--customer", required=True, help="Acting customer ID.")
def cart_show(customer: str) -> None:
    """Show the cart."""
    handler = ShowCartHandler(unit_of_work())
    lines = run(lambda: handler.handle(Principal.customer(customer)))

    def render(items) -> None:
        if not items:
            click.echo("Cart is empty.")
            return
        click.echo(f"{'Product':<20} {'Qty':>5} {'Type':<9} {'Start':<17} {'End':<17}")
        click.echo("-" * 72)
        for line in items:
            kind = "rent" if line.is_service else "buy"
            click.echo(
                f"{line.product_name:<20} {line.quantity:>5} {kind:<9} "
                f"{fmt_date(line.start_date):<17} {fmt_date(line.end_date):<17}"
            )

    emit("Cart", lines, render)
