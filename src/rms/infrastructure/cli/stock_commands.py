"""CLI commands for stock levels."""

from __future__ import annotations

from datetime import datetime

import click

from rms.application.set_stock import SetStockHandler
from rms.application.show_stock import ShowStockHandler
from rms.domain.model.principal import Principal
from rms.domain.model.value_objects import DateWindow, as_utc
from rms.infrastructure.bootstrap import unit_of_work
from rms.infrastructure.cli.common import DATE_FORMATS, emit, run


@click.command("set")
@click.option("--vendor", required=True, help="Acting vendor ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Total physical quantity.")
def stock_set(vendor: str, product_id: str, quantity: int) -> None:
    """Set the physical stock of a product."""
    handler = SetStockHandler(unit_of_work())
    total = run(lambda: handler.handle(Principal.vendor(vendor), product_id, quantity))
    emit(
        "Stock updated",
        {"product_id": product_id, "total": total},
        lambda _: click.echo(f"Stock for product #{product_id} set to {total}"),
    )


@click.command("show")
@click.option("--product", "product_id", default=None, help="Only this product.")
@click.option("--start", type=click.DateTime(DATE_FORMATS), default=None, help="Window start.")
@click.option("--end", type=click.DateTime(DATE_FORMATS), default=None, help="Window end.")
def stock_show(product_id: str | None, start: datetime | None, end: datetime | None) -> None:
    """Show stock levels, optionally booked over a window."""
    if (start is None) != (end is None):
        raise click.UsageError("--start and --end must be given together")
    handler = ShowStockHandler(unit_of_work())

    def action():
        window = DateWindow(as_utc(start), as_utc(end)) if start and end else None
        return handler.handle(product_id=product_id, window=window)

    lines = run(action)

    def render(items) -> None:
        if not items:
            click.echo("No stock records found.")
            return
        click.echo(f"{'Product':<20} {'Total':>8} {'Booked':>8} {'Available':>10}")
        click.echo("-" * 49)
        for line in items:
            click.echo(
                f"{line.product_name:<20} {line.total:>8} {line.booked:>8} {line.available:>10}"
            )

    emit("Stock levels", lines, render)
