"""CLI commands for the vendor catalog."""

from __future__ import annotations

import click

from rms.application.add_product import AddProductHandler
from rms.application.dto import product_to_dto
from rms.application.remove_product import RemoveProductHandler
from rms.domain.model.principal import Principal
from rms.infrastructure.bootstrap import unit_of_work
from rms.infrastructure.cli.common import emit, run


@click.command("add")
@click.option("--vendor", required=True, help="Acting vendor ID.")
@click.option("--name", required=True, help="Product name.")
@click.option("--daily-price", required=True, help="Daily price (e.g. 500.00).")
@click.option("--deposit", default=None, help="Security deposit per unit.")
@click.option("--tax", default="0", show_default=True, help="Tax percentage.")
def product_add(vendor: str, name: str, daily_price: str, deposit: str | None, tax: str) -> None:
    """Add a new product to a vendor's catalog."""
    handler = AddProductHandler(unit_of_work())
    dto = run(
        lambda: handler.handle(
            Principal.vendor(vendor),
            name=name,
            daily_price=daily_price,
            security_deposit=deposit,
            tax_percentage=tax,
        )
    )
    emit(
        "Product created",
        dto,
        lambda p: click.echo(f"Product #{p.id} '{p.name}' added at {p.daily_price}/day"),
    )


@click.command("list")
@click.option("--vendor", default=None, help="Only this vendor's products.")
def product_list(vendor: str | None) -> None:
    """List products in the catalog."""
    repo = unit_of_work().products
    products = repo.list_for_vendor(vendor) if vendor else repo.list_all()
    dtos = [product_to_dto(p) for p in products]

    def render(items) -> None:
        if not items:
            click.echo("No products found.")
            return
        click.echo(f"{'ID':<6} {'Name':<20} {'Vendor':<10} {'Daily':>10} {'Deposit':>10} {'Tax%':>6}")
        click.echo("-" * 67)
        for p in items:
            click.echo(
                f"{p.id:<6} {p.name:<20} {p.vendor_id:<10} {p.daily_price:>10} "
                f"{p.security_deposit:>10} {p.tax_percentage:>6}"
            )

    emit("Products", dtos, render)


@click.command("remove")
@click.option("--vendor", required=True, help="Acting vendor ID.")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_remove(vendor: str, product_id: str) -> None:
    """Remove a product from the catalog (soft delete)."""
    handler = RemoveProductHandler(unit_of_work())
    run(lambda: handler.handle(Principal.vendor(vendor), product_id))
    emit("Product removed", {"id": product_id}, lambda _: click.echo(f"Product #{product_id} removed."))
