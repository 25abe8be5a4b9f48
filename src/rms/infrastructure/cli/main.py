import click

from rms.infrastructure.cli.cart_commands import cart_add, cart_remove, cart_show
from rms.infrastructure.cli.invoice_commands import invoice_create, invoice_status
from rms.infrastructure.cli.order_commands import (
    order_checkout,
    order_list,
    order_return_summary,
    order_show,
    order_status,
)
from rms.infrastructure.cli.payment_commands import payment_record
from rms.infrastructure.cli.product_commands import product_add, product_list, product_remove
from rms.infrastructure.cli.stock_commands import stock_set, stock_show
from rms.infrastructure.config import get_settings
from rms.infrastructure.logging_config import configure_logging


@click.group()
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON envelopes.")
@click.option("--verbose", is_flag=True, default=False, help="Log at DEBUG level.")
@click.pass_context
def cli(ctx: click.Context, as_json: bool, verbose: bool) -> None:
    """RMS: Rental Marketplace System"""
    configure_logging("DEBUG" if verbose else get_settings().log_level)
    ctx.obj = {"json": as_json}


@cli.group()
def product() -> None:
    """Manage the vendor catalog."""


@cli.group()
def stock() -> None:
    """Manage stock levels."""


@cli.group()
def cart() -> None:
    """Manage a customer's cart."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def invoice() -> None:
    """Manage invoices."""


@cli.group()
def payment() -> None:
    """Record payments."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_remove)
stock.add_command(stock_set)
stock.add_command(stock_show)
cart.add_command(cart_add)
cart.add_command(cart_remove)
cart.add_command(cart_show)
order.add_command(order_checkout)
order.add_command(order_list)
order.add_command(order_return_summary)
order.add_command(order_show)
order.add_command(order_status)
invoice.add_command(invoice_create)
invoice.add_command(invoice_status)
payment.add_command(payment_record)
