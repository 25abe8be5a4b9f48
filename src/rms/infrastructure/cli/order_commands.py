"""CLI commands for the SalesOrder aggregate."""

from __future__ import annotations

import click

from rms.application.calculate_return import CalculateReturnHandler
from rms.application.checkout_cart import CheckoutCartHandler
from rms.application.list_orders import ListOrdersHandler
from rms.application.show_order import ShowOrderHandler
from rms.application.update_order_status import UpdateOrderStatusHandler
from rms.domain.model.order import OrderStatus
from rms.domain.model.principal import Principal, Role
from rms.infrastructure.bootstrap import notifier, unit_of_work
from rms.infrastructure.cli.common import emit, fmt_date, run

ROLE_CHOICE = click.Choice([r.value for r in Role], case_sensitive=False)


def _principal(user: str, role: str) -> Principal:
    return Principal(user, Role(role.upper()))


def _print_order(dto) -> None:
    kind = "rental" if dto.is_service else "purchase"
    click.echo(f"Order #{dto.id} ({kind}, status={dto.status})")
    click.echo(f"Customer: {dto.customer_id}   Vendor: {dto.vendor_id}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Unit':>10} {'Subtotal':>10} {'Start':<17} {'End':<17}")
    click.echo(f"  {'-'*84}")
    for d in dto.details:
        click.echo(
            f"  {d.product_name:<20} {d.quantity:>5} {d.unit_price:>10} {d.subtotal:>10} "
            f"{fmt_date(d.start_date):<17} {fmt_date(d.end_date):<17}"
        )
    click.echo(f"  {'-'*84}")
    click.echo(f"  {'Total':<20} {'':>5} {'':>10} {dto.total_order_value:>10}")
    click.echo(f"  Deposit: {dto.total_deposit}")


@click.command("checkout")
@click.option("--customer", required=True, help="Acting customer ID.")
def order_checkout(customer: str) -> None:
    """Turn the cart into one order per vendor and fulfillment type."""
    handler = CheckoutCartHandler(unit_of_work(), notifier=notifier())
    orders = run(lambda: handler.handle(Principal.customer(customer)))

    def render(items) -> None:
        for dto in items:
            _print_order(dto)
            click.echo()

    emit("Orders created successfully", orders, render)


@click.command("status")
@click.option("--vendor", required=True, help="Acting vendor ID.")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--status",
    "new_status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    help="Target status.",
)
def order_status(vendor: str, order_id: int, new_status: str) -> None:
    """Move an order to another status."""
    handler = UpdateOrderStatusHandler(unit_of_work(), notifier=notifier())
    dto = run(
        lambda: handler.handle(
            Principal.vendor(vendor), order_id, OrderStatus(new_status.upper())
        )
    )
    emit(
        "Order status updated",
        dto,
        lambda o: click.echo(f"Order #{o.id} is now {o.status}"),
    )


@click.command("show")
@click.option("--user", required=True, help="Acting user ID.")
@click.option("--role", required=True, type=ROLE_CHOICE, help="Acting user's role.")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
def order_show(user: str, role: str, order_id: int) -> None:
    """Show order details with its invoices and payments."""
    handler = ShowOrderHandler(unit_of_work())
    details = run(lambda: handler.handle(_principal(user, role), order_id))

    def render(d) -> None:
        _print_order(d.order)
        for inv in d.invoices:
            click.echo(
                f"  Invoice {inv.invoice_number}: {inv.delivery_status}, "
                f"tax {inv.tax_amount}, grand total {inv.grand_total}"
            )
        for p in d.payments:
            click.echo(f"  Payment #{p.id}: {p.amount_paid} ({p.reference or '-'})")

    emit("Order details", details, render)


@click.command("list")
@click.option("--user", required=True, help="Acting user ID.")
@click.option("--role", required=True, type=ROLE_CHOICE, help="Acting user's role.")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--limit", default=10, show_default=True, type=int)
def order_list(user: str, role: str, page: int, limit: int) -> None:
    """List orders visible to the user, newest first."""
    handler = ListOrdersHandler(unit_of_work())
    result = run(lambda: handler.handle(_principal(user, role), page=page, limit=limit))

    def render(p) -> None:
        if not p.data:
            click.echo("No orders found.")
            return
        click.echo(f"{'ID':<6} {'Status':<11} {'Total':>10} {'Pending':>10} {'Invoice':<18} Products")
        click.echo("-" * 80)
        for view in p.data:
            click.echo(
                f"{view.id:<6} {view.status:<11} {view.total_order_value:>10} "
                f"{view.payment_amount_pending:>10} {view.invoice_number or '-':<18} "
                f"{', '.join(view.product_names)}"
            )
            if view.message:
                click.echo(f"       ! {view.message}")
        click.echo(f"Page {p.page}/{max(p.total_pages, 1)} ({p.total} orders)")

    emit(
        "Orders",
        {
            "data": result.data,
            "total": result.total,
            "page": result.page,
            "limit": result.limit,
            "total_pages": result.total_pages,
        },
        lambda _: render(result),
    )


@click.command("return-summary")
@click.option("--user", required=True, help="Acting user ID.")
@click.option("--role", required=True, type=ROLE_CHOICE, help="Acting user's role.")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
def order_return_summary(user: str, role: str, order_id: int) -> None:
    """Settle a returned order: deposit and payments against total and late fees."""
    handler = CalculateReturnHandler(unit_of_work())
    summary = run(lambda: handler.handle(_principal(user, role), order_id))

    def render(s) -> None:
        click.echo(f"Order #{s.order_id} return summary")
        click.echo(f"  Grand total:  {s.grand_total:>10}")
        click.echo(f"  Paid:         {s.total_paid:>10}")
        click.echo(f"  Deposit:      {s.total_deposit:>10}")
        click.echo(f"  Late fees:    {s.total_late_fee:>10}")
        if s.refund_due:
            label = "Refund due"
        elif s.final_payment:
            label = "Amount owed"
        else:
            label = "Settled"
        click.echo(f"  {label + ':':<14}{abs(s.final_payment):>10}")

    emit("Return processed", summary, render)
