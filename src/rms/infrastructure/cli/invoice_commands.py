"""CLI commands for the SalesInvoice aggregate."""

from __future__ import annotations

import click

from rms.application.update_invoice_status import UpdateInvoiceStatusHandler
from rms.domain.model.invoice import DeliveryStatus
from rms.domain.model.principal import Principal
from rms.infrastructure.bootstrap import create_invoice_handler, unit_of_work
from rms.infrastructure.cli.common import emit, run


def _render(inv) -> None:
    click.echo(f"Invoice #{inv.id} {inv.invoice_number} for order #{inv.order_id}")
    click.echo(f"  Tax:         {inv.tax_amount}")
    click.echo(f"  Grand total: {inv.grand_total}")
    click.echo(f"  Delivery:    {inv.delivery_status}")


@click.command("create")
@click.option("--vendor", required=True, help="Acting vendor ID.")
@click.option("--order", "order_id", required=True, type=int, help="Order ID.")
def invoice_create(vendor: str, order_id: int) -> None:
    """Raise an invoice for an order."""
    handler = create_invoice_handler()
    dto = run(lambda: handler.handle(Principal.vendor(vendor), order_id))
    emit("Invoice created", dto, _render)


@click.command("status")
@click.option("--vendor", required=True, help="Acting vendor ID.")
@click.option("--id", "invoice_id", required=True, type=int, help="Invoice ID.")
@click.option(
    "--status",
    "new_status",
    required=True,
    type=click.Choice([s.value for s in DeliveryStatus], case_sensitive=False),
    help="Next delivery status.",
)
def invoice_status(vendor: str, invoice_id: int, new_status: str) -> None:
    """Advance an invoice's delivery status."""
    handler = UpdateInvoiceStatusHandler(unit_of_work())
    dto = run(
        lambda: handler.handle(
            Principal.vendor(vendor), invoice_id, DeliveryStatus(new_status.upper())
        )
    )
    emit("Invoice status updated", dto, _render)
