"""CLI commands for the payment ledger."""

from __future__ import annotations

from datetime import datetime

import click

from rms.application.record_payment import RecordPaymentHandler
from rms.domain.model.principal import Principal
from rms.infrastructure.bootstrap import unit_of_work
from rms.infrastructure.cli.common import DATE_FORMATS, emit, run


@click.command("record")
@click.option("--vendor", required=True, help="Acting vendor ID.")
@click.option("--order", "order_id", required=True, type=int, help="Order ID.")
@click.option("--amount", required=True, help="Amount paid (e.g. 500.00).")
@click.option("--reference", default=None, help="Payment reference.")
@click.option("--period-start", type=click.DateTime(DATE_FORMATS), default=None)
@click.option("--period-end", type=click.DateTime(DATE_FORMATS), default=None)
def payment_record(
    vendor: str,
    order_id: int,
    amount: str,
    reference: str | None,
    period_start: datetime | None,
    period_end: datetime | None,
) -> None:
    """Record a payment received against an order."""
    if (period_start is None) != (period_end is None):
        raise click.UsageError("--period-start and --period-end must be given together")
    handler = RecordPaymentHandler(unit_of_work())
    dto = run(
        lambda: handler.handle(
            Principal.vendor(vendor),
            order_id,
            amount,
            reference=reference,
            period_start=period_start,
            period_end=period_end,
        )
    )
    emit(
        "Payment recorded",
        dto,
        lambda p: click.echo(f"Payment #{p.id} of {p.amount_paid} recorded for order #{p.order_id}"),
    )
