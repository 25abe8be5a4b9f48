"""Domain service: Settlement Calculator.

Closes out a returned order:

    final_payment = total_deposit + total_paid - grand_total - total_late_fee

A positive result is a refund owed to the customer; a negative one is
still owed by the customer.  Late fees accrue per overdue line as
``unit_price * quantity * late_days`` where late days round up.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from rms.domain.model.invoice import SalesInvoice
from rms.domain.model.order import SalesOrder, SalesOrderDetail
from rms.domain.model.payment import PaymentLedgerEntry
from rms.domain.model.value_objects import Money, days_between


@dataclass(frozen=True)
class ReturnSummary:

    order_id: int
    grand_total: Money
    total_paid: Money
    total_deposit: Money
    total_late_fee: Money
    final_payment: Decimal  # signed

    @property
    def refund_due(self) -> bool:
        return self.final_payment > 0


def late_fee(detail: SalesOrderDetail, now: datetime) -> Money:
    if not detail.is_overdue(now):
        return Money.zero()
    late_days = days_between(detail.end_date, now)
    return detail.unit_price * detail.quantity.value * late_days


def calculate_return(
    order: SalesOrder,
    invoices: list[SalesInvoice],
    payments: list[PaymentLedgerEntry],
    now: datetime,
) -> ReturnSummary:
    grand_total = Money.total(invoice.grand_total for invoice in invoices)
    total_paid = Money.total(entry.amount_paid for entry in payments)
    total_deposit = order.total_deposit
    total_late_fee = Money.total(late_fee(detail, now) for detail in order.details)

    final_payment = (
        total_deposit.amount
        + total_paid.amount
        - grand_total.amount
        - total_late_fee.amount
    )
    return ReturnSummary(
        order_id=order.id,
        grand_total=grand_total,
        total_paid=total_paid,
        total_deposit=total_deposit,
        total_late_fee=total_late_fee,
        final_payment=final_payment,
    )
