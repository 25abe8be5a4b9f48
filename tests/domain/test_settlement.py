"""Unit tests for the return SettlementCalculator."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from rms.domain.model.invoice import SalesInvoice
from rms.domain.model.order import SalesOrder, SalesOrderDetail
from rms.domain.model.payment import PaymentLedgerEntry
from rms.domain.model.value_objects import Money, Quantity
from rms.domain.service.settlement_calculator import calculate_return, late_fee

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
END = T0 + timedelta(days=3)


def _detail(qty: int = 2, unit: str = "100.00", deposit: str = "500.00") -> SalesOrderDetail:
    return SalesOrderDetail(
        product_id="1",
        product_name="Tent",
        quantity=Quantity(qty),
        unit_price=Money.of(unit),
        subtotal=Money.of(unit) * qty * 3,
        deposit_total=Money.of(deposit),
        start_date=T0,
        end_date=END,
    )


def _order(*details: SalesOrderDetail) -> SalesOrder:
    return SalesOrder(id=1, customer_id="c1", vendor_id="v1", is_service=True, details=list(details))


def _invoice(grand_total: str) -> SalesInvoice:
    return SalesInvoice(
        id=1, order_id=1, invoice_number="INV-1",
        tax_amount=Money.zero(), grand_total=Money.of(grand_total),
    )


def _payment(amount: str) -> PaymentLedgerEntry:
    return PaymentLedgerEntry(id=1, order_id=1, amount_paid=Money.of(amount))


class TestLateFee:

    def test_on_time_is_free(self):
        assert late_fee(_detail(), END).is_zero

    def test_late_days_round_up(self):
        # 100 * 2 units * 3 days (2 days and 1 hour late)
        fee = late_fee(_detail(), END + timedelta(days=2, hours=1))
        assert fee == Money.of("600.00")


class TestCalculateReturn:

    def test_paid_in_full_on_time_refunds_deposit(self):
        summary = calculate_return(
            _order(_detail()), [_invoice("1475.00")], [_payment("1475.00")], END
        )
        assert summary.final_payment == Decimal("500.00")
        assert summary.refund_due

    def test_late_return_eats_into_deposit(self):
        summary = calculate_return(
            _order(_detail()),
            [_invoice("1475.00")],
            [_payment("1475.00")],
            END + timedelta(days=3),
        )
        assert summary.total_late_fee == Money.of("600.00")
        assert summary.final_payment == Decimal("-100.00")
        assert not summary.refund_due

    def test_unpaid_balance_is_owed(self):
        summary = calculate_return(
            _order(_detail(deposit="0")), [_invoice("1000.00")], [_payment("400.00")], END
        )
        assert summary.final_payment == Decimal("-600.00")

    def test_no_invoices_no_payments(self):
        summary = calculate_return(_order(_detail()), [], [], END)
        assert summary.grand_total.is_zero
        assert summary.final_payment == Decimal("500.00")

    def test_multiple_invoices_and_payments_are_summed(self):
        summary = calculate_return(
            _order(_detail()),
            [_invoice("1000.00"), _invoice("475.00")],
            [_payment("1000.00"), _payment("475.00")],
            END,
        )
        assert summary.grand_total == Money.of("1475.00")
        assert summary.total_paid == Money.of("1475.00")
