"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals.  Amounts stay Decimal; formatting is the
caller's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from rms.domain.model.cart import CartLine
from rms.domain.model.invoice import SalesInvoice
from rms.domain.model.order import SalesOrder
from rms.domain.model.payment import PaymentLedgerEntry
from rms.domain.model.product import Product
from rms.domain.service.settlement_calculator import ReturnSummary


@dataclass(frozen=True)
class ProductDTO:
    id: str
    vendor_id: str
    name: str
    daily_price: Decimal
    security_deposit: Decimal
    tax_percentage: Decimal


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    product_name: str
    quantity: int
    is_service: bool
    start_date: datetime | None
    end_date: datetime | None


@dataclass(frozen=True)
class OrderDetailDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: Decimal
    subtotal: Decimal
    deposit_total: Decimal
    start_date: datetime | None
    end_date: datetime | None


@dataclass(frozen=True)
class OrderDTO:
    id: int
    customer_id: str
    vendor_id: str
    is_service: bool
    status: str
    payment_plan: str
    total_order_value: Decimal
    total_deposit: Decimal
    details: list[OrderDetailDTO]
    created_at: datetime


@dataclass(frozen=True)
class InvoiceDTO:
    id: int
    order_id: int
    invoice_number: str
    delivery_status: str
    tax_amount: Decimal
    grand_total: Decimal
    is_paid: bool


@dataclass(frozen=True)
class PaymentDTO:
    id: int
    order_id: int
    amount_paid: Decimal
    reference: str | None
    period_start: datetime | None
    period_end: datetime | None


@dataclass(frozen=True)
class ReturnSummaryDTO:
    order_id: int
    grand_total: Decimal
    total_paid: Decimal
    total_deposit: Decimal
    total_late_fee: Decimal
    final_payment: Decimal
    refund_due: bool


@dataclass(frozen=True)
class StockLevelDTO:
    product_id: str
    product_name: str
    total: int
    booked: int
    available: int


# --- Mapping ------------------------------------------------------------------


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        vendor_id=product.vendor_id,
        name=product.name,
        daily_price=product.daily_price.amount,
        security_deposit=product.deposit_per_unit.amount,
        tax_percentage=product.tax_percentage,
    )


def cart_line_to_dto(line: CartLine, product_name: str) -> CartLineDTO:
    return CartLineDTO(
        product_id=line.product_id,
        product_name=product_name,
        quantity=line.quantity.value,
        is_service=line.is_service,
        start_date=line.start_date,
        end_date=line.end_date,
    )


def order_to_dto(order: SalesOrder) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer_id=order.customer_id,
        vendor_id=order.vendor_id,
        is_service=order.is_service,
        status=order.status.value,
        payment_plan=order.payment_plan.value,
        total_order_value=order.total_order_value.amount,
        total_deposit=order.total_deposit.amount,
        details=[
            OrderDetailDTO(
                product_id=d.product_id,
                product_name=d.product_name,
                quantity=d.quantity.value,
                unit_price=d.unit_price.amount,
                subtotal=d.subtotal.amount,
                deposit_total=d.deposit_total.amount,
                start_date=d.start_date,
                end_date=d.end_date,
            )
            for d in order.details
        ],
        created_at=order.created_at,
    )


def invoice_to_dto(invoice: SalesInvoice) -> InvoiceDTO:
    return InvoiceDTO(
        id=invoice.id,  # type: ignore[arg-type]
        order_id=invoice.order_id,
        invoice_number=invoice.invoice_number,
        delivery_status=invoice.delivery_status.value,
        tax_amount=invoice.tax_amount.amount,
        grand_total=invoice.grand_total.amount,
        is_paid=invoice.is_paid,
    )


def payment_to_dto(entry: PaymentLedgerEntry) -> PaymentDTO:
    return PaymentDTO(
        id=entry.id,  # type: ignore[arg-type]
        order_id=entry.order_id,
        amount_paid=entry.amount_paid.amount,
        reference=entry.reference,
        period_start=entry.period.start if entry.period else None,
        period_end=entry.period.end if entry.period else None,
    )


def return_summary_to_dto(summary: ReturnSummary) -> ReturnSummaryDTO:
    return ReturnSummaryDTO(
        order_id=summary.order_id,
        grand_total=summary.grand_total.amount,
        total_paid=summary.total_paid.amount,
        total_deposit=summary.total_deposit.amount,
        total_late_fee=summary.total_late_fee.amount,
        final_payment=summary.final_payment,
        refund_due=summary.refund_due,
    )
