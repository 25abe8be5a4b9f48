"""JSON-file-backed implementation of InvoiceRepository."""

from __future__ import annotations

from rms.domain.model.invoice import DeliveryStatus, SalesInvoice
from rms.domain.repository.invoice_repository import InvoiceRepository
from rms.infrastructure.persistence.json_table import (
    JsonTable,
    dt_from_raw,
    dt_to_raw,
    money_from_raw,
    money_to_raw,
)


class JsonInvoiceRepository(InvoiceRepository):

    def __init__(self, table: JsonTable) -> None:
        self._table = table

    def _all(self) -> list[SalesInvoice]:
        return [self._to_domain(raw) for raw in self._table.load()]

    def save(self, invoice: SalesInvoice) -> None:
        if invoice.id is None:
            invoice.id = self._table.next_id()
        self._table.upsert(
            {
                "id": invoice.id,
                "order_id": invoice.order_id,
                "invoice_number": invoice.invoice_number,
                "delivery_status": invoice.delivery_status.value,
                "tax_amount": money_to_raw(invoice.tax_amount),
                "grand_total": money_to_raw(invoice.grand_total),
                "is_paid": invoice.is_paid,
                "created_at": dt_to_raw(invoice.created_at),
                "deleted_at": dt_to_raw(invoice.deleted_at),
            }
        )

    @staticmethod
    def _to_domain(raw: dict) -> SalesInvoice:
        return SalesInvoice(
            id=raw["id"],
            order_id=raw["order_id"],
            invoice_number=raw["invoice_number"],
            tax_amount=money_from_raw(raw["tax_amount"]),
            grand_total=money_from_raw(raw["grand_total"]),
            delivery_status=DeliveryStatus(raw["delivery_status"]),
            is_paid=raw.get("is_paid", False),
            created_at=dt_from_raw(raw["created_at"]),
            deleted_at=dt_from_raw(raw.get("deleted_at")),
        )
