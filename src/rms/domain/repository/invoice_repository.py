"""Abstract repository for SalesInvoice records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from rms.domain.model.invoice import SalesInvoice
from rms.domain.model.soft_delete import active


class InvoiceRepository(ABC):

    @abstractmethod
    def _all(self) -> list[SalesInvoice]:
        """Return every stored invoice, deleted ones included."""

    @abstractmethod
    def save(self, invoice: SalesInvoice) -> None:
        """Persist a new or updated invoice (assigns the id when new)."""

    def get_by_id(self, invoice_id: int) -> SalesInvoice | None:
        for invoice in active(self._all()):
            if invoice.id == invoice_id:
                return invoice
        return None

    def list_for_order(self, order_id: int) -> list[SalesInvoice]:
        invoices = [i for i in active(self._all()) if i.order_id == order_id]
        return sorted(invoices, key=lambda i: (i.created_at, i.id or 0))

    def number_exists(self, invoice_number: str) -> bool:
        # Uniqueness spans deleted invoices too.
        return any(i.invoice_number == invoice_number for i in self._all())
