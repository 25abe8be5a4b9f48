"""Abstract repository for the append-only payment ledger."""

from __future__ import annotations

from abc import ABC, abstractmethod

from rms.domain.model.payment import PaymentLedgerEntry
from rms.domain.model.soft_delete import active


class PaymentRepository(ABC):

    @abstractmethod
    def _all(self) -> list[PaymentLedgerEntry]:
        """Return every stored entry, deleted ones included."""

    @abstractmethod
    def add(self, entry: PaymentLedgerEntry) -> None:
        """Append a new entry (assigns its id).  Entries are never updated."""

    def list_for_order(self, order_id: int) -> list[PaymentLedgerEntry]:
        return [e for e in active(self._all()) if e.order_id == order_id]
