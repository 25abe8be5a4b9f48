"""JSON-file-backed implementation of PaymentRepository (append-only)."""

from __future__ import annotations

from rms.domain.model.payment import PaymentLedgerEntry, PaymentPeriod
from rms.domain.repository.payment_repository import PaymentRepository
from rms.infrastructure.persistence.json_table import (
    JsonTable,
    dt_from_raw,
    dt_to_raw,
    money_from_raw,
    money_to_raw,
)


class JsonPaymentRepository(PaymentRepository):

    def __init__(self, table: JsonTable) -> None:
        self._table = table

    def _all(self) -> list[PaymentLedgerEntry]:
        return [self._to_domain(raw) for raw in self._table.load()]

    def add(self, entry: PaymentLedgerEntry) -> None:
        records = self._table.load()
        entry.id = max((r["id"] for r in records), default=0) + 1
        records.append(
            {
                "id": entry.id,
                "order_id": entry.order_id,
                "amount_paid": money_to_raw(entry.amount_paid),
                "paid_period_start": dt_to_raw(entry.period.start if entry.period else None),
                "paid_period_end": dt_to_raw(entry.period.end if entry.period else None),
                "payment_reference": entry.reference,
                "created_at": dt_to_raw(entry.created_at),
                "deleted_at": dt_to_raw(entry.deleted_at),
            }
        )
        self._table.persist(records)

    @staticmethod
    def _to_domain(raw: dict) -> PaymentLedgerEntry:
        period = None
        if raw.get("paid_period_start") and raw.get("paid_period_end"):
            period = PaymentPeriod(
                dt_from_raw(raw["paid_period_start"]), dt_from_raw(raw["paid_period_end"])
            )
        return PaymentLedgerEntry(
            id=raw["id"],
            order_id=raw["order_id"],
            amount_paid=money_from_raw(raw["amount_paid"]),
            period=period,
            reference=raw.get("payment_reference"),
            created_at=dt_from_raw(raw["created_at"]),
            deleted_at=dt_from_raw(raw.get("deleted_at")),
        )
