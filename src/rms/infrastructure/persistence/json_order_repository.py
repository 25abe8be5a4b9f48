"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from rms.domain.model.order import OrderStatus, PaymentPlan, SalesOrder, SalesOrderDetail
from rms.domain.model.value_objects import Quantity
from rms.domain.repository.order_repository import OrderRepository
from rms.infrastructure.persistence.json_table import (
    JsonTable,
    dt_from_raw,
    dt_to_raw,
    money_from_raw,
    money_to_raw,
)


class JsonOrderRepository(OrderRepository):

    def __init__(self, table: JsonTable) -> None:
        self._table = table

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        return self._table.next_id()

    def _all(self) -> list[SalesOrder]:
        return [self._to_domain(raw) for raw in self._table.load()]

    def save(self, order: SalesOrder) -> None:
        if order.id is None:
            order.id = self.next_id()
        for line_no, detail in enumerate(order.details, start=1):
            if detail.id is None:
                detail.id = line_no
        self._table.upsert(self._to_raw(order))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: SalesOrder) -> dict:
        return {
            "id": order.id,
            "customer_id": order.customer_id,
            "vendor_id": order.vendor_id,
            "is_service": order.is_service,
            "status": order.status.value,
            "payment_plan": order.payment_plan.value,
            "created_at": dt_to_raw(order.created_at),
            "deleted_at": dt_to_raw(order.deleted_at),
            "details": [
                {
                    "id": d.id,
                    "product_id": d.product_id,
                    "product_name": d.product_name,
                    "quantity": d.quantity.value,
                    "unit_price": money_to_raw(d.unit_price),
                    "subtotal": money_to_raw(d.subtotal),
                    "deposit_total": money_to_raw(d.deposit_total),
                    "start_date": dt_to_raw(d.start_date),
                    "end_date": dt_to_raw(d.end_date),
                }
                for d in order.details
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> SalesOrder:
        details = [
            SalesOrderDetail(
                id=d["id"],
                product_id=d["product_id"],
                product_name=d["product_name"],
                quantity=Quantity(d["quantity"]),
                unit_price=money_from_raw(d["unit_price"]),
                subtotal=money_from_raw(d["subtotal"]),
                deposit_total=money_from_raw(d["deposit_total"]),
                start_date=dt_from_raw(d.get("start_date")),
                end_date=dt_from_raw(d.get("end_date")),
            )
            for d in raw["details"]
        ]
        return SalesOrder(
            id=raw["id"],
            customer_id=raw["customer_id"],
            vendor_id=raw["vendor_id"],
            is_service=raw["is_service"],
            details=details,
            status=OrderStatus(raw["status"]),
            payment_plan=PaymentPlan(raw["payment_plan"]),
            created_at=dt_from_raw(raw["created_at"]),
            deleted_at=dt_from_raw(raw.get("deleted_at")),
        )
