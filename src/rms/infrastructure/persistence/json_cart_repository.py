"""JSON-file-backed implementation of CartRepository."""

from __future__ import annotations

from rms.domain.model.cart import CartLine
from rms.domain.model.value_objects import DateWindow, Quantity
from rms.domain.repository.cart_repository import CartRepository
from rms.infrastructure.persistence.json_table import JsonTable, dt_from_raw, dt_to_raw


class JsonCartRepository(CartRepository):

    def __init__(self, table: JsonTable) -> None:
        self._table = table

    # --- CartRepository interface ---------------------------------------------

    def list_for_user(self, user_id: str) -> list[CartLine]:
        lines = [self._to_domain(r) for r in self._table.load() if r["user_id"] == user_id]
        return sorted(lines, key=lambda line: line.created_at)

    def get(self, user_id: str, product_id: str) -> CartLine | None:
        for raw in self._table.load():
            if raw["user_id"] == user_id and raw["product_id"] == product_id:
                return self._to_domain(raw)
        return None

    def save(self, line: CartLine) -> None:
        records = self._table.load()
        for i, raw in enumerate(records):
            if raw["user_id"] == line.user_id and raw["product_id"] == line.product_id:
                records[i] = self._to_raw(line)
                break
        else:
            records.append(self._to_raw(line))
        self._table.persist(records)

    def delete(self, user_id: str, product_id: str) -> None:
        self._table.persist(
            [
                r for r in self._table.load()
                if not (r["user_id"] == user_id and r["product_id"] == product_id)
            ]
        )

    def clear(self, user_id: str) -> None:
        self._table.persist([r for r in self._table.load() if r["user_id"] != user_id])

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(line: CartLine) -> dict:
        return {
            "user_id": line.user_id,
            "product_id": line.product_id,
            "quantity": line.quantity.value,
            "is_service": line.is_service,
            "start_date": dt_to_raw(line.start_date),
            "end_date": dt_to_raw(line.end_date),
            "created_at": dt_to_raw(line.created_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> CartLine:
        window = None
        if raw.get("start_date") and raw.get("end_date"):
            window = DateWindow(dt_from_raw(raw["start_date"]), dt_from_raw(raw["end_date"]))
        return CartLine(
            user_id=raw["user_id"],
            product_id=raw["product_id"],
            quantity=Quantity(raw["quantity"]),
            is_service=raw["is_service"],
            window=window,
            created_at=dt_from_raw(raw["created_at"]),
        )
