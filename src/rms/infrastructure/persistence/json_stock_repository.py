"""JSON-file-backed implementation of StockRepository.

Stock rows and movements live in two separate files.
"""

from __future__ import annotations

from rms.domain.model.stock import MoveType, Stock, StockMovement
from rms.domain.repository.stock_repository import StockRepository
from rms.infrastructure.persistence.json_table import JsonTable, dt_from_raw, dt_to_raw


class JsonStockRepository(StockRepository):

    def __init__(self, stock_table: JsonTable, movement_table: JsonTable) -> None:
        self._stock = stock_table
        self._movements = movement_table

    # --- StockRepository interface --------------------------------------------

    def get_stock(self, product_id: str) -> Stock | None:
        for raw in self._stock.load():
            if raw["product_id"] == product_id:
                return Stock(
                    product_id=raw["product_id"],
                    total_physical_quantity=raw["total_physical_quantity"],
                )
        return None

    def save_stock(self, stock: Stock) -> None:
        self._stock.upsert(
            {
                "product_id": stock.product_id,
                "total_physical_quantity": stock.total_physical_quantity,
            },
            key="product_id",
        )

    def _all_movements(self) -> list[StockMovement]:
        return [self._to_domain(raw) for raw in self._movements.load()]

    def save_movement(self, movement: StockMovement) -> None:
        if movement.id is None:
            movement.id = self._movements.next_id()
        self._movements.upsert(self._to_raw(movement))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(m: StockMovement) -> dict:
        return {
            "id": m.id,
            "product_id": m.product_id,
            "order_id": m.order_id,
            "move_type": m.move_type.value,
            "quantity": m.quantity,
            "start_date": dt_to_raw(m.start_date),
            "end_date": dt_to_raw(m.end_date),
            "deleted_at": dt_to_raw(m.deleted_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> StockMovement:
        return StockMovement(
            id=raw["id"],
            product_id=raw["product_id"],
            move_type=MoveType(raw["move_type"]),
            quantity=raw["quantity"],
            start_date=dt_from_raw(raw["start_date"]),
            end_date=dt_from_raw(raw["end_date"]),
            order_id=raw.get("order_id"),
            deleted_at=dt_from_raw(raw.get("deleted_at")),
        )
