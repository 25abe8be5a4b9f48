"""Application service: Show Stock use case (query)."""

from __future__ import annotations

from rms.application.dto import StockLevelDTO
from rms.domain.exceptions import NotFoundError
from rms.domain.model.value_objects import DateWindow
from rms.domain.repository.unit_of_work import UnitOfWork
from rms.domain.service.inventory_ledger import InventoryLedger


class ShowStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        product_id: str | None = None,
        window: DateWindow | None = None,
    ) -> list[StockLevelDTO]:
        """Stock levels, optionally for one product and over a booking window."""
        with self._uow.transaction():
            if product_id is not None:
                product = self._uow.products.get_by_id(product_id)
                if product is None:
                    raise NotFoundError(f"Product not found: '{product_id}'")
                products = [product]
            else:
                products = self._uow.products.list_all()

            ledger = InventoryLedger(self._uow.stock)
            lines = []
            for product in products:
                level = ledger.level(product.id, window)
                lines.append(
                    StockLevelDTO(
                        product_id=product.id,
                        product_name=product.name,
                        total=level.total,
                        booked=level.booked,
                        available=level.available,
                    )
                )
        return lines
