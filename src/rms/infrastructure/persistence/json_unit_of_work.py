"""JSON-file-backed Unit of Work.

All tables of a data directory share one re-entrant lock.  A
transaction holds that lock from start to finish, which serializes
transactions (no two check-then-reserve sequences can interleave), and
snapshots every file on entry so a failure can put them back.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from rms.domain.repository.unit_of_work import UnitOfWork
from rms.infrastructure.persistence.json_cart_repository import JsonCartRepository
from rms.infrastructure.persistence.json_invoice_repository import JsonInvoiceRepository
from rms.infrastructure.persistence.json_order_repository import JsonOrderRepository
from rms.infrastructure.persistence.json_payment_repository import JsonPaymentRepository
from rms.infrastructure.persistence.json_product_repository import JsonProductRepository
from rms.infrastructure.persistence.json_stock_repository import JsonStockRepository
from rms.infrastructure.persistence.json_table import JsonTable

logger = logging.getLogger(__name__)

TABLES = (
    "products",
    "stock",
    "stock_movements",
    "carts",
    "sales_orders",
    "sales_invoices",
    "payment_ledger",
)


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, data_dir: Path) -> None:
        self._lock = threading.RLock()
        self._tables = {
            name: JsonTable(data_dir / f"{name}.json", self._lock) for name in TABLES
        }
        self.products = JsonProductRepository(self._tables["products"])
        self.stock = JsonStockRepository(
            self._tables["stock"], self._tables["stock_movements"]
        )
        self.carts = JsonCartRepository(self._tables["carts"])
        self.orders = JsonOrderRepository(self._tables["sales_orders"])
        self.invoices = JsonInvoiceRepository(self._tables["sales_invoices"])
        self.payments = JsonPaymentRepository(self._tables["payment_ledger"])

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            snapshot = {
                table.file_path: table.file_path.read_text(encoding="utf-8")
                for table in self._tables.values()
            }
            try:
                yield
            except BaseException as exc:
                for path, content in snapshot.items():
                    path.write_text(content, encoding="utf-8")
                logger.warning("Transaction rolled back (%s: %s)", type(exc).__name__, exc)
                raise
