"""Unit of Work: groups repository writes into one atomic transaction.

Implementations guarantee serializable isolation: a transaction holds the
store exclusively from its first read to its commit, and any exception
raised inside ``transaction()`` restores the store to the state it had
on entry before propagating.  This makes check-then-reserve sequences
atomic under concurrent requests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from rms.domain.repository.cart_repository import CartRepository
from rms.domain.repository.invoice_repository import InvoiceRepository
from rms.domain.repository.order_repository import OrderRepository
from rms.domain.repository.payment_repository import PaymentRepository
from rms.domain.repository.product_repository import ProductRepository
from rms.domain.repository.stock_repository import StockRepository


class UnitOfWork(ABC):

    products: ProductRepository
    stock: StockRepository
    carts: CartRepository
    orders: OrderRepository
    invoices: InvoiceRepository
    payments: PaymentRepository

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """Run the enclosed block atomically; roll back on any exception."""
