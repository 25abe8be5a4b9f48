"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from datetime import date
from functools import lru_cache

from rms.application.create_invoice import CreateInvoiceHandler
from rms.domain.service.invoice_numbers import generate_invoice_number
from rms.infrastructure.config import get_settings
from rms.infrastructure.notifications import LoggingNotifier
from rms.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork


@lru_cache()
def unit_of_work() -> JsonUnitOfWork:
    # Single instance per process: handlers share its store lock.
    return JsonUnitOfWork(get_settings().data_dir)


def notifier() -> LoggingNotifier:
    return LoggingNotifier()


def create_invoice_handler() -> CreateInvoiceHandler:
    settings = get_settings()

    def number_factory(today: date) -> str:
        return generate_invoice_number(today, prefix=settings.invoice_prefix)

    return CreateInvoiceHandler(
        unit_of_work(),
        number_factory=number_factory,
        max_attempts=settings.invoice_number_attempts,
    )
