"""Unit tests for SalesInvoice delivery transitions and invoice numbers."""

import random
import re
from datetime import date

import pytest

from rms.domain.exceptions import InvalidTransitionError
from rms.domain.model.invoice import DeliveryStatus, SalesInvoice
from rms.domain.model.value_objects import Money
from rms.domain.service.invoice_numbers import generate_invoice_number


def _invoice(status: DeliveryStatus = DeliveryStatus.PROCESSING) -> SalesInvoice:
    return SalesInvoice(
        id=1,
        order_id=1,
        invoice_number="INV-20240101-1234",
        tax_amount=Money.of("18.00"),
        grand_total=Money.of("118.00"),
        delivery_status=status,
    )


class TestDeliverySequence:

    def test_forward_steps(self):
        invoice = _invoice()
        invoice.advance_to(DeliveryStatus.DISPATCHED)
        invoice.advance_to(DeliveryStatus.DELIVERED)
        assert invoice.delivery_status is DeliveryStatus.DELIVERED

    def test_skipping_a_step_rejected(self):
        invoice = _invoice()
        with pytest.raises(
            InvalidTransitionError,
            match="Invalid status transition from PROCESSING to DELIVERED",
        ):
            invoice.advance_to(DeliveryStatus.DELIVERED)
        assert invoice.delivery_status is DeliveryStatus.PROCESSING

    def test_going_back_rejected(self):
        with pytest.raises(InvalidTransitionError):
            _invoice(DeliveryStatus.DISPATCHED).advance_to(DeliveryStatus.PROCESSING)

    def test_completed_cannot_be_set_by_vendor(self):
        with pytest.raises(InvalidTransitionError):
            _invoice(DeliveryStatus.DELIVERED).advance_to(DeliveryStatus.COMPLETED)

    def test_returned_is_terminal(self):
        with pytest.raises(InvalidTransitionError):
            _invoice(DeliveryStatus.RETURNED).advance_to(DeliveryStatus.DISPATCHED)

    def test_complete(self):
        invoice = _invoice(DeliveryStatus.DELIVERED)
        invoice.complete()
        assert invoice.delivery_status is DeliveryStatus.COMPLETED


class TestInvoiceNumbers:

    def test_format(self):
        number = generate_invoice_number(date(2024, 3, 5))
        assert re.fullmatch(r"INV-20240305-\d{4}", number)

    def test_prefix_and_seeded_rng(self):
        a = generate_invoice_number(date(2024, 3, 5), prefix="RNT", rng=random.Random(7))
        b = generate_invoice_number(date(2024, 3, 5), prefix="RNT", rng=random.Random(7))
        assert a == b
        assert a.startswith("RNT-20240305-")
