"""Cart line: one per (customer, product).

Cart lines are ephemeral: created or updated by the customer and removed
on checkout or explicit removal.  Rental lines (``is_service``) must
carry a valid booking window; purchase lines carry none.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from rms.domain.exceptions import ValidationError
from rms.domain.model.value_objects import DateWindow, Quantity, utcnow


@dataclass
class CartLine:

    user_id: str
    product_id: str
    quantity: Quantity
    is_service: bool = True
    window: DateWindow | None = None
    created_at: datetime = field(default_factory=utcnow)

    @staticmethod
    def create(
        user_id: str,
        product_id: str,
        quantity: int,
        is_service: bool,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> CartLine:
        """Build a validated line.  Purchase lines drop any dates given."""
        window = None
        if is_service:
            if start_date is None or end_date is None:
                raise ValidationError(
                    "Start date and end date are required for rental items"
                )
            window = DateWindow(start_date, end_date)
        return CartLine(
            user_id=user_id,
            product_id=product_id,
            quantity=Quantity(quantity),
            is_service=is_service,
            window=window,
        )

    @property
    def start_date(self) -> datetime | None:
        return self.window.start if self.window else None

    @property
    def end_date(self) -> datetime | None:
        return self.window.end if self.window else None
