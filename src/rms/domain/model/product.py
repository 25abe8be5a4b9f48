"""Product aggregate.

Products are owned by a vendor and live independently of orders.  Orders
capture a price snapshot, so catalog changes never rewrite history.
Products are soft-deleted, never removed while orders reference them.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from rms.domain.exceptions import ValidationError
from rms.domain.model.soft_delete import SoftDeletable
from rms.domain.model.value_objects import Money


@dataclass
class Product(SoftDeletable):
    """A rentable / sellable item in a vendor's catalog.

    ``daily_price`` is the canonical unit price used for both rental
    (per day) and purchase (per unit) pricing.
    """

    id: str
    vendor_id: str
    name: str
    daily_price: Money
    hourly_price: Money | None = None
    weekly_price: Money | None = None
    monthly_price: Money | None = None
    discount_percentage: Decimal = Decimal("0")
    tax_percentage: Decimal = Decimal("0")
    security_deposit: Money | None = None
    is_available: bool = True
    is_published: bool = False

    def __post_init__(self) -> None:
        if self.daily_price.amount <= 0:
            raise ValidationError("Daily price must be greater than zero")
        for label, pct in (
            ("Discount", self.discount_percentage),
            ("Tax", self.tax_percentage),
        ):
            if not Decimal("0") <= pct <= Decimal("100"):
                raise ValidationError(f"{label} percentage must be between 0 and 100")

    @property
    def deposit_per_unit(self) -> Money:
        return self.security_deposit or Money.zero()

    @property
    def is_orderable(self) -> bool:
        return self.is_active and self.is_available
