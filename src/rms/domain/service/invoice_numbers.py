"""Human-readable invoice numbers: ``PREFIX-YYYYMMDD-NNNN``."""

from __future__ import annotations

import random
from datetime import date


def generate_invoice_number(
    today: date, prefix: str = "INV", rng: random.Random | None = None
) -> str:
    suffix = (rng or random).randint(1000, 9999)
    return f"{prefix}-{today:%Y%m%d}-{suffix}"
