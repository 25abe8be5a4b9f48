"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer (and the response envelope) can catch them uniformly.
Each class carries the HTTP-equivalent status it maps to.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""

    status_code = 400


class ValidationError(DomainException):
    """Malformed input or a violated business rule."""


class EmptyCartError(ValidationError):
    """Checkout was attempted with nothing in the cart."""


class InvalidTransitionError(ValidationError):
    """A status change that the state machine does not allow."""


class NotFoundError(DomainException):
    """A requested entity does not exist."""

    status_code = 404


class UnauthorizedError(DomainException):
    """The caller may not act on the resource."""

    status_code = 403


class InsufficientStockError(DomainException):
    """Not enough free stock for the requested quantity (and window)."""

    status_code = 409

    def __init__(
        self,
        message: str,
        product_id: str | None = None,
        requested: int | None = None,
        available: int | None = None,
    ) -> None:
        super().__init__(message)
        self.product_id = product_id
        self.requested = requested
        self.available = available
