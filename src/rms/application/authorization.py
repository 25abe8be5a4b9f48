"""Role and ownership checks applied at the top of every use case."""

from __future__ import annotations

from rms.domain.exceptions import UnauthorizedError
from rms.domain.model.principal import Principal, Role


def require_role(principal: Principal, *roles: Role) -> None:
    if principal.role not in roles:
        allowed = " or ".join(r.value for r in roles)
        raise UnauthorizedError(f"Only {allowed} users may perform this action")


def require_owner(principal: Principal, owner_id: str, resource: str) -> None:
    if principal.id != owner_id:
        raise UnauthorizedError(f"Unauthorized access to this {resource}")


def require_party(principal: Principal, order) -> None:
    """Allow the order's customer, its vendor, or an admin."""
    if principal.role is Role.ADMIN:
        return
    if principal.id not in (order.customer_id, order.vendor_id):
        raise UnauthorizedError("Unauthorized access to this order")
