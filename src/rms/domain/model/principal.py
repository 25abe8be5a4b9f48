"""The authenticated caller, as supplied by the identity provider."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    ADMIN = "ADMIN"
    VENDOR = "VENDOR"
    CUSTOMER = "CUSTOMER"


@dataclass(frozen=True)
class Principal:
    id: str
    role: Role

    @staticmethod
    def vendor(user_id: str) -> Principal:
        return Principal(id=user_id, role=Role.VENDOR)

    @staticmethod
    def customer(user_id: str) -> Principal:
        return Principal(id=user_id, role=Role.CUSTOMER)
