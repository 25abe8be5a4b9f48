"""Abstract repository for cart lines."""

from __future__ import annotations

from abc import ABC, abstractmethod

from rms.domain.model.cart import CartLine


class CartRepository(ABC):

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[CartLine]:
        """Return the user's cart lines, oldest first."""

    @abstractmethod
    def get(self, user_id: str, product_id: str) -> CartLine | None:
        """Return the unique line for (user, product), or None."""

    @abstractmethod
    def save(self, line: CartLine) -> None:
        """Insert or replace the (user, product) line."""

    @abstractmethod
    def delete(self, user_id: str, product_id: str) -> None:
        """Remove one line."""

    @abstractmethod
    def clear(self, user_id: str) -> None:
        """Remove every line of the user."""
