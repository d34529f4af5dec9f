"""Abstract repository for Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get_by_user(self, user_id: str) -> Cart | None:
        """Return the user's cart (there is at most one), or None."""

    @abstractmethod
    def list_all(self) -> list[Cart]:
        """Return every cart."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist a new or updated cart.

        Raises ConflictError if the stored version moved on since the
        cart was loaded, or if a new cart collides with the user's
        existing one.  Bumps ``cart.version`` on success.
        """

    @abstractmethod
    def delete(self, cart: Cart) -> None:
        """Remove a cart."""
