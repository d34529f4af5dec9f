"""Abstract repository for Product aggregate (the catalog store).

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.

Stock is a shared counter touched by checkout and by cancellation, so
it is only changed through ``decrement_stock`` / ``increment_stock``.
Implementations must make each call a single atomic check-and-update.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from storefront.domain.model.product import Product


class StockAdjustment(Enum):
    APPLIED = "applied"
    INSUFFICIENT = "insufficient"
    NOT_FOUND = "not_found"


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its exact name, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product.

        For a product that already exists the stored stock is kept;
        stock only moves through the counter operations below.
        """

    @abstractmethod
    def decrement_stock(self, product_id: str, quantity: int) -> StockAdjustment:
        """Take ``quantity`` units out of stock if that many are available."""

    @abstractmethod
    def increment_stock(self, product_id: str, quantity: int) -> bool:
        """Put ``quantity`` units back.  Returns False if the product is gone."""

    @abstractmethod
    def set_stock(self, product_id: str, quantity: int) -> bool:
        """Overwrite the stock level (catalog management).  False if missing."""
