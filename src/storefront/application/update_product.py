"""Application service: Update Product use cases (price, stock, retirement)."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, new_price: str) -> None:
        """Update a product's price.

        This does NOT affect any existing carts or orders — they
        captured a price snapshot.
        """
        product = self._load(product_id)
        product.update_price(Money.of(new_price, product.price.currency))
        self._product_repo.save(product)

    def set_stock(self, product_id: str, quantity: int) -> None:
        """Set the stock level outright (catalog management, not checkout)."""
        if quantity < 0:
            raise ValidationError("Stock cannot be negative", {"stock": ["Stock cannot be negative"]})
        if not self._product_repo.set_stock(product_id, quantity):
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

    def deactivate(self, product_id: str) -> None:
        product = self._load(product_id)
        product.deactivate()
        self._product_repo.save(product)

    def _load(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product
