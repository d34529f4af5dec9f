"""Application service: Add Product Variant use case."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.product import ProductVariant
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class AddVariantHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        name: str,
        value: str,
        stock: int = 0,
        price: str | None = None,
    ) -> ProductVariant:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        errors: dict[str, list[str]] = {}
        if not name or not name.strip():
            errors["name"] = ["Variant name is required"]
        if not value or not value.strip():
            errors["value"] = ["Variant value is required"]
        if errors:
            raise ValidationError("Invalid variant", errors)

        variant = ProductVariant(
            id=f"{product.id}-{len(product.variants) + 1}",
            name=name.strip(),
            value=value.strip(),
            price=Money.of(price, product.price.currency) if price is not None else None,
            stock=stock,
        )
        product.add_variant(variant)
        self._product_repo.save(product)
        return variant
