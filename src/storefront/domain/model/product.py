"""Product aggregate.

Products live independently of carts and orders. They have their own
lifecycle: prices change, stock moves, products are retired from the
catalog.  Carts, orders and reviews only hold a weak reference (the id)
plus whatever display data they snapshot for themselves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass
class ProductVariant:
    """A named option (size, colour, ...) with its own stock and optional price."""

    id: str
    name: str
    value: str
    price: Money | None = None
    stock: int = 0

    def __post_init__(self) -> None:
        if self.stock < 0:
            raise ValidationError("Variant stock cannot be negative")

    @property
    def label(self) -> str:
        return f"{self.name}: {self.value}"


@dataclass
class Product:
    """A product in the catalog.

    This is an aggregate root.  ``stock`` is only changed through the
    catalog store's counter operations (checkout, cancellation and the
    admin stock override), never by saving a loaded Product.
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    image: str = ""
    variants: list[ProductVariant] = field(default_factory=list)
    is_active: bool = True
    rating: Decimal = Decimal("0")
    num_reviews: int = 0

    def __post_init__(self) -> None:
        if self.stock < 0:
            raise ValidationError("Stock cannot be negative")

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing carts or orders because both
        capture a price snapshot.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def add_variant(self, variant: ProductVariant) -> None:
        for existing in self.variants:
            if existing.id == variant.id:
                raise ValidationError(f"Variant '{variant.id}' already exists on {self.name}")
            if existing.name == variant.name and existing.value == variant.value:
                raise ValidationError(f"Variant '{variant.label}' already exists on {self.name}")
        self.variants.append(variant)

    def get_variant(self, variant_id: str) -> ProductVariant | None:
        for variant in self.variants:
            if variant.id == variant_id:
                return variant
        return None

    def find_variant(self, name: str, value: str) -> ProductVariant | None:
        for variant in self.variants:
            if variant.name == name and variant.value == value:
                return variant
        return None

    def deactivate(self) -> None:
        """Retire the product.  It stays in the store for historical references."""
        self.is_active = False

    def update_rating(self, average: Decimal, count: int) -> None:
        if count < 0:
            raise ValidationError("Review count cannot be negative")
        if not Decimal("0") <= average <= Decimal("5"):
            raise ValidationError(f"Rating must be between 0 and 5, got {average}")
        self.rating = average
        self.num_reviews = count
