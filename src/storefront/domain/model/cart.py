"""Cart aggregate — a user's in-progress selections.

The Cart owns its lines.  Every derived figure (item totals, subtotal,
quantities, grand total) is recomputed from the lines after each
mutation; nothing outside ``_recompute_totals`` writes to those fields.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.product import Product, ProductVariant
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money


@dataclass(frozen=True)
class SelectedVariant:
    """The variant a shopper picked, with the price it carried at the time."""

    name: str
    value: str
    price: Money

    @staticmethod
    def from_variant(variant: ProductVariant, fallback_price: Money) -> SelectedVariant:
        return SelectedVariant(
            name=variant.name,
            value=variant.value,
            price=variant.price if variant.price is not None else fallback_price,
        )


@dataclass(frozen=True)
class ProductSnapshot:
    """Display data copied from a Product when it is put into a cart."""

    product_id: str
    name: str
    image: str
    price: Money

    @staticmethod
    def from_product(product: Product) -> ProductSnapshot:
        return ProductSnapshot(
            product_id=product.id,
            name=product.name,
            image=product.image,
            price=product.price,
        )


@dataclass
class CartItem:
    id: str
    product_id: str
    product_name: str
    product_image: str
    product_price: Money  # snapshot at add-time
    quantity: int
    selected_variant: SelectedVariant | None = None
    item_total: Money = field(default_factory=Money.zero)

    @property
    def effective_price(self) -> Money:
        if self.selected_variant is not None:
            return self.selected_variant.price
        return self.product_price

    def matches(self, product_id: str, variant: SelectedVariant | None) -> bool:
        """Same product and same variant selection (or neither has one)."""
        if self.product_id != product_id:
            return False
        if variant is None:
            return self.selected_variant is None
        return (
            self.selected_variant is not None
            and self.selected_variant.name == variant.name
            and self.selected_variant.value == variant.value
        )


@dataclass
class Cart:
    """Aggregate root for a user's shopping cart (one per user).

    ``version`` belongs to the repository: it is compared on save so that
    two writers racing on the same cart cannot silently overwrite each
    other's totals.
    """

    id: int | None
    user_id: str
    items: list[CartItem] = field(default_factory=list)
    currency: str = DEFAULT_CURRENCY
    discount_amount: Money | None = None
    shipping_cost: Money | None = None
    subtotal: Money | None = None
    total_items: int = 0
    total_quantity: int = 0
    grand_total: Money | None = None
    is_active: bool = True
    last_activity: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 0

    def __post_init__(self) -> None:
        if self.discount_amount is None:
            self.discount_amount = Money.zero(self.currency)
        if self.shipping_cost is None:
            self.shipping_cost = Money.zero(self.currency)
        self._recompute_totals(touch=False)

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(user_id: str, currency: str = DEFAULT_CURRENCY) -> Cart:
        if not user_id or not user_id.strip():
            raise ValidationError("User is required", {"user_id": ["User is required"]})
        return Cart(id=None, user_id=user_id.strip(), currency=currency)

    # --- Mutations ------------------------------------------------------------

    def add_item(
        self,
        product: ProductSnapshot,
        quantity: int = 1,
        variant: SelectedVariant | None = None,
    ) -> CartItem:
        """Add ``quantity`` of a product (+variant) to the cart.

        A line for the same product and variant accumulates quantity;
        otherwise a new line is appended with a price snapshot taken now.
        Stock is the caller's concern.
        """
        if not isinstance(quantity, int) or quantity < 1:
            raise ValidationError(
                "Quantity must be at least 1", {"quantity": ["Quantity must be at least 1"]}
            )

        line = self._find_matching(product.product_id, variant)
        if line is not None:
            line.quantity += quantity
        else:
            line = CartItem(
                id=uuid.uuid4().hex,
                product_id=product.product_id,
                product_name=product.name,
                product_image=product.image,
                product_price=product.price,
                quantity=quantity,
                selected_variant=variant,
            )
            self.items.append(line)

        self._recompute_totals()
        return line

    def update_item_quantity(self, line_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(line_id)
            return
        line = self._find_line(line_id)
        line.quantity = quantity
        self._recompute_totals()

    def remove_item(self, line_id: str) -> None:
        line = self._find_line(line_id)
        self.items.remove(line)
        self._recompute_totals()

    def clear(self) -> None:
        """Drop every line and reset adjustments.  The cart goes inactive."""
        self.items = []
        self.discount_amount = Money.zero(self.currency)
        self.shipping_cost = Money.zero(self.currency)
        self._recompute_totals()

    def apply_discount(self, amount: Money) -> None:
        if amount > self.subtotal:
            raise ValidationError(
                f"Discount {amount} exceeds cart subtotal {self.subtotal}",
                {"discount_amount": ["Discount cannot exceed the cart subtotal"]},
            )
        self.discount_amount = amount
        self._recompute_totals()

    def set_shipping_cost(self, amount: Money) -> None:
        self.shipping_cost = amount
        self._recompute_totals()

    # --- Computed properties --------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not self.items

    def get_item(self, line_id: str) -> CartItem:
        return self._find_line(line_id)

    # --- Internal helpers -----------------------------------------------------

    def _recompute_totals(self, touch: bool = True) -> None:
        subtotal = Money.zero(self.currency)
        for line in self.items:
            line.item_total = line.effective_price * line.quantity
            subtotal = subtotal + line.item_total

        # A discount never outlives the goods it was applied to.
        if self.discount_amount > subtotal:
            self.discount_amount = subtotal

        self.subtotal = subtotal
        self.total_items = len(self.items)
        self.total_quantity = sum(line.quantity for line in self.items)
        self.grand_total = subtotal - self.discount_amount + self.shipping_cost
        self.is_active = bool(self.items)
        if touch:
            self.last_activity = datetime.now(timezone.utc)

    def _find_matching(self, product_id: str, variant: SelectedVariant | None) -> CartItem | None:
        for line in self.items:
            if line.matches(product_id, variant):
                return line
        return None

    def _find_line(self, line_id: str) -> CartItem:
        for line in self.items:
            if line.id == line_id:
                return line
        raise EntityNotFoundError(f"Item '{line_id}' not found in cart")
