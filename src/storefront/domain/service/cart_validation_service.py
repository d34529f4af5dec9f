"""Domain service: Cart Validation.

Checks every cart line against the live catalog.  It lives in the
domain layer because "can this cart still be bought?" is a business
rule that checkout and the cart screen both rely on.  It never mutates
the cart.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront.domain.model.cart import Cart
from storefront.domain.repository.product_repository import ProductRepository


class InvalidLineReason(Enum):
    PRODUCT_MISSING = "product_missing"
    PRODUCT_INACTIVE = "product_inactive"
    INSUFFICIENT_STOCK = "insufficient_stock"


@dataclass(frozen=True)
class InvalidCartLine:
    line_id: str
    product_id: str
    product_name: str
    reason: InvalidLineReason
    message: str

    @property
    def is_stock_problem(self) -> bool:
        return self.reason == InvalidLineReason.INSUFFICIENT_STOCK


class CartValidationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def validate(self, cart: Cart) -> list[InvalidCartLine]:
        """Return the lines that could not be bought right now."""
        invalid: list[InvalidCartLine] = []

        for line in cart.items:
            product = self._product_repo.get_by_id(line.product_id)
            if product is None:
                invalid.append(
                    InvalidCartLine(
                        line_id=line.id,
                        product_id=line.product_id,
                        product_name=line.product_name,
                        reason=InvalidLineReason.PRODUCT_MISSING,
                        message=f"{line.product_name} is no longer available",
                    )
                )
            elif not product.is_active:
                invalid.append(
                    InvalidCartLine(
                        line_id=line.id,
                        product_id=line.product_id,
                        product_name=line.product_name,
                        reason=InvalidLineReason.PRODUCT_INACTIVE,
                        message=f"{line.product_name} has been withdrawn from sale",
                    )
                )
            elif product.stock < line.quantity:
                invalid.append(
                    InvalidCartLine(
                        line_id=line.id,
                        product_id=line.product_id,
                        product_name=line.product_name,
                        reason=InvalidLineReason.INSUFFICIENT_STOCK,
                        message=(
                            f"Only {product.stock} of {line.product_name} in stock "
                            f"(cart has {line.quantity})"
                        ),
                    )
                )

        return invalid
