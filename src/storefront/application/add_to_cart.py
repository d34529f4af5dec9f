"""Application service: Add To Cart use case.

Checks the product (and variant) against the catalog, then hands a
snapshot to the Cart aggregate.  The cart itself never looks at stock.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import CartDTO, cart_to_dto
from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from storefront.domain.model.cart import Cart, ProductSnapshot, SelectedVariant
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class AddToCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(
        self,
        user_id: str,
        product_id: str,
        quantity: int = 1,
        variant_id: str | None = None,
    ) -> CartDTO:
        if quantity < 1:
            raise ValidationError(
                "Quantity must be at least 1", {"quantity": ["Quantity must be at least 1"]}
            )

        product = self._product_repo.get_by_id(product_id)
        if product is None or not product.is_active:
            raise EntityNotFoundError(f"Product '{product_id}' not found or inactive")

        if product.stock < quantity:
            raise InsufficientStockError(
                f"Only {product.stock} of {product.name} available in stock"
            )

        selected: SelectedVariant | None = None
        if variant_id is not None:
            variant = product.get_variant(variant_id)
            if variant is None:
                raise ValidationError(
                    f"Invalid variant '{variant_id}' for {product.name}",
                    {"variant_id": ["Invalid product variant"]},
                )
            if variant.stock < quantity:
                raise InsufficientStockError(
                    f"Only {variant.stock} of {product.name} ({variant.label}) available"
                )
            selected = SelectedVariant.from_variant(variant, fallback_price=product.price)

        # Find or create the user's single cart
        cart = self._cart_repo.get_by_user(user_id)
        if cart is None:
            cart = Cart.create(user_id, currency=product.price.currency)

        line = cart.add_item(ProductSnapshot.from_product(product), quantity, selected)
        self._cart_repo.save(cart)

        logger.info(
            "Item added to cart",
            user_id=user_id,
            product_id=product.id,
            line_id=line.id,
            quantity=line.quantity,
        )
        return cart_to_dto(cart)
