"""Application service: Adjust Cart use case.

Sets the discount and/or shipping cost on a cart; the aggregate
recomputes the grand total.
"""

from __future__ import annotations

from storefront.application.dto import CartDTO, cart_to_dto
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.cart_repository import CartRepository


class AdjustCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(
        self,
        user_id: str,
        discount: str | None = None,
        shipping: str | None = None,
    ) -> CartDTO:
        if discount is None and shipping is None:
            raise ValidationError("Nothing to adjust: give a discount or a shipping cost")

        cart = self._cart_repo.get_by_user(user_id)
        if cart is None:
            raise EntityNotFoundError("Cart not found")

        if shipping is not None:
            cart.set_shipping_cost(Money.of(shipping, cart.currency))
        if discount is not None:
            cart.apply_discount(Money.of(discount, cart.currency))

        self._cart_repo.save(cart)
        return cart_to_dto(cart)
