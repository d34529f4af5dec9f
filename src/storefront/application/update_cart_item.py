"""Application service: Update Cart Item use case.

A quantity of zero or less removes the line.
"""

from __future__ import annotations

from storefront.application.dto import CartDTO, cart_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.cart_repository import CartRepository


class UpdateCartItemHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, user_id: str, line_id: str, quantity: int) -> CartDTO:
        cart = self._cart_repo.get_by_user(user_id)
        if cart is None:
            raise EntityNotFoundError("Cart not found")

        cart.update_item_quantity(line_id, quantity)
        self._cart_repo.save(cart)
        return cart_to_dto(cart)
