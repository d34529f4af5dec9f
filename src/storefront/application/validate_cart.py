"""Application service: Validate Cart use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.cart_validation_service import CartValidationService


@dataclass(frozen=True)
class InvalidLineDTO:
    line_id: str
    product_name: str
    reason: str
    message: str


class ValidateCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, user_id: str) -> list[InvalidLineDTO]:
        """Return the lines that cannot currently be bought (empty if all good)."""
        cart = self._cart_repo.get_by_user(user_id)
        if cart is None:
            raise EntityNotFoundError("Cart not found")

        svc = CartValidationService(self._product_repo)
        return [
            InvalidLineDTO(
                line_id=line.line_id,
                product_name=line.product_name,
                reason=line.reason.value,
                message=line.message,
            )
            for line in svc.validate(cart)
        ]
