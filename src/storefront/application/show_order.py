"""Application service: Show Order use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import AccessDeniedError, EntityNotFoundError
from storefront.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int, user_id: str | None = None) -> OrderDTO:
        """Return one order.  With ``user_id`` the order must belong to that user."""
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        if user_id is not None and order.user_id != user_id:
            raise AccessDeniedError(f"Order #{order_id} belongs to another user")
        return order_to_dto(order)
