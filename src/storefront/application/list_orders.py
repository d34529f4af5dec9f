"""Application service: List Orders use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import OrderStatus, PaymentStatus
from storefront.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        user_id: str | None = None,
        status: str | None = None,
        payment_status: str | None = None,
    ) -> list[OrderDTO]:
        """List orders, newest first.

        Without ``user_id`` every order is listed (admin view); the
        status filters apply in both cases.
        """
        try:
            wanted_status = OrderStatus(status.lower()) if status else None
            wanted_payment = PaymentStatus(payment_status.lower()) if payment_status else None
        except ValueError as exc:
            raise ValidationError(f"Invalid filter: {exc}") from exc

        orders = (
            self._order_repo.list_by_user(user_id)
            if user_id is not None
            else self._order_repo.list_all()
        )
        return [
            order_to_dto(order)
            for order in orders
            if (wanted_status is None or order.status == wanted_status)
            and (wanted_payment is None or order.payment_status == wanted_payment)
        ]
