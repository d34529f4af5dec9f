"""Application service: Update Payment Status use case."""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.order import PaymentStatus
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class UpdatePaymentStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        order_id: int,
        payment_status: str,
        payment_id: str | None = None,
    ) -> OrderDTO:
        try:
            status = PaymentStatus(payment_status.lower())
        except ValueError:
            allowed = ", ".join(s.value for s in PaymentStatus)
            raise ValidationError(
                f"Unknown payment status '{payment_status}'",
                {"payment_status": [f"Payment status must be one of: {allowed}"]},
            ) from None

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        order.set_payment_status(status, payment_id)
        self._order_repo.save(order)

        logger.info(
            "Payment status updated",
            order_number=order.order_number,
            payment_status=status.value,
        )
        return order_to_dto(order)
