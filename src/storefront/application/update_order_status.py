"""Application service: Update Order Status use case (admin).

Moving an order to CANCELLED goes through the same path as a customer
cancellation so that stock is restored, and an order that is already
cancelled is refused the same way.
"""

from __future__ import annotations

import structlog

from storefront.application.cancel_order import cancel_and_restore
from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(
        self,
        order_id: int,
        status: str,
        note: str | None = None,
        tracking_number: str | None = None,
    ) -> OrderDTO:
        try:
            new_status = OrderStatus(status.lower())
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"Unknown order status '{status}'",
                {"status": [f"Status must be one of: {allowed}"]},
            ) from None

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        if new_status == OrderStatus.CANCELLED:
            cancel_and_restore(order, self._order_repo, self._product_repo, note or "")
            return order_to_dto(order)

        previous = order.status
        changed = order.update_status(new_status, note)
        if tracking_number:
            order.tracking_number = tracking_number
        self._order_repo.save(order)

        if changed:
            logger.info(
                "Order status changed",
                order_number=order.order_number,
                previous=previous.value,
                status=new_status.value,
            )
        return order_to_dto(order)
