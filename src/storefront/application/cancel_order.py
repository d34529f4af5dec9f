"""Application service: Cancel Order use case.

Only PENDING or CONFIRMED orders can be cancelled.  The order's
quantities go back into stock; the cart that produced the order is not
brought back.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import AccessDeniedError, EntityNotFoundError
from storefront.domain.model.order import Order
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_restoration_service import (
    StockRestorationService,
)

logger = structlog.get_logger(__name__)


def cancel_and_restore(
    order: Order,
    order_repo: OrderRepository,
    product_repo: ProductRepository,
    reason: str = "",
) -> None:
    """Cancel ``order`` and put its stock back.

    The status check runs first so an order that may not be cancelled
    never touches stock.
    """
    order.cancel(reason)
    skipped = StockRestorationService(product_repo).restore_for_order(order)
    order_repo.save(order)

    for product_id in skipped:
        logger.warning(
            "Product missing during stock restore; skipped",
            order_number=order.order_number,
            product_id=product_id,
        )
    logger.info(
        "Order cancelled",
        order_number=order.order_number,
        reason=reason or None,
    )


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, order_id: int, user_id: str, reason: str = "") -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        if order.user_id != user_id:
            raise AccessDeniedError(f"Order #{order_id} belongs to another user")

        cancel_and_restore(order, self._order_repo, self._product_repo, reason)
        return order_to_dto(order)
