"""Application service: Order Statistics use case (query).

Revenue is reported in one currency.  Orders stored in any other currency
are counted in ``total_orders`` but left out of the money figures and
reported as ``other_currency_orders``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

import structlog

from storefront.domain.model.order import OrderStatus
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OrderStatsDTO:
    total_orders: int
    total_revenue: str
    average_order_value: str
    pending_orders: int
    completed_orders: int
    other_currency_orders: int = 0


def _as_utc(value: datetime | None) -> datetime | None:
    # Naive bounds (e.g. typed on the command line) are read as UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class OrderStatsHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        currency: str = DEFAULT_CURRENCY,
    ) -> OrderStatsDTO:
        start, end = _as_utc(start), _as_utc(end)
        orders = [
            order
            for order in self._order_repo.list_all()
            if (start is None or order.created_at >= start)
            and (end is None or order.created_at <= end)
        ]

        priced = [o for o in orders if o.total_amount.currency == currency]
        other = len(orders) - len(priced)
        if other:
            logger.warning(
                "Orders in other currencies left out of revenue",
                currency=currency,
                skipped=other,
            )

        revenue = Money.zero(currency)
        for order in priced:
            revenue = revenue + order.total_amount

        average = (
            Money(round(revenue.amount / len(priced)), currency)
            if priced
            else Money.zero(currency)
        )
        return OrderStatsDTO(
            total_orders=len(orders),
            total_revenue=str(revenue),
            average_order_value=str(average),
            pending_orders=sum(1 for o in orders if o.status == OrderStatus.PENDING),
            completed_orders=sum(1 for o in orders if o.status == OrderStatus.DELIVERED),
            other_currency_orders=other,
        )
