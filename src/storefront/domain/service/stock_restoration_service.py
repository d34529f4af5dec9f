"""Domain service: Stock Restoration.

Puts an order's quantities back into the catalog when the order is
cancelled.  Each line is an atomic increment on the catalog store;
nothing here reads stock and writes it back.
"""

from __future__ import annotations

from storefront.domain.model.order import Order
from storefront.domain.repository.product_repository import ProductRepository


class StockRestorationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def restore_for_order(self, order: Order) -> list[str]:
        """Return every line's quantity to its product.

        Products that no longer exist are skipped; their ids are
        returned so the caller can report them.
        """
        skipped: list[str] = []
        for line in order.items:
            restored = self._product_repo.increment_stock(
                line.product_id, line.quantity.value
            )
            if not restored:
                skipped.append(line.product_id)
        return skipped
