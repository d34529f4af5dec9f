"""Unit tests for the StockRestorationService domain service."""

from storefront.domain.model.order import OrderLineItem
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.service.stock_restoration_service import StockRestorationService
from tests.fakes import FakeProductRepository


class _StubOrder:
    def __init__(self, items):
        self.items = items


def _line(product_id: str, qty: int) -> OrderLineItem:
    return OrderLineItem(
        product_id=product_id,
        product_name=product_id,
        quantity=Quantity(qty),
        unit_price=Money.of("10"),
    )


class TestStockRestorationService:

    def test_returns_quantities_to_stock(self):
        product_repo = FakeProductRepository(
            [
                Product(id="1", name="Mug", price=Money.of("200"), stock=1),
                Product(id="2", name="Lamp", price=Money.of("800"), stock=0),
            ]
        )
        skipped = StockRestorationService(product_repo).restore_for_order(
            _StubOrder([_line("1", 2), _line("2", 3)])
        )

        assert skipped == []
        assert product_repo.get_by_id("1").stock == 3
        assert product_repo.get_by_id("2").stock == 3

    def test_missing_products_are_skipped(self):
        product_repo = FakeProductRepository(
            [Product(id="1", name="Mug", price=Money.of("200"), stock=1)]
        )
        skipped = StockRestorationService(product_repo).restore_for_order(
            _StubOrder([_line("gone", 2), _line("1", 1)])
        )

        assert skipped == ["gone"]
        assert product_repo.get_by_id("1").stock == 2
