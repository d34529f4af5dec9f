"""Unit tests for the CartValidationService domain service."""

from storefront.domain.model.cart import Cart, ProductSnapshot
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.service.cart_validation_service import (
    CartValidationService,
    InvalidLineReason,
)
from tests.fakes import FakeProductRepository


def _setup() -> tuple[CartValidationService, FakeProductRepository, Cart]:
    products = [
        Product(id="1", name="Mug", price=Money.of("200"), stock=5),
        Product(id="2", name="Lamp", price=Money.of("800"), stock=1),
        Product(id="3", name="Rug", price=Money.of("1500"), stock=4),
    ]
    product_repo = FakeProductRepository(products)
    cart = Cart.create("alice")
    for p in products:
        cart.add_item(ProductSnapshot.from_product(p), 2)
    return CartValidationService(product_repo), product_repo, cart


class TestCartValidationService:

    def test_reports_each_kind_of_problem(self):
        svc, product_repo, cart = _setup()
        product_repo.remove("1")
        rug = product_repo.get_by_id("3")
        rug.deactivate()
        product_repo.save(rug)

        reasons = {line.product_id: line.reason for line in svc.validate(cart)}

        assert reasons == {
            "1": InvalidLineReason.PRODUCT_MISSING,
            "2": InvalidLineReason.INSUFFICIENT_STOCK,
            "3": InvalidLineReason.PRODUCT_INACTIVE,
        }

    def test_valid_cart_has_no_problems(self):
        svc, product_repo, cart = _setup()
        product_repo.set_stock("2", 10)
        assert svc.validate(cart) == []

    def test_does_not_mutate_cart(self):
        svc, product_repo, cart = _setup()
        product_repo.remove("1")
        svc.validate(cart)
        assert len(cart.items) == 3
