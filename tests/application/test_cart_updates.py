"""Integration tests for the cart maintenance use cases."""

from datetime import datetime, timedelta, timezone

import pytest

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.adjust_cart import AdjustCartHandler
from storefront.application.clear_cart import ClearCartHandler
from storefront.application.purge_carts import PurgeIdleCartsHandler
from storefront.application.remove_cart_item import RemoveCartItemHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.application.validate_cart import ValidateCartHandler
from storefront.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ValidationError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeCartRepository, FakeProductRepository


def _setup() -> tuple[FakeCartRepository, FakeProductRepository, str]:
    """Alice's cart holds two mugs; returns the mug line id."""
    cart_repo = FakeCartRepository()
    product_repo = FakeProductRepository(
        [
            Product(id="1", name="Mug", price=Money.of("200"), stock=5),
            Product(id="2", name="Lamp", price=Money.of("800"), stock=3),
        ]
    )
    dto = AddToCartHandler(cart_repo, product_repo).handle("alice", "1", 2)
    return cart_repo, product_repo, dto.items[0].id


class TestUpdateAndRemove:

    def test_update_quantity(self):
        cart_repo, _, line_id = _setup()
        dto = UpdateCartItemHandler(cart_repo).handle("alice", line_id, 4)
        assert dto.subtotal == "INR 800.00"

    def test_update_to_zero_removes_line(self):
        cart_repo, _, line_id = _setup()
        dto = UpdateCartItemHandler(cart_repo).handle("alice", line_id, 0)
        assert dto.is_empty

    def test_remove_line(self):
        cart_repo, _, line_id = _setup()
        dto = RemoveCartItemHandler(cart_repo).handle("alice", line_id)
        assert dto.is_empty

    def test_unknown_line(self):
        cart_repo, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="not found in cart"):
            RemoveCartItemHandler(cart_repo).handle("alice", "nope")

    @pytest.mark.parametrize(
        "change",
        [
            lambda repo: UpdateCartItemHandler(repo).handle("alice", "nope", 3),
            lambda repo: RemoveCartItemHandler(repo).handle("alice", "nope"),
        ],
    )
    def test_unknown_line_leaves_stored_cart_untouched(self, change):
        cart_repo, _, line_id = _setup()
        before = cart_repo.get_by_user("alice")

        with pytest.raises(EntityNotFoundError, match="not found in cart"):
            change(cart_repo)

        after = cart_repo.get_by_user("alice")
        assert after.version == before.version
        assert [(line.id, line.quantity) for line in after.items] == [(line_id, 2)]
        assert after.subtotal == before.subtotal == Money.of("400")
        assert after.grand_total == before.grand_total

    def test_no_cart(self):
        cart_repo, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Cart not found"):
            ClearCartHandler(cart_repo).handle("bob")

    def test_clear(self):
        cart_repo, _, _ = _setup()
        dto = ClearCartHandler(cart_repo).handle("alice")
        assert dto.is_empty
        assert dto.grand_total_minor == 0


class TestShowCart:

    def test_missing_cart_shows_empty(self):
        cart_repo, _, _ = _setup()
        dto = ShowCartHandler(cart_repo).handle("bob")
        assert dto.is_empty
        assert cart_repo.get_by_user("bob") is None


class TestAdjustCart:

    def test_discount_and_shipping(self):
        cart_repo, _, _ = _setup()
        dto = AdjustCartHandler(cart_repo).handle("alice", discount="100", shipping="50")
        assert dto.discount_amount == "INR 100.00"
        assert dto.grand_total == "INR 350.00"

    def test_discount_above_subtotal(self):
        cart_repo, _, _ = _setup()
        with pytest.raises(ValidationError, match="exceeds cart subtotal"):
            AdjustCartHandler(cart_repo).handle("alice", discount="500")

    def test_nothing_to_adjust(self):
        cart_repo, _, _ = _setup()
        with pytest.raises(ValidationError, match="Nothing to adjust"):
            AdjustCartHandler(cart_repo).handle("alice")


class TestValidateCart:

    def test_reports_stock_shortfall(self):
        cart_repo, product_repo, line_id = _setup()
        product_repo.set_stock("1", 1)

        problems = ValidateCartHandler(cart_repo, product_repo).handle("alice")

        assert len(problems) == 1
        assert problems[0].line_id == line_id
        assert problems[0].reason == "insufficient_stock"


class TestConcurrentCartWrites:

    def test_stale_cart_is_rejected(self):
        cart_repo, _, line_id = _setup()
        first = cart_repo.get_by_user("alice")
        second = cart_repo.get_by_user("alice")

        first.update_item_quantity(line_id, 3)
        cart_repo.save(first)

        second.update_item_quantity(line_id, 1)
        with pytest.raises(ConflictError, match="changed concurrently"):
            cart_repo.save(second)
        assert cart_repo.get_by_user("alice").total_quantity == 3


class TestPurgeIdleCarts:

    def test_only_empty_idle_carts_go(self):
        cart_repo, product_repo, _ = _setup()
        AddToCartHandler(cart_repo, product_repo).handle("bob", "2", 1)
        ClearCartHandler(cart_repo).handle("bob")

        later = datetime.now(timezone.utc) + timedelta(days=31)
        purged = PurgeIdleCartsHandler(cart_repo).handle(idle_days=30, now=later)

        assert purged == 1
        assert cart_repo.get_by_user("bob") is None
        assert cart_repo.get_by_user("alice") is not None

    def test_recent_carts_survive(self):
        cart_repo, _, _ = _setup()
        ClearCartHandler(cart_repo).handle("alice")
        assert PurgeIdleCartsHandler(cart_repo).handle(idle_days=30) == 0
