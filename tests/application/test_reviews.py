"""Integration tests for the review use cases and rating recomputation."""

from decimal import Decimal

import pytest

from storefront.application.create_review import CreateReviewHandler
from storefront.application.delete_review import DeleteReviewHandler
from storefront.application.list_user_reviews import ListUserReviewsHandler
from storefront.application.moderate_review import ModerateReviewHandler
from storefront.application.show_product_reviews import ShowProductReviewsHandler
from storefront.application.update_review import UpdateReviewHandler
from storefront.domain.exceptions import (
    AccessDeniedError,
    ConflictError,
    EntityNotFoundError,
    ValidationError,
)
from storefront.domain.model.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    PaymentMethod,
    ShippingAddress,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity
from tests.fakes import FakeOrderRepository, FakeProductRepository, FakeReviewRepository

COMMENT = "Exactly as described, would buy again"


def _setup() -> tuple[CreateReviewHandler, FakeReviewRepository, FakeProductRepository, FakeOrderRepository]:
    review_repo = FakeReviewRepository()
    product_repo = FakeProductRepository(
        [
            Product(id="1", name="Mug", price=Money.of("200"), stock=5),
            Product(id="2", name="Lamp", price=Money.of("800"), stock=3),
        ]
    )
    order_repo = FakeOrderRepository()
    handler = CreateReviewHandler(review_repo, product_repo, order_repo)
    return handler, review_repo, product_repo, order_repo


def _place_order(order_repo: FakeOrderRepository, user_id: str, status: OrderStatus) -> int:
    order = Order.create(
        order_number=f"ORD{user_id}{status.value}",
        user_id=user_id,
        items=[
            OrderLineItem(
                product_id="1",
                product_name="Mug",
                quantity=Quantity(1),
                unit_price=Money.of("200"),
            )
        ],
        shipping_address=ShippingAddress("A", "1", "Street", "City", "State", "000000"),
        payment_method=PaymentMethod.COD,
        discount_amount=Money.zero(),
        shipping_cost=Money.zero(),
        tax=Money.of("36"),
    )
    order.update_status(status)
    order_repo.save(order)
    return order.id


class TestCreateReview:

    def test_rating_summary_follows_reviews(self):
        handler, review_repo, product_repo, order_repo = _setup()
        for user, rating in [("a", 5), ("b", 4), ("c", 3)]:
            handler.handle(user, "1", rating, COMMENT)

        mug = product_repo.get_by_id("1")
        assert mug.rating == Decimal("4.0")
        assert mug.num_reviews == 3

    def test_second_review_by_same_user_conflicts(self):
        handler, _, _, _ = _setup()
        handler.handle("a", "1", 5, COMMENT)
        with pytest.raises(ConflictError, match="already reviewed Mug"):
            handler.handle("a", "1", 1, COMMENT)

    def test_same_user_may_review_other_products(self):
        handler, _, product_repo, _ = _setup()
        handler.handle("a", "1", 5, COMMENT)
        handler.handle("a", "2", 2, COMMENT)
        assert product_repo.get_by_id("2").rating == Decimal("2.0")

    def test_verified_when_linked_to_delivered_order(self):
        handler, _, _, order_repo = _setup()
        order_id = _place_order(order_repo, "a", OrderStatus.DELIVERED)
        dto = handler.handle("a", "1", 5, COMMENT, order_id=order_id)
        assert dto.is_verified

    @pytest.mark.parametrize("status", [OrderStatus.PENDING, OrderStatus.SHIPPED])
    def test_not_verified_before_delivery(self, status):
        handler, _, _, order_repo = _setup()
        order_id = _place_order(order_repo, "a", status)
        dto = handler.handle("a", "1", 5, COMMENT, order_id=order_id)
        assert not dto.is_verified

    def test_not_verified_for_someone_elses_order(self):
        handler, _, _, order_repo = _setup()
        order_id = _place_order(order_repo, "b", OrderStatus.DELIVERED)
        dto = handler.handle("a", "1", 5, COMMENT, order_id=order_id)
        assert not dto.is_verified

    def test_unknown_product(self):
        handler, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            handler.handle("a", "404", 5, COMMENT)

    def test_invalid_content(self):
        handler, review_repo, _, _ = _setup()
        with pytest.raises(ValidationError, match="Invalid review"):
            handler.handle("a", "1", 6, "short")
        assert review_repo.get_by_user_and_product("a", "1") is None


class TestUpdateAndDeleteReview:

    def test_update_recomputes_rating(self):
        handler, review_repo, product_repo, order_repo = _setup()
        handler.handle("a", "1", 5, COMMENT)
        dto = handler.handle("b", "1", 4, COMMENT)

        UpdateReviewHandler(review_repo, product_repo, order_repo).handle(dto.id, "b", rating=2)

        assert product_repo.get_by_id("1").rating == Decimal("3.5")

    def test_only_author_may_update(self):
        handler, review_repo, product_repo, order_repo = _setup()
        dto = handler.handle("a", "1", 5, COMMENT)
        with pytest.raises(AccessDeniedError):
            UpdateReviewHandler(review_repo, product_repo, order_repo).handle(dto.id, "b", rating=1)

    def test_delete_recomputes_rating(self):
        handler, review_repo, product_repo, _ = _setup()
        ids = [handler.handle(u, "1", r, COMMENT).id for u, r in [("a", 5), ("b", 4), ("c", 3)]]
        delete = DeleteReviewHandler(review_repo, product_repo)

        delete.handle(ids[2], "c")
        mug = product_repo.get_by_id("1")
        assert (mug.rating, mug.num_reviews) == (Decimal("4.5"), 2)

        delete.handle(ids[0], "a")
        delete.handle(ids[1], "b")
        mug = product_repo.get_by_id("1")
        assert (mug.rating, mug.num_reviews) == (Decimal("0"), 0)

    def test_admin_may_delete_any_review(self):
        handler, review_repo, product_repo, _ = _setup()
        dto = handler.handle("a", "1", 5, COMMENT)
        delete = DeleteReviewHandler(review_repo, product_repo)

        with pytest.raises(AccessDeniedError):
            delete.handle(dto.id, "moderator")
        delete.handle(dto.id, "moderator", is_admin=True)
        assert review_repo.get_by_id(dto.id) is None


class TestModeration:

    def test_rejected_reviews_leave_the_rating(self):
        handler, review_repo, product_repo, _ = _setup()
        handler.handle("a", "1", 5, COMMENT)
        spam = handler.handle("b", "1", 1, COMMENT)
        moderate = ModerateReviewHandler(review_repo, product_repo)

        moderate.reject(spam.id, "Spam")
        assert product_repo.get_by_id("1").rating == Decimal("5.0")

        moderate.approve(spam.id)
        assert product_repo.get_by_id("1").rating == Decimal("3.0")

    def test_helpful_votes(self):
        handler, review_repo, product_repo, _ = _setup()
        dto = handler.handle("a", "1", 5, COMMENT)
        moderate = ModerateReviewHandler(review_repo, product_repo)
        moderate.mark_helpful(dto.id)
        assert moderate.mark_helpful(dto.id).helpful_votes == 2


class TestReviewQueries:

    def test_product_reviews_summary_and_filter(self):
        handler, review_repo, product_repo, _ = _setup()
        for user, rating in [("a", 5), ("b", 5), ("c", 2)]:
            handler.handle(user, "1", rating, COMMENT)

        result = ShowProductReviewsHandler(review_repo, product_repo).handle("1", rating=5)

        assert result.summary.total_reviews == 3
        assert result.summary.average_rating == Decimal("4.0")
        assert result.summary.breakdown == {1: 0, 2: 1, 3: 0, 4: 0, 5: 2}
        assert [r.rating for r in result.reviews] == [5, 5]

    def test_user_reviews(self):
        handler, review_repo, _, _ = _setup()
        handler.handle("a", "1", 5, COMMENT)
        handler.handle("a", "2", 3, COMMENT)
        assert len(ListUserReviewsHandler(review_repo).handle("a")) == 2
        assert ListUserReviewsHandler(review_repo).handle("b") == []
