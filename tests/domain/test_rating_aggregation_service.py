"""Unit tests for rating aggregation."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.model.review import Review
from storefront.domain.model.value_objects import Money
from storefront.domain.service.rating_aggregation_service import (
    RatingAggregationService,
    average_rating,
)
from tests.fakes import FakeProductRepository, FakeReviewRepository


class TestAverageRating:

    def test_no_ratings_is_zero(self):
        assert average_rating([]) == Decimal("0")

    def test_rounds_half_up_to_one_decimal(self):
        assert average_rating([5, 4, 3]) == Decimal("4.0")
        assert average_rating([5, 4]) == Decimal("4.5")
        assert average_rating([5, 5, 4]) == Decimal("4.7")
        assert average_rating([4, 4, 4, 5]) == Decimal("4.3")


class TestRatingAggregationService:

    def _setup(self) -> tuple[RatingAggregationService, FakeReviewRepository, FakeProductRepository]:
        product_repo = FakeProductRepository(
            [Product(id="1", name="Mug", price=Money.of("200"), stock=5)]
        )
        review_repo = FakeReviewRepository()
        return RatingAggregationService(review_repo, product_repo), review_repo, product_repo

    def test_only_visible_reviews_count(self):
        svc, review_repo, product_repo = self._setup()
        for user, rating in [("a", 5), ("b", 4), ("c", 1)]:
            review_repo.save(Review.create(user, "1", rating, "Honest opinion here"))
        hidden = review_repo.get_by_user_and_product("c", "1")
        hidden.reject("Off topic")
        review_repo.save(hidden)

        svc.recompute_rating("1")

        product = product_repo.get_by_id("1")
        assert product.rating == Decimal("4.5")
        assert product.num_reviews == 2

    def test_recompute_does_not_touch_stock(self):
        svc, review_repo, product_repo = self._setup()
        review_repo.save(Review.create("a", "1", 3, "Honest opinion here"))
        product_repo.decrement_stock("1", 2)

        svc.recompute_rating("1")

        assert product_repo.get_by_id("1").stock == 3

    def test_unknown_product(self):
        svc, _, _ = self._setup()
        with pytest.raises(EntityNotFoundError):
            svc.recompute_rating("404")
