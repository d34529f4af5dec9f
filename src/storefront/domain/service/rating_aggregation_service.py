"""Domain service: Rating Aggregation.

Recomputes a product's rating summary from scratch out of its active,
approved reviews.  A full recompute is used on every call, so the
summary stays correct no matter how review edits interleave.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.review_repository import ReviewRepository

_ONE_DECIMAL = Decimal("0.1")


def average_rating(ratings: list[int]) -> Decimal:
    """Arithmetic mean rounded half-up to one decimal; 0 for no ratings."""
    if not ratings:
        return Decimal("0")
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)


class RatingAggregationService:

    def __init__(
        self,
        review_repo: ReviewRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._review_repo = review_repo
        self._product_repo = product_repo

    def recompute_rating(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        ratings = [
            review.rating
            for review in self._review_repo.list_by_product(product_id, only_visible=True)
        ]
        product.update_rating(average_rating(ratings), len(ratings))
        self._product_repo.save(product)
        return product
