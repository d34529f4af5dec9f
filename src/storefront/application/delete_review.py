"""Application service: Delete Review use case.

The author or an admin may delete a review.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import AccessDeniedError, EntityNotFoundError
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.review_repository import ReviewRepository
from storefront.domain.service.rating_aggregation_service import (
    RatingAggregationService,
)

logger = structlog.get_logger(__name__)


class DeleteReviewHandler:

    def __init__(
        self,
        review_repo: ReviewRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._review_repo = review_repo
        self._product_repo = product_repo

    def handle(self, review_id: int, user_id: str, is_admin: bool = False) -> None:
        review = self._review_repo.get_by_id(review_id)
        if review is None:
            raise EntityNotFoundError(f"Review #{review_id} not found")
        if review.user_id != user_id and not is_admin:
            raise AccessDeniedError(f"Review #{review_id} belongs to another user")

        self._review_repo.delete(review)
        product = RatingAggregationService(
            self._review_repo, self._product_repo
        ).recompute_rating(review.product_id)

        logger.info(
            "Review deleted",
            review_id=review_id,
            product_id=review.product_id,
            rating=str(product.rating),
            num_reviews=product.num_reviews,
        )
