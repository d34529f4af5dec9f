"""Application service: Moderate Review use cases (admin).

Approval decides whether a review counts towards the product rating,
so both approving and rejecting trigger a recompute.  Helpful votes do
not touch the rating.
"""

from __future__ import annotations

from storefront.application.dto import ReviewDTO, review_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.review import Review
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.review_repository import ReviewRepository
from storefront.domain.service.rating_aggregation_service import (
    RatingAggregationService,
)


class ModerateReviewHandler:

    def __init__(
        self,
        review_repo: ReviewRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._review_repo = review_repo
        self._product_repo = product_repo

    def approve(self, review_id: int) -> ReviewDTO:
        review = self._load(review_id)
        review.approve()
        return self._save_and_recompute(review)

    def reject(self, review_id: int, reason: str = "") -> ReviewDTO:
        review = self._load(review_id)
        review.reject(reason)
        return self._save_and_recompute(review)

    def mark_helpful(self, review_id: int) -> ReviewDTO:
        review = self._load(review_id)
        review.mark_helpful()
        self._review_repo.save(review)
        return review_to_dto(review)

    def _load(self, review_id: int) -> Review:
        review = self._review_repo.get_by_id(review_id)
        if review is None:
            raise EntityNotFoundError(f"Review #{review_id} not found")
        return review

    def _save_and_recompute(self, review: Review) -> ReviewDTO:
        self._review_repo.save(review)
        RatingAggregationService(self._review_repo, self._product_repo).recompute_rating(
            review.product_id
        )
        return review_to_dto(review)
