"""Application service: Update Review use case."""

from __future__ import annotations

from storefront.application.create_review import is_verified_purchase
from storefront.application.dto import ReviewDTO, review_to_dto
from storefront.domain.exceptions import AccessDeniedError, EntityNotFoundError
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.review_repository import ReviewRepository
from storefront.domain.service.rating_aggregation_service import (
    RatingAggregationService,
)


class UpdateReviewHandler:

    def __init__(
        self,
        review_repo: ReviewRepository,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._review_repo = review_repo
        self._product_repo = product_repo
        self._order_repo = order_repo

    def handle(
        self,
        review_id: int,
        user_id: str,
        rating: int | None = None,
        title: str | None = None,
        comment: str | None = None,
    ) -> ReviewDTO:
        review = self._review_repo.get_by_id(review_id)
        if review is None:
            raise EntityNotFoundError(f"Review #{review_id} not found")
        if review.user_id != user_id:
            raise AccessDeniedError(f"Review #{review_id} belongs to another user")

        review.edit(rating=rating, title=title, comment=comment)
        # The linked order may have been delivered since the review was written.
        if not review.is_verified and is_verified_purchase(review, self._order_repo):
            review.mark_verified()
        self._review_repo.save(review)

        RatingAggregationService(self._review_repo, self._product_repo).recompute_rating(
            review.product_id
        )
        return review_to_dto(review)
