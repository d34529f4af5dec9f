"""Application service: Create Review use case.

One review per user per product.  A review that points at a delivered
order of the same user containing the product is marked as a verified
purchase.  The product's rating summary is recomputed afterwards.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import ReviewDTO, review_to_dto
from storefront.domain.exceptions import ConflictError, EntityNotFoundError
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.review import Review
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.review_repository import ReviewRepository
from storefront.domain.service.rating_aggregation_service import (
    RatingAggregationService,
)

logger = structlog.get_logger(__name__)


def is_verified_purchase(review: Review, order_repo: OrderRepository) -> bool:
    if review.order_id is None:
        return False
    order = order_repo.get_by_id(review.order_id)
    return (
        order is not None
        and order.user_id == review.user_id
        and order.status == OrderStatus.DELIVERED
        and order.contains_product(review.product_id)
    )


class CreateReviewHandler:

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
        user_id: str,
        product_id: str,
        rating: int,
        comment: str,
        title: str | None = None,
        order_id: int | None = None,
    ) -> ReviewDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if self._review_repo.get_by_user_and_product(user_id, product_id) is not None:
            raise ConflictError(f"You have already reviewed {product.name}")

        review = Review.create(
            user_id=user_id,
            product_id=product_id,
            rating=rating,
            comment=comment,
            title=title,
            order_id=order_id,
        )
        if is_verified_purchase(review, self._order_repo):
            review.mark_verified()

        self._review_repo.save(review)

        RatingAggregationService(self._review_repo, self._product_repo).recompute_rating(
            product_id
        )
        logger.info(
            "Review created",
            review_id=review.id,
            product_id=product_id,
            rating=rating,
            verified=review.is_verified,
        )
        return review_to_dto(review)
