"""Application service: Show Product Reviews use case (query)."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from storefront.application.dto import ReviewDTO, review_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.review import MAX_RATING, MIN_RATING
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.review_repository import ReviewRepository
from storefront.domain.service.rating_aggregation_service import average_rating


@dataclass(frozen=True)
class RatingSummaryDTO:
    average_rating: Decimal
    total_reviews: int
    breakdown: dict[int, int]  # stars -> number of reviews


@dataclass(frozen=True)
class ProductReviewsDTO:
    product_id: str
    product_name: str
    summary: RatingSummaryDTO
    reviews: list[ReviewDTO]


class ShowProductReviewsHandler:

    def __init__(
        self,
        review_repo: ReviewRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._review_repo = review_repo
        self._product_repo = product_repo

    def handle(self, product_id: str, rating: int | None = None) -> ProductReviewsDTO:
        """Visible reviews of a product, optionally only those with ``rating`` stars."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        visible = self._review_repo.list_by_product(product_id, only_visible=True)

        breakdown = {stars: 0 for stars in range(MIN_RATING, MAX_RATING + 1)}
        for review in visible:
            breakdown[review.rating] += 1

        shown = [r for r in visible if rating is None or r.rating == rating]
        return ProductReviewsDTO(
            product_id=product.id,
            product_name=product.name,
            summary=RatingSummaryDTO(
                average_rating=average_rating([r.rating for r in visible]),
                total_reviews=len(visible),
                breakdown=breakdown,
            ),
            reviews=[review_to_dto(r) for r in shown],
        )
