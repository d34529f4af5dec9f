"""Application service: List User Reviews use case (query)."""

from __future__ import annotations

from storefront.application.dto import ReviewDTO, review_to_dto
from storefront.domain.repository.review_repository import ReviewRepository


class ListUserReviewsHandler:

    def __init__(self, review_repo: ReviewRepository) -> None:
        self._review_repo = review_repo

    def handle(self, user_id: str) -> list[ReviewDTO]:
        return [review_to_dto(r) for r in self._review_repo.list_by_user(user_id)]
