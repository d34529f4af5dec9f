"""Abstract repository for Review aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.review import Review


class ReviewRepository(ABC):

    @abstractmethod
    def get_by_id(self, review_id: int) -> Review | None:
        """Return a review by its ID, or None if not found."""

    @abstractmethod
    def get_by_user_and_product(self, user_id: str, product_id: str) -> Review | None:
        """Return the user's review of a product, or None."""

    @abstractmethod
    def list_by_product(self, product_id: str, only_visible: bool = True) -> list[Review]:
        """Return a product's reviews, newest first.

        With ``only_visible`` the list is limited to active, approved
        reviews.
        """

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[Review]:
        """Return a user's active reviews, newest first."""

    @abstractmethod
    def save(self, review: Review) -> None:
        """Persist a new or updated review.

        Raises ConflictError when a new review duplicates an existing
        (user, product) pair.
        """

    @abstractmethod
    def delete(self, review: Review) -> None:
        """Remove a review."""
