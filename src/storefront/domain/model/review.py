"""Review aggregate — one shopper's opinion of one product."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import ValidationError

MIN_RATING = 1
MAX_RATING = 5
MAX_TITLE_LENGTH = 100
MIN_COMMENT_LENGTH = 10
MAX_COMMENT_LENGTH = 1000


def _validate_content(rating: int, title: str | None, comment: str) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    if not isinstance(rating, int) or isinstance(rating, bool) or not MIN_RATING <= rating <= MAX_RATING:
        errors["rating"] = [f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}"]
    if title is not None and len(title.strip()) > MAX_TITLE_LENGTH:
        errors["title"] = [f"Review title cannot exceed {MAX_TITLE_LENGTH} characters"]
    stripped = (comment or "").strip()
    if len(stripped) < MIN_COMMENT_LENGTH:
        errors["comment"] = [f"Comment must be at least {MIN_COMMENT_LENGTH} characters"]
    elif len(stripped) > MAX_COMMENT_LENGTH:
        errors["comment"] = [f"Comment cannot exceed {MAX_COMMENT_LENGTH} characters"]
    return errors


@dataclass
class Review:
    """Aggregate root for product reviews.

    ``is_verified`` is only ever switched on, by ``mark_verified``, after
    the application layer has matched the review to a delivered order.
    Only active, approved reviews count towards a product's rating.
    """

    id: int | None
    user_id: str
    product_id: str
    rating: int
    comment: str
    title: str | None = None
    order_id: int | None = None
    is_verified: bool = False
    helpful_votes: int = 0
    is_active: bool = True
    is_approved: bool = True
    moderation_note: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        user_id: str,
        product_id: str,
        rating: int,
        comment: str,
        title: str | None = None,
        order_id: int | None = None,
    ) -> Review:
        errors = _validate_content(rating, title, comment)
        if not user_id or not user_id.strip():
            errors["user_id"] = ["User is required"]
        if errors:
            raise ValidationError("Invalid review", errors)
        return Review(
            id=None,
            user_id=user_id.strip(),
            product_id=product_id,
            rating=rating,
            comment=comment.strip(),
            title=title.strip() if title else None,
            order_id=order_id,
        )

    @property
    def counts_towards_rating(self) -> bool:
        return self.is_active and self.is_approved

    def edit(
        self,
        rating: int | None = None,
        title: str | None = None,
        comment: str | None = None,
    ) -> None:
        """Replace whichever fields are given; the rest stay as they are."""
        new_rating = self.rating if rating is None else rating
        new_title = self.title if title is None else title
        new_comment = self.comment if comment is None else comment

        errors = _validate_content(new_rating, new_title, new_comment)
        if errors:
            raise ValidationError("Invalid review", errors)

        self.rating = new_rating
        self.title = new_title.strip() if new_title else None
        self.comment = new_comment.strip()
        self._touch()

    def mark_verified(self) -> None:
        self.is_verified = True
        self._touch()

    def mark_helpful(self) -> None:
        self.helpful_votes += 1
        self._touch()

    def approve(self) -> None:
        self.is_approved = True
        self.moderation_note = None
        self._touch()

    def reject(self, reason: str = "") -> None:
        self.is_approved = False
        self.moderation_note = reason or None
        self._touch()

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
