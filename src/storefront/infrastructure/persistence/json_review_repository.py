"""JSON-file-backed implementation of ReviewRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from storefront.domain.exceptions import ConflictError
from storefront.domain.model.review import Review
from storefront.domain.repository.review_repository import ReviewRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonReviewRepository(ReviewRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ReviewRepository interface -------------------------------------------

    def get_by_id(self, review_id: int) -> Review | None:
        for raw in self._file.load():
            if raw["id"] == review_id:
                return self._to_domain(raw)
        return None

    def get_by_user_and_product(self, user_id: str, product_id: str) -> Review | None:
        for raw in self._file.load():
            if raw["user_id"] == user_id and raw["product_id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_by_product(self, product_id: str, only_visible: bool = True) -> list[Review]:
        reviews = [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["product_id"] == product_id
        ]
        if only_visible:
            reviews = [r for r in reviews if r.counts_towards_rating]
        return sorted(reviews, key=lambda r: r.created_at, reverse=True)

    def list_by_user(self, user_id: str) -> list[Review]:
        reviews = [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["user_id"] == user_id and raw["is_active"]
        ]
        return sorted(reviews, key=lambda r: r.created_at, reverse=True)

    def save(self, review: Review) -> None:
        with self._file.lock:
            records = self._file.load()

            if review.id is None:
                for raw in records:
                    if raw["user_id"] == review.user_id and raw["product_id"] == review.product_id:
                        raise ConflictError("You have already reviewed this product")
                review.id = max((raw["id"] for raw in records), default=0) + 1
                records.append(self._to_raw(review))
            else:
                for i, raw in enumerate(records):
                    if raw["id"] == review.id:
                        records[i] = self._to_raw(review)
                        break
                else:
                    records.append(self._to_raw(review))

            self._file.persist(records)

    def delete(self, review: Review) -> None:
        with self._file.lock:
            records = [raw for raw in self._file.load() if raw["id"] != review.id]
            self._file.persist(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(review: Review) -> dict:
        return {
            "id": review.id,
            "user_id": review.user_id,
            "product_id": review.product_id,
            "order_id": review.order_id,
            "rating": review.rating,
            "title": review.title,
            "comment": review.comment,
            "is_verified": review.is_verified,
            "helpful_votes": review.helpful_votes,
            "is_active": review.is_active,
            "is_approved": review.is_approved,
            "moderation_note": review.moderation_note,
            "created_at": review.created_at.isoformat(),
            "updated_at": review.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Review:
        return Review(
            id=raw["id"],
            user_id=raw["user_id"],
            product_id=raw["product_id"],
            order_id=raw.get("order_id"),
            rating=raw["rating"],
            title=raw.get("title"),
            comment=raw["comment"],
            is_verified=raw.get("is_verified", False),
            helpful_votes=raw.get("helpful_votes", 0),
            is_active=raw.get("is_active", True),
            is_approved=raw.get("is_approved", True),
            moderation_note=raw.get("moderation_note"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
