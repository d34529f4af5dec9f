"""Application service: Purge Idle Carts use case.

Auxiliary batch job meant for a scheduler: deletes carts that are empty
and have not been touched for ``idle_days``.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import structlog

from storefront.domain.exceptions import ValidationError
from storefront.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class PurgeIdleCartsHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, idle_days: int = 30, now: datetime | None = None) -> int:
        if idle_days < 0:
            raise ValidationError("Idle days cannot be negative")

        cutoff = (now or datetime.now(timezone.utc)) - timedelta(days=idle_days)
        purged = 0
        for cart in self._cart_repo.list_all():
            if cart.is_empty and cart.last_activity <= cutoff:
                self._cart_repo.delete(cart)
                purged += 1

        logger.info("Idle carts purged", purged=purged, cutoff=cutoff.isoformat())
        return purged
