"""JSON-file-backed implementation of CartRepository.

Saves are compare-and-swap on ``version``: the stored version must
still equal the version the cart was loaded with.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from storefront.domain.exceptions import ConflictError
from storefront.domain.model.cart import Cart, CartItem, SelectedVariant
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.json_file import (
    JsonFile,
    money_from_raw,
    money_to_raw,
)


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- CartRepository interface ---------------------------------------------

    def get_by_user(self, user_id: str) -> Cart | None:
        for raw in self._file.load():
            if raw["user_id"] == user_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Cart]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, cart: Cart) -> None:
        with self._file.lock:
            records = self._file.load()

            if cart.id is None:
                if any(raw["user_id"] == cart.user_id for raw in records):
                    raise ConflictError(f"User '{cart.user_id}' already has a cart")
                cart.id = max((raw["id"] for raw in records), default=0) + 1
                cart.version += 1
                records.append(self._to_raw(cart))
                self._file.persist(records)
                return

            for i, raw in enumerate(records):
                if raw["id"] == cart.id:
                    if raw["version"] != cart.version:
                        raise ConflictError(
                            f"Cart for '{cart.user_id}' was changed concurrently; reload and retry"
                        )
                    cart.version += 1
                    records[i] = self._to_raw(cart)
                    self._file.persist(records)
                    return

            raise ConflictError(f"Cart #{cart.id} no longer exists")

    def delete(self, cart: Cart) -> None:
        with self._file.lock:
            records = [raw for raw in self._file.load() if raw["id"] != cart.id]
            self._file.persist(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        # Derived totals are not stored; the aggregate recomputes them on load.
        return {
            "id": cart.id,
            "user_id": cart.user_id,
            "currency": cart.currency,
            "items": [
                {
                    "id": item.id,
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "product_image": item.product_image,
                    "product_price": money_to_raw(item.product_price),
                    "quantity": item.quantity,
                    "selected_variant": (
                        {
                            "name": item.selected_variant.name,
                            "value": item.selected_variant.value,
                            "price": money_to_raw(item.selected_variant.price),
                        }
                        if item.selected_variant
                        else None
                    ),
                }
                for item in cart.items
            ],
            "discount_amount": money_to_raw(cart.discount_amount),
            "shipping_cost": money_to_raw(cart.shipping_cost),
            "last_activity": cart.last_activity.isoformat(),
            "version": cart.version,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        items = []
        for i in raw["items"]:
            variant = i.get("selected_variant")
            items.append(
                CartItem(
                    id=i["id"],
                    product_id=i["product_id"],
                    product_name=i["product_name"],
                    product_image=i.get("product_image", ""),
                    product_price=money_from_raw(i["product_price"]),
                    quantity=i["quantity"],
                    selected_variant=(
                        SelectedVariant(
                            name=variant["name"],
                            value=variant["value"],
                            price=money_from_raw(variant["price"]),
                        )
                        if variant
                        else None
                    ),
                )
            )
        return Cart(
            id=raw["id"],
            user_id=raw["user_id"],
            items=items,
            currency=raw.get("currency", "INR"),
            discount_amount=money_from_raw(raw.get("discount_amount")),
            shipping_cost=money_from_raw(raw.get("shipping_cost")),
            last_activity=datetime.fromisoformat(raw["last_activity"]),
            version=raw.get("version", 0),
        )
