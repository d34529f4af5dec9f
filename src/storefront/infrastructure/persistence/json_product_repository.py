"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.model.product import Product, ProductVariant
from storefront.domain.repository.product_repository import (
    ProductRepository,
    StockAdjustment,
)
from storefront.infrastructure.persistence.json_file import (
    JsonFile,
    money_from_raw,
    money_to_raw,
)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_name(self, name: str) -> Product | None:
        for raw in self._file.load():
            if raw["name"].lower() == name.lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, product: Product) -> None:
        with self._file.lock:
            records = self._file.load()
            replaced = False
            for i, raw in enumerate(records):
                if raw["id"] == product.id:
                    # Stock is owned by the counter operations below; a
                    # product loaded before a checkout must not undo it.
                    merged = self._to_raw(product)
                    merged["stock"] = raw["stock"]
                    records[i] = merged
                    replaced = True
                    break
            if not replaced:
                records.append(self._to_raw(product))
            self._file.persist(records)

    def decrement_stock(self, product_id: str, quantity: int) -> StockAdjustment:
        with self._file.lock:
            records = self._file.load()
            for raw in records:
                if raw["id"] == product_id:
                    if raw["stock"] < quantity:
                        return StockAdjustment.INSUFFICIENT
                    raw["stock"] -= quantity
                    self._file.persist(records)
                    return StockAdjustment.APPLIED
            return StockAdjustment.NOT_FOUND

    def increment_stock(self, product_id: str, quantity: int) -> bool:
        with self._file.lock:
            records = self._file.load()
            for raw in records:
                if raw["id"] == product_id:
                    raw["stock"] += quantity
                    self._file.persist(records)
                    return True
            return False

    def set_stock(self, product_id: str, quantity: int) -> bool:
        with self._file.lock:
            records = self._file.load()
            for raw in records:
                if raw["id"] == product_id:
                    raw["stock"] = quantity
                    self._file.persist(records)
                    return True
            return False

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": money_to_raw(product.price),
            "stock": product.stock,
            "image": product.image,
            "variants": [
                {
                    "id": v.id,
                    "name": v.name,
                    "value": v.value,
                    "price": money_to_raw(v.price),
                    "stock": v.stock,
                }
                for v in product.variants
            ],
            "is_active": product.is_active,
            "rating": str(product.rating),
            "num_reviews": product.num_reviews,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            price=money_from_raw(raw["price"]),
            stock=raw.get("stock", 0),
            image=raw.get("image", ""),
            variants=[
                ProductVariant(
                    id=v["id"],
                    name=v["name"],
                    value=v["value"],
                    price=money_from_raw(v.get("price")),
                    stock=v.get("stock", 0),
                )
                for v in raw.get("variants", [])
            ],
            is_active=raw.get("is_active", True),
            rating=Decimal(raw.get("rating", "0")),
            num_reviews=raw.get("num_reviews", 0),
        )
