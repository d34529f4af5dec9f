"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from storefront.domain.exceptions import ConflictError
from storefront.domain.model.cart import SelectedVariant
from storefront.domain.model.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    ShippingAddress,
    StatusChange,
)
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_file import (
    JsonFile,
    money_from_raw,
    money_to_raw,
)

_ADDRESS_FIELDS = ("name", "phone", "address", "city", "state", "pincode", "landmark")
_MILESTONES = ("confirmed_at", "shipped_at", "delivered_at", "cancelled_at")


def _dt(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._file.load()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def count(self) -> int:
        return len(self._file.load())

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def get_by_order_number(self, order_number: str) -> Order | None:
        for raw in self._file.load():
            if raw["order_number"] == order_number:
                return self._to_domain(raw)
        return None

    def list_by_user(self, user_id: str) -> list[Order]:
        return [o for o in self.list_all() if o.user_id == user_id]

    def list_all(self) -> list[Order]:
        orders = [self._to_domain(raw) for raw in self._file.load()]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def save(self, order: Order) -> None:
        with self._file.lock:
            orders = self._file.load()

            if order.id is None:
                if any(raw["order_number"] == order.order_number for raw in orders):
                    raise ConflictError(f"Order number {order.order_number} already exists")
                order.id = self.next_id()
                orders.append(self._to_raw(order))
            else:
                # Upsert: replace if exists, otherwise append
                replaced = False
                for i, raw in enumerate(orders):
                    if raw["id"] == order.id:
                        orders[i] = self._to_raw(order)
                        replaced = True
                        break
                if not replaced:
                    orders.append(self._to_raw(order))

            self._file.persist(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        raw = {
            "id": order.id,
            "order_number": order.order_number,
            "user_id": order.user_id,
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "product_image": item.product_image,
                    "quantity": item.quantity.value,
                    "unit_price": money_to_raw(item.unit_price),
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
                for item in order.items
            ],
            "shipping_address": {
                name: getattr(order.shipping_address, name) for name in _ADDRESS_FIELDS
            },
            "subtotal": money_to_raw(order.subtotal),
            "discount_amount": money_to_raw(order.discount_amount),
            "shipping_cost": money_to_raw(order.shipping_cost),
            "tax": money_to_raw(order.tax),
            "total_amount": money_to_raw(order.total_amount),
            "payment_method": order.payment_method.value,
            "payment_status": order.payment_status.value,
            "payment_id": order.payment_id,
            "status": order.status.value,
            "status_history": [
                {
                    "status": change.status.value,
                    "timestamp": change.timestamp.isoformat(),
                    "note": change.note,
                }
                for change in order.status_history
            ],
            "tracking_number": order.tracking_number,
            "customer_notes": order.customer_notes,
            "admin_notes": order.admin_notes,
            "created_at": order.created_at.isoformat(),
        }
        for name in _MILESTONES:
            value = getattr(order, name)
            raw[name] = value.isoformat() if value else None
        return raw

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = []
        for i in raw["items"]:
            variant = i.get("selected_variant")
            items.append(
                OrderLineItem(
                    product_id=i["product_id"],
                    product_name=i["product_name"],
                    product_image=i.get("product_image", ""),
                    quantity=Quantity(i["quantity"]),
                    unit_price=money_from_raw(i["unit_price"]),
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
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            user_id=raw["user_id"],
            items=items,
            shipping_address=ShippingAddress(**raw["shipping_address"]),
            subtotal=money_from_raw(raw["subtotal"]),
            discount_amount=money_from_raw(raw["discount_amount"]),
            shipping_cost=money_from_raw(raw["shipping_cost"]),
            tax=money_from_raw(raw["tax"]),
            payment_method=PaymentMethod(raw["payment_method"]),
            payment_status=PaymentStatus(raw["payment_status"]),
            payment_id=raw.get("payment_id"),
            status=OrderStatus(raw["status"]),
            status_history=[
                StatusChange(
                    status=OrderStatus(c["status"]),
                    timestamp=datetime.fromisoformat(c["timestamp"]),
                    note=c.get("note"),
                )
                for c in raw.get("status_history", [])
            ],
            confirmed_at=_dt(raw.get("confirmed_at")),
            shipped_at=_dt(raw.get("shipped_at")),
            delivered_at=_dt(raw.get("delivered_at")),
            cancelled_at=_dt(raw.get("cancelled_at")),
            tracking_number=raw.get("tracking_number"),
            customer_notes=raw.get("customer_notes"),
            admin_notes=raw.get("admin_notes"),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
