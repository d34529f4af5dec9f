"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Money crosses as an
integer of minor units plus the formatted display string.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order
from storefront.domain.model.review import Review

_TIME_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class ShippingAddressSpec:
    """Input: where the customer wants the order delivered."""

    name: str
    phone: str
    address: str
    city: str
    state: str
    pincode: str
    landmark: str | None = None


@dataclass(frozen=True)
class CartItemDTO:
    id: str
    product_id: str
    product_name: str
    variant: str | None  # e.g. "Size: XL"
    quantity: int
    unit_price: str
    item_total: str


@dataclass(frozen=True)
class CartDTO:
    user_id: str
    items: list[CartItemDTO]
    total_items: int
    total_quantity: int
    subtotal: str
    discount_amount: str
    shipping_cost: str
    grand_total: str
    grand_total_minor: int
    is_empty: bool


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    product_name: str
    variant: str | None
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class StatusChangeDTO:
    status: str
    timestamp: str
    note: str | None


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    order_number: str
    user_id: str
    status: str
    payment_method: str
    payment_status: str
    items: list[OrderLineItemDTO]
    subtotal: str
    discount_amount: str
    shipping_cost: str
    tax: str
    total: str
    total_minor: int
    history: list[StatusChangeDTO]
    created_at: str


@dataclass(frozen=True)
class ReviewDTO:
    id: int
    user_id: str
    product_id: str
    rating: int
    title: str | None
    comment: str
    is_verified: bool
    is_approved: bool
    helpful_votes: int
    created_at: str


# --- Mapping -----------------------------------------------------------------


def cart_to_dto(cart: Cart) -> CartDTO:
    return CartDTO(
        user_id=cart.user_id,
        items=[
            CartItemDTO(
                id=item.id,
                product_id=item.product_id,
                product_name=item.product_name,
                variant=(
                    f"{item.selected_variant.name}: {item.selected_variant.value}"
                    if item.selected_variant
                    else None
                ),
                quantity=item.quantity,
                unit_price=str(item.effective_price),
                item_total=str(item.item_total),
            )
            for item in cart.items
        ],
        total_items=cart.total_items,
        total_quantity=cart.total_quantity,
        subtotal=str(cart.subtotal),
        discount_amount=str(cart.discount_amount),
        shipping_cost=str(cart.shipping_cost),
        grand_total=str(cart.grand_total),
        grand_total_minor=cart.grand_total.amount,
        is_empty=cart.is_empty,
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,
        user_id=order.user_id,
        status=order.status.value,
        payment_method=order.payment_method.value,
        payment_status=order.payment_status.value,
        items=[
            OrderLineItemDTO(
                product_name=item.product_name,
                variant=(
                    f"{item.selected_variant.name}: {item.selected_variant.value}"
                    if item.selected_variant
                    else None
                ),
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        subtotal=str(order.subtotal),
        discount_amount=str(order.discount_amount),
        shipping_cost=str(order.shipping_cost),
        tax=str(order.tax),
        total=str(order.total_amount),
        total_minor=order.total_amount.amount,
        history=[
            StatusChangeDTO(
                status=change.status.value,
                timestamp=change.timestamp.strftime(_TIME_FORMAT),
                note=change.note,
            )
            for change in order.status_history
        ],
        created_at=order.created_at.strftime(_TIME_FORMAT),
    )


def review_to_dto(review: Review) -> ReviewDTO:
    return ReviewDTO(
        id=review.id,  # type: ignore[arg-type]
        user_id=review.user_id,
        product_id=review.product_id,
        rating=review.rating,
        title=review.title,
        comment=review.comment,
        is_verified=review.is_verified,
        is_approved=review.is_approved,
        helpful_votes=review.helpful_votes,
        created_at=review.created_at.strftime(_TIME_FORMAT),
    )
