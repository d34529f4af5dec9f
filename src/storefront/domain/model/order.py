"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items and its status
history.  Items and amounts are frozen at creation; afterwards only the
status, payment fields and notes move.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import InvalidStateError, ValidationError
from storefront.domain.model.cart import SelectedVariant
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    RETURNED = "returned"


class PaymentMethod(Enum):
    RAZORPAY = "razorpay"
    COD = "cod"
    WALLET = "wallet"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
TAX_RATE_PERCENT = 18

_FULFILLMENT_CHAIN = [
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
]
CANCELLABLE_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.CONFIRMED})
RETURNABLE_STATUSES = frozenset({OrderStatus.SHIPPED, OrderStatus.DELIVERED})
TERMINAL_STATUSES = frozenset({OrderStatus.CANCELLED, OrderStatus.RETURNED})


def generate_order_number(created_at: datetime, sequence: int) -> str:
    """Build ``ORD<epoch millis><sequence:04d>``."""
    millis = int(created_at.timestamp() * 1000)
    return f"ORD{millis}{sequence:04d}"


@dataclass(frozen=True)
class ShippingAddress:
    name: str
    phone: str
    address: str
    city: str
    state: str
    pincode: str
    landmark: str | None = None

    def __post_init__(self) -> None:
        errors: dict[str, list[str]] = {}
        for field_name in ("name", "phone", "address", "city", "state", "pincode"):
            value = getattr(self, field_name)
            if not value or not str(value).strip():
                errors[field_name] = [f"Shipping {field_name} is required"]
        if errors:
            raise ValidationError("Invalid shipping address", errors)


@dataclass
class OrderLineItem:
    """Captures the product and price as they were at checkout."""

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # effective price locked at checkout
    product_image: str = ""
    selected_variant: SelectedVariant | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class StatusChange:
    status: OrderStatus
    timestamp: datetime
    note: str | None = None


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    order_number: str
    user_id: str
    items: list[OrderLineItem]
    shipping_address: ShippingAddress
    subtotal: Money
    discount_amount: Money
    shipping_cost: Money
    tax: Money
    payment_method: PaymentMethod
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_id: str | None = None
    status: OrderStatus = OrderStatus.PENDING
    status_history: list[StatusChange] = field(default_factory=list)
    confirmed_at: datetime | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None
    tracking_number: str | None = None
    customer_notes: str | None = None
    admin_notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_number: str,
        user_id: str,
        items: list[OrderLineItem],
        shipping_address: ShippingAddress,
        payment_method: PaymentMethod,
        discount_amount: Money,
        shipping_cost: Money,
        tax: Money,
        customer_notes: str | None = None,
        created_at: datetime | None = None,
    ) -> Order:
        """Create a new order, enforcing all invariants."""
        if not order_number:
            raise ValidationError("Order number is required")
        if not user_id or not user_id.strip():
            raise ValidationError("User is required", {"user_id": ["User is required"]})
        if not items:
            raise ValidationError("Order must contain at least one item")

        subtotal = Money.zero(tax.currency)
        for item in items:
            subtotal = subtotal + item.line_total
        if discount_amount > subtotal:
            raise ValidationError("Discount cannot exceed the order subtotal")

        now = created_at or datetime.now(timezone.utc)
        order = Order(
            id=None,
            order_number=order_number,
            user_id=user_id.strip(),
            items=list(items),
            shipping_address=shipping_address,
            subtotal=subtotal,
            discount_amount=discount_amount,
            shipping_cost=shipping_cost,
            tax=tax,
            payment_method=payment_method,
            customer_notes=customer_notes,
            created_at=now,
        )
        order.status_history.append(
            StatusChange(status=OrderStatus.PENDING, timestamp=now, note="Order created")
        )
        return order

    # --- State transitions ----------------------------------------------------

    def update_status(self, new_status: OrderStatus, note: str | None = None) -> bool:
        """Move the order to ``new_status``.

        Re-entering the current status is a no-op apart from back-filling
        ``note`` onto the latest history entry.  Returns True when a real
        transition happened.
        """
        if new_status == self.status:
            if note and self.status_history:
                latest = self.status_history[-1]
                self.status_history[-1] = StatusChange(latest.status, latest.timestamp, note)
            return False

        self._assert_can_transition(new_status)
        self._transition(new_status, note)
        return True

    def cancel(self, reason: str = "") -> None:
        """Transition PENDING|CONFIRMED -> CANCELLED.

        Restoring stock is the caller's job (coordinated by the
        application handler through the catalog store).
        """
        if not self.can_cancel:
            raise InvalidStateError(
                f"Order {self.order_number} cannot be cancelled in "
                f"{self.status.value} status"
            )
        if reason:
            self.admin_notes = reason
        self._transition(OrderStatus.CANCELLED, reason or None)

    def mark_as_paid(self, payment_reference: str | None = None) -> None:
        self.payment_status = PaymentStatus.PAID
        self.payment_id = payment_reference

    def set_payment_status(self, status: PaymentStatus, payment_reference: str | None = None) -> None:
        if status == PaymentStatus.PAID:
            self.mark_as_paid(payment_reference)
            return
        self.payment_status = status

    # --- Computed properties --------------------------------------------------

    @property
    def total_amount(self) -> Money:
        return self.subtotal - self.discount_amount + self.shipping_cost + self.tax

    @property
    def can_cancel(self) -> bool:
        return self.status in CANCELLABLE_STATUSES

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID

    @property
    def is_delivered(self) -> bool:
        return self.status == OrderStatus.DELIVERED

    @property
    def total_items(self) -> int:
        return sum(item.quantity.value for item in self.items)

    def contains_product(self, product_id: str) -> bool:
        return any(item.product_id == product_id for item in self.items)

    # --- Internal helpers -----------------------------------------------------

    def _assert_can_transition(self, new_status: OrderStatus) -> None:
        if self.status in TERMINAL_STATUSES:
            raise InvalidStateError(
                f"Order {self.order_number} is {self.status.value}; no further changes allowed"
            )
        if new_status == OrderStatus.CANCELLED:
            if not self.can_cancel:
                raise InvalidStateError(
                    f"Order {self.order_number} cannot be cancelled in "
                    f"{self.status.value} status"
                )
            return
        if new_status == OrderStatus.RETURNED:
            if self.status not in RETURNABLE_STATUSES:
                raise InvalidStateError(
                    f"Order {self.order_number} cannot be returned before it ships"
                )
            return
        if _FULFILLMENT_CHAIN.index(new_status) < _FULFILLMENT_CHAIN.index(self.status):
            raise InvalidStateError(
                f"Cannot move order {self.order_number} back from "
                f"{self.status.value} to {new_status.value}"
            )

    def _transition(self, new_status: OrderStatus, note: str | None) -> None:
        now = datetime.now(timezone.utc)
        self.status = new_status
        self.status_history.append(StatusChange(status=new_status, timestamp=now, note=note))

        # Milestones are stamped the first time only.
        if new_status == OrderStatus.CONFIRMED and self.confirmed_at is None:
            self.confirmed_at = now
        elif new_status == OrderStatus.SHIPPED and self.shipped_at is None:
            self.shipped_at = now
        elif new_status == OrderStatus.DELIVERED and self.delivered_at is None:
            self.delivered_at = now
        elif new_status == OrderStatus.CANCELLED and self.cancelled_at is None:
            self.cancelled_at = now
