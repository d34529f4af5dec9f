"""Application service: Checkout use case.

Turns the user's cart into an Order.  This is the only place that
coordinates all three of Cart, Order and the catalog store:

1. validate the cart against the live catalog (no effects on failure)
2. snapshot the lines and compute tax and totals
3. persist the order
4. take stock out of the catalog, one atomic decrement per line
5. consume the cart

Step 4 has two outcomes that are not plain success.  A product that has
vanished since validation is logged and skipped; the order still goes
through.  A product whose stock was taken by a concurrent checkout in
the meantime triggers compensation: stock already taken for this order
is put back, the order is cancelled, and the cart is left untouched so
the user can retry.

Step 5 cannot fail once the order exists.  If the cart was changed by
another request since it was loaded, the fresh copy is reloaded and only
the ordered quantities are taken off it; anything added meanwhile stays.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from storefront.application.dto import OrderDTO, ShippingAddressSpec, order_to_dto
from storefront.domain.exceptions import (
    ConflictError,
    InsufficientStockError,
    ValidationError,
)
from storefront.domain.model.cart import Cart
from storefront.domain.model.order import (
    TAX_RATE_PERCENT,
    Order,
    OrderLineItem,
    PaymentMethod,
    ShippingAddress,
    generate_order_number,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import (
    ProductRepository,
    StockAdjustment,
)
from storefront.domain.service.cart_validation_service import CartValidationService

logger = structlog.get_logger(__name__)


class CheckoutHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(
        self,
        user_id: str,
        shipping_address: ShippingAddressSpec,
        payment_method: str,
        customer_notes: str | None = None,
    ) -> OrderDTO:
        # --- Preconditions (fail fast, nothing written) -----------------------
        cart = self._cart_repo.get_by_user(user_id)
        if cart is None or cart.is_empty:
            raise ValidationError("Cart is empty", {"cart": ["Cart is empty"]})

        address = ShippingAddress(
            name=shipping_address.name,
            phone=shipping_address.phone,
            address=shipping_address.address,
            city=shipping_address.city,
            state=shipping_address.state,
            pincode=shipping_address.pincode,
            landmark=shipping_address.landmark,
        )
        method = self._parse_payment_method(payment_method)
        self._assert_cart_purchasable(cart)

        # --- Build and persist the order --------------------------------------
        order = self._build_order(cart, address, method, customer_notes)
        self._order_repo.save(order)

        # --- Take stock ---------------------------------------------------------
        self._take_stock(order)

        # --- Consume the cart ---------------------------------------------------
        self._consume_cart(cart, order)

        logger.info(
            "Order placed",
            order_id=order.id,
            order_number=order.order_number,
            user_id=user_id,
            total=order.total_amount.amount,
        )
        return order_to_dto(order)

    # --- Steps ------------------------------------------------------------------

    def _assert_cart_purchasable(self, cart: Cart) -> None:
        invalid = CartValidationService(self._product_repo).validate(cart)
        if not invalid:
            return

        messages = [line.message for line in invalid]
        if all(line.is_stock_problem for line in invalid):
            raise InsufficientStockError("; ".join(messages))
        raise ValidationError(
            "Some cart items cannot be purchased",
            {line.line_id: [line.message] for line in invalid},
        )

    def _build_order(
        self,
        cart: Cart,
        address: ShippingAddress,
        method: PaymentMethod,
        customer_notes: str | None,
    ) -> Order:
        tax = cart.subtotal.percentage(TAX_RATE_PERCENT)

        items = [
            OrderLineItem(
                product_id=line.product_id,
                product_name=line.product_name,
                product_image=line.product_image,
                quantity=Quantity(line.quantity),
                unit_price=line.effective_price,  # <-- price snapshot
                selected_variant=line.selected_variant,
            )
            for line in cart.items
        ]

        created_at = datetime.now(timezone.utc)
        order_number = generate_order_number(created_at, self._order_repo.count() + 1)

        return Order.create(
            order_number=order_number,
            user_id=cart.user_id,
            items=items,
            shipping_address=address,
            payment_method=method,
            discount_amount=cart.discount_amount,
            shipping_cost=cart.shipping_cost,
            tax=tax,
            customer_notes=customer_notes,
            created_at=created_at,
        )

    def _take_stock(self, order: Order) -> None:
        taken: list[tuple[str, int]] = []

        for item in order.items:
            qty = item.quantity.value
            result = self._product_repo.decrement_stock(item.product_id, qty)

            if result == StockAdjustment.APPLIED:
                taken.append((item.product_id, qty))
            elif result == StockAdjustment.NOT_FOUND:
                logger.warning(
                    "Product missing during stock decrement; skipped",
                    order_number=order.order_number,
                    product_id=item.product_id,
                    quantity=qty,
                )
            else:
                self._compensate(order, taken)
                raise InsufficientStockError(
                    f"{item.product_name} sold out while placing the order; "
                    f"nothing was charged, please try again"
                )

    def _compensate(self, order: Order, taken: list[tuple[str, int]]) -> None:
        for product_id, qty in taken:
            self._product_repo.increment_stock(product_id, qty)
        order.cancel("Stock ran out during checkout")
        self._order_repo.save(order)
        logger.warning(
            "Checkout rolled back",
            order_number=order.order_number,
            restored_lines=len(taken),
        )

    def _consume_cart(self, cart: Cart, order: Order) -> None:
        cart.clear()
        while True:
            try:
                self._cart_repo.save(cart)
                return
            except ConflictError:
                pass

            cart = self._cart_repo.get_by_user(order.user_id)
            if cart is None:
                return
            self._remove_ordered_lines(cart, order)
            logger.info(
                "Cart changed during checkout; removed ordered lines",
                order_number=order.order_number,
                user_id=order.user_id,
                lines_left=len(cart.items),
            )

    @staticmethod
    def _remove_ordered_lines(cart: Cart, order: Order) -> None:
        for item in order.items:
            for line in cart.items:
                if line.matches(item.product_id, item.selected_variant):
                    cart.update_item_quantity(line.id, line.quantity - item.quantity.value)
                    break

        # Adjustments were carried into the order.
        if cart.is_empty:
            cart.clear()
        else:
            cart.apply_discount(Money.zero(cart.currency))
            cart.set_shipping_cost(Money.zero(cart.currency))

    @staticmethod
    def _parse_payment_method(raw: str) -> PaymentMethod:
        try:
            return PaymentMethod(raw.lower())
        except ValueError:
            allowed = ", ".join(m.value for m in PaymentMethod)
            raise ValidationError(
                f"Unknown payment method '{raw}'",
                {"payment_method": [f"Payment method must be one of: {allowed}"]},
            ) from None
