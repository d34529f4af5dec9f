"""CLI commands for the Order aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.checkout import CheckoutHandler
from storefront.application.dto import OrderDTO, ShippingAddressSpec
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.order_stats import OrderStatsHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.application.update_payment_status import UpdatePaymentStatusHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    cart_repository,
    order_repository,
    product_repository,
)
from storefront.infrastructure.cli.errors import cli_error
from storefront.infrastructure.config import Settings


def _display_order(dto: OrderDTO, history: bool = False) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id} {dto.order_number}  (status={dto.status})")
    click.echo(f"User:     {dto.user_id}")
    click.echo(f"Payment:  {dto.payment_method} ({dto.payment_status})")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()

    click.echo(f"  {'Product':<28} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*64}")
    for item in dto.items:
        name = f"{item.product_name} ({item.variant})" if item.variant else item.product_name
        click.echo(
            f"  {name:<28} {item.quantity:>5} {item.unit_price:>14} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*64}")
    click.echo(f"  {'Subtotal':<34} {dto.subtotal:>30}")
    click.echo(f"  {'Discount':<34} {dto.discount_amount:>30}")
    click.echo(f"  {'Shipping':<34} {dto.shipping_cost:>30}")
    click.echo(f"  {'Tax':<34} {dto.tax:>30}")
    click.echo(f"  {'Order Total':<34} {dto.total:>30}")

    if history:
        click.echo()
        for change in dto.history:
            note = f"  {change.note}" if change.note else ""
            click.echo(f"  {change.timestamp}  {change.status:<10}{note}")


@click.command("checkout")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--name", required=True, help="Recipient name.")
@click.option("--phone", required=True, help="Recipient phone.")
@click.option("--address", required=True, help="Street address.")
@click.option("--city", required=True, help="City.")
@click.option("--state", required=True, help="State.")
@click.option("--pincode", required=True, help="Postal code.")
@click.option("--landmark", default=None, help="Nearby landmark.")
@click.option(
    "--payment",
    "payment_method",
    default="cod",
    show_default=True,
    help="Payment method (razorpay, cod, wallet).",
)
@click.option("--notes", default=None, help="Notes for the seller.")
@click.pass_obj
def order_checkout(
    settings: Settings,
    user_id: str,
    name: str,
    phone: str,
    address: str,
    city: str,
    state: str,
    pincode: str,
    landmark: str | None,
    payment_method: str,
    notes: str | None,
) -> None:
    """Place an order from the user's cart."""
    handler = CheckoutHandler(
        cart_repo=cart_repository(settings.data_dir),
        order_repo=order_repository(settings.data_dir),
        product_repo=product_repository(settings.data_dir),
    )
    spec = ShippingAddressSpec(
        name=name,
        phone=phone,
        address=address,
        city=city,
        state=state,
        pincode=pincode,
        landmark=landmark,
    )

    try:
        dto = handler.handle(
            user_id=user_id,
            shipping_address=spec,
            payment_method=payment_method,
            customer_notes=notes,
        )
    except DomainException as exc:
        raise cli_error(exc)

    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.option("--user", "user_id", default=None, help="Only show if owned by this user.")
@click.pass_obj
def order_show(settings: Settings, order_id: int, user_id: str | None) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository(settings.data_dir))

    try:
        dto = handler.handle(order_id, user_id=user_id)
    except DomainException as exc:
        raise cli_error(exc)

    _display_order(dto, history=True)


@click.command("list")
@click.option("--user", "user_id", default=None, help="Only this user's orders.")
@click.option("--status", default=None, help="Filter by order status.")
@click.option("--payment-status", default=None, help="Filter by payment status.")
@click.pass_obj
def order_list(
    settings: Settings,
    user_id: str | None,
    status: str | None,
    payment_status: str | None,
) -> None:
    """List orders, newest first."""
    handler = ListOrdersHandler(order_repo=order_repository(settings.data_dir))

    try:
        orders = handler.handle(user_id=user_id, status=status, payment_status=payment_status)
    except DomainException as exc:
        raise cli_error(exc)

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Number':<22} {'User':<14} {'Status':<11} {'Payment':<9} {'Total':>14}")
    click.echo("-" * 81)
    for o in orders:
        click.echo(
            f"{o.id:<6} {o.order_number:<22} {o.user_id:<14} {o.status:<11} {o.payment_status:<9} {o.total:>14}"
        )


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--status", required=True, help="New status.")
@click.option("--note", default=None, help="Note for the status history.")
@click.option("--tracking", "tracking_number", default=None, help="Carrier tracking number.")
@click.pass_obj
def order_status(
    settings: Settings,
    order_id: int,
    status: str,
    note: str | None,
    tracking_number: str | None,
) -> None:
    """Move an order along its lifecycle (admin)."""
    handler = UpdateOrderStatusHandler(
        order_repo=order_repository(settings.data_dir),
        product_repo=product_repository(settings.data_dir),
    )

    try:
        dto = handler.handle(
            order_id=order_id, status=status, note=note, tracking_number=tracking_number
        )
    except DomainException as exc:
        raise cli_error(exc)

    click.echo(f"Order #{order_id} is now {dto.status}.")


@click.command("payment")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--status", "payment_status", required=True, help="New payment status.")
@click.option("--reference", "payment_id", default=None, help="Payment gateway reference.")
@click.pass_obj
def order_payment(
    settings: Settings,
    order_id: int,
    payment_status: str,
    payment_id: str | None,
) -> None:
    """Record the payment status of an order."""
    handler = UpdatePaymentStatusHandler(order_repo=order_repository(settings.data_dir))

    try:
        dto = handler.handle(order_id=order_id, payment_status=payment_status, payment_id=payment_id)
    except DomainException as exc:
        raise cli_error(exc)

    click.echo(f"Order #{order_id} payment is {dto.payment_status}.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
@click.option("--user", "user_id", required=True, help="User cancelling the order.")
@click.option("--reason", default="", help="Why the order is cancelled.")
@click.pass_obj
def order_cancel(settings: Settings, order_id: int, user_id: str, reason: str) -> None:
    """Cancel an order and put its stock back."""
    handler = CancelOrderHandler(
        order_repo=order_repository(settings.data_dir),
        product_repo=product_repository(settings.data_dir),
    )

    try:
        handler.handle(order_id, user_id=user_id, reason=reason)
    except DomainException as exc:
        raise cli_error(exc)

    click.echo(f"Order #{order_id} cancelled.")


@click.command("stats")
@click.option("--from", "start", default=None, type=click.DateTime(), help="Only orders created on/after.")
@click.option("--to", "end", default=None, type=click.DateTime(), help="Only orders created on/before.")
@click.pass_obj
def order_stats(settings: Settings, start: datetime | None, end: datetime | None) -> None:
    """Show order totals (admin)."""
    handler = OrderStatsHandler(order_repo=order_repository(settings.data_dir))
    stats = handler.handle(start=start, end=end, currency=settings.currency)

    click.echo(f"{'Orders':<20} {stats.total_orders:>16}")
    click.echo(f"{'Revenue':<20} {stats.total_revenue:>16}")
    click.echo(f"{'Average order':<20} {stats.average_order_value:>16}")
    click.echo(f"{'Pending':<20} {stats.pending_orders:>16}")
    click.echo(f"{'Delivered':<20} {stats.completed_orders:>16}")
    if stats.other_currency_orders:
        click.echo(f"{'Other currencies':<20} {stats.other_currency_orders:>16}")
