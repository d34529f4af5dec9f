"""CLI commands for the Cart aggregate."""

from __future__ import annotations

import click

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.adjust_cart import AdjustCartHandler
from storefront.application.clear_cart import ClearCartHandler
from storefront.application.dto import CartDTO
from storefront.application.purge_carts import PurgeIdleCartsHandler
from storefront.application.remove_cart_item import RemoveCartItemHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.application.validate_cart import ValidateCartHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import cart_repository, product_repository
from storefront.infrastructure.cli.errors import cli_error
from storefront.infrastructure.config import Settings


def _display_cart(dto: CartDTO) -> None:
    """Shared formatting for displaying a cart."""
    click.echo(f"Cart of {dto.user_id}")
    if dto.is_empty:
        click.echo("  (empty)")
        return

    click.echo(f"  {'Line':<34} {'Product':<24} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*95}")
    for item in dto.items:
        name = f"{item.product_name} ({item.variant})" if item.variant else item.product_name
        click.echo(
            f"  {item.id:<34} {name:<24} {item.quantity:>5} {item.unit_price:>14} {item.item_total:>14}"
        )
    click.echo(f"  {'-'*95}")
    click.echo(f"  {'Items':<20} {dto.total_items} lines, {dto.total_quantity} units")
    click.echo(f"  {'Subtotal':<20} {dto.subtotal:>16}")
    click.echo(f"  {'Discount':<20} {dto.discount_amount:>16}")
    click.echo(f"  {'Shipping':<20} {dto.shipping_cost:>16}")
    click.echo(f"  {'Total':<20} {dto.grand_total:>16}")


@click.command("add")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Units to add.")
@click.option("--variant", "variant_id", default=None, help="Variant ID.")
@click.pass_obj
def cart_add(
    settings: Settings,
    user_id: str,
    product_id: str,
    quantity: int,
    variant_id: str | None,
) -> None:
    """Add a product to a user's cart."""
    handler = AddToCartHandler(
        cart_repo=cart_repository(settings.data_dir),
        product_repo=product_repository(settings.data_dir),
    )

    try:
        dto = handler.handle(
            user_id=user_id, product_id=product_id, quantity=quantity, variant_id=variant_id
        )
    except DomainException as exc:
        raise cli_error(exc)

    _display_cart(dto)


@click.command("update")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--line", "line_id", required=True, help="Cart line ID.")
@click.option("--quantity", required=True, type=int, help="New quantity (0 removes the line).")
@click.pass_obj
def cart_update(settings: Settings, user_id: str, line_id: str, quantity: int) -> None:
    """Change the quantity of a cart line."""
    handler = UpdateCartItemHandler(cart_repo=cart_repository(settings.data_dir))

    try:
        dto = handler.handle(user_id=user_id, line_id=line_id, quantity=quantity)
    except DomainException as exc:
        raise cli_error(exc)

    _display_cart(dto)


@click.command("remove")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--line", "line_id", required=True, help="Cart line ID.")
@click.pass_obj
def cart_remove(settings: Settings, user_id: str, line_id: str) -> None:
    """Remove a line from the cart."""
    handler = RemoveCartItemHandler(cart_repo=cart_repository(settings.data_dir))

    try:
        dto = handler.handle(user_id=user_id, line_id=line_id)
    except DomainException as exc:
        raise cli_error(exc)

    _display_cart(dto)


@click.command("clear")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.pass_obj
def cart_clear(settings: Settings, user_id: str) -> None:
    """Empty the cart."""
    handler = ClearCartHandler(cart_repo=cart_repository(settings.data_dir))

    try:
        handler.handle(user_id=user_id)
    except DomainException as exc:
        raise cli_error(exc)

    click.echo(f"Cart of {user_id} cleared.")


@click.command("show")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.pass_obj
def cart_show(settings: Settings, user_id: str) -> None:
    """Show a user's cart."""
    handler = ShowCartHandler(cart_repo=cart_repository(settings.data_dir))
    _display_cart(handler.handle(user_id))


@click.command("validate")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.pass_obj
def cart_validate(settings: Settings, user_id: str) -> None:
    """Check the cart against the live catalog."""
    handler = ValidateCartHandler(
        cart_repo=cart_repository(settings.data_dir),
        product_repo=product_repository(settings.data_dir),
    )

    try:
        problems = handler.handle(user_id)
    except DomainException as exc:
        raise cli_error(exc)

    if not problems:
        click.echo("All cart items are available.")
        return

    for line in problems:
        click.echo(f"  {line.line_id:<34} {line.reason:<22} {line.message}")
    raise click.exceptions.Exit(1)


@click.command("adjust")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--discount", default=None, help="Discount amount (e.g. 100.00).")
@click.option("--shipping", default=None, help="Shipping cost (e.g. 50.00).")
@click.pass_obj
def cart_adjust(
    settings: Settings,
    user_id: str,
    discount: str | None,
    shipping: str | None,
) -> None:
    """Set the discount and/or shipping cost of a cart."""
    handler = AdjustCartHandler(cart_repo=cart_repository(settings.data_dir))

    try:
        dto = handler.handle(user_id=user_id, discount=discount, shipping=shipping)
    except DomainException as exc:
        raise cli_error(exc)

    _display_cart(dto)


@click.command("purge")
@click.option("--idle-days", default=30, show_default=True, type=int, help="Minimum idle time.")
@click.pass_obj
def cart_purge(settings: Settings, idle_days: int) -> None:
    """Delete empty carts that have been idle for a while."""
    handler = PurgeIdleCartsHandler(cart_repo=cart_repository(settings.data_dir))

    try:
        purged = handler.handle(idle_days=idle_days)
    except DomainException as exc:
        raise cli_error(exc)

    click.echo(f"Purged {purged} idle cart(s).")
