"""CLI commands for the Product catalog."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.add_variant import AddVariantHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository
from storefront.infrastructure.cli.errors import cli_error
from storefront.infrastructure.config import Settings


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 1000.00).")
@click.option("--stock", default=0, show_default=True, type=int, help="Units in stock.")
@click.option("--image", default="", help="Image URL.")
@click.pass_obj
def product_add(settings: Settings, name: str, price: str, stock: int, image: str) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository(settings.data_dir))

    try:
        product = handler.handle(
            name=name, price=price, stock=stock, image=image, currency=settings.currency
        )
    except DomainException as exc:
        raise cli_error(exc)

    click.echo(f"Product #{product.id} '{product.name}' added at {product.price} ({product.stock} in stock)")


@click.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include deactivated products.")
@click.pass_obj
def product_list(settings: Settings, show_all: bool) -> None:
    """List products in the catalog."""
    repo = product_repository(settings.data_dir)
    products = [p for p in repo.list_all() if show_all or p.is_active]

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Price':>14} {'Stock':>7} {'Rating':>7} {'Reviews':>8}")
    click.echo("-" * 70)
    for p in products:
        name = p.name if p.is_active else f"{p.name} (inactive)"
        click.echo(
            f"{p.id:<6} {name:<24} {str(p.price):>14} {p.stock:>7} {str(p.rating):>7} {p.num_reviews:>8}"
        )
        for v in p.variants:
            price = str(v.price) if v.price else "-"
            click.echo(f"{'':<6}   {v.id:<10} {v.label:<18} {price:>14} {v.stock:>7}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
@click.pass_obj
def product_update(settings: Settings, product_id: str, price: str) -> None:
    """Update a product's price."""
    handler = UpdateProductHandler(product_repo=product_repository(settings.data_dir))

    try:
        handler.handle(product_id=product_id, new_price=price)
    except DomainException as exc:
        raise cli_error(exc)

    click.echo(f"Product #{product_id} price updated to {price}")


@click.command("stock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New stock level.")
@click.pass_obj
def product_stock(settings: Settings, product_id: str, quantity: int) -> None:
    """Set a product's stock level."""
    handler = UpdateProductHandler(product_repo=product_repository(settings.data_dir))

    try:
        handler.set_stock(product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise cli_error(exc)

    click.echo(f"Stock for product #{product_id} set to {quantity}")


@click.command("variant")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="Variant name (e.g. Size).")
@click.option("--value", required=True, help="Variant value (e.g. XL).")
@click.option("--stock", default=0, show_default=True, type=int, help="Units in stock.")
@click.option("--price", default=None, help="Price override for this variant.")
@click.pass_obj
def product_variant(
    settings: Settings,
    product_id: str,
    name: str,
    value: str,
    stock: int,
    price: str | None,
) -> None:
    """Add a variant to a product."""
    handler = AddVariantHandler(product_repo=product_repository(settings.data_dir))

    try:
        variant = handler.handle(
            product_id=product_id, name=name, value=value, stock=stock, price=price
        )
    except DomainException as exc:
        raise cli_error(exc)

    click.echo(f"Variant {variant.id} '{variant.label}' added to product #{product_id}")


@click.command("deactivate")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_deactivate(settings: Settings, product_id: str) -> None:
    """Retire a product from the catalog."""
    handler = UpdateProductHandler(product_repo=product_repository(settings.data_dir))

    try:
        handler.deactivate(product_id)
    except DomainException as exc:
        raise cli_error(exc)

    click.echo(f"Product #{product_id} deactivated.")
