from __future__ import annotations

import click

from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_adjust,
    cart_clear,
    cart_purge,
    cart_remove,
    cart_show,
    cart_update,
    cart_validate,
)
from storefront.infrastructure.cli.order_commands import (
    order_cancel,
    order_checkout,
    order_list,
    order_payment,
    order_show,
    order_stats,
    order_status,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_deactivate,
    product_list,
    product_stock,
    product_update,
    product_variant,
)
from storefront.infrastructure.cli.review_commands import (
    review_approve,
    review_create,
    review_delete,
    review_helpful,
    review_list,
    review_reject,
    review_update,
)
from storefront.infrastructure.config import load_settings
from storefront.infrastructure.logging import configure_logging


@click.group()
@click.option(
    "--data-dir",
    envvar="STOREFRONT_DATA_DIR",
    type=click.Path(file_okay=False),
    help="Directory holding the JSON data files.",
)
@click.option(
    "--log-level",
    envvar="STOREFRONT_LOG_LEVEL",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Minimum level of log lines written to stderr.",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: str | None, log_level: str | None) -> None:
    """Storefront — carts, checkout, orders and reviews"""
    settings = load_settings(data_dir=data_dir, log_level=log_level)
    configure_logging(settings.log_level, json=settings.log_json)
    ctx.obj = settings


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def cart() -> None:
    """Manage shopping carts."""


@cli.group()
def order() -> None:
    """Place and manage orders."""


@cli.group()
def review() -> None:
    """Write and moderate product reviews."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
product.add_command(product_stock)
product.add_command(product_variant)
product.add_command(product_deactivate)
cart.add_command(cart_add)
cart.add_command(cart_update)
cart.add_command(cart_remove)
cart.add_command(cart_clear)
cart.add_command(cart_show)
cart.add_command(cart_validate)
cart.add_command(cart_adjust)
cart.add_command(cart_purge)
order.add_command(order_checkout)
order.add_command(order_show)
order.add_command(order_list)
order.add_command(order_status)
order.add_command(order_payment)
order.add_command(order_cancel)
order.add_command(order_stats)
review.add_command(review_create)
review.add_command(review_update)
review.add_command(review_delete)
review.add_command(review_helpful)
review.add_command(review_approve)
review.add_command(review_reject)
review.add_command(review_list)
