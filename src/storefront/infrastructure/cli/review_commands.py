"""CLI commands for product reviews."""

from __future__ import annotations

import click

from storefront.application.create_review import CreateReviewHandler
from storefront.application.delete_review import DeleteReviewHandler
from storefront.application.dto import ReviewDTO
from storefront.application.list_user_reviews import ListUserReviewsHandler
from storefront.application.moderate_review import ModerateReviewHandler
from storefront.application.show_product_reviews import ShowProductReviewsHandler
from storefront.application.update_review import UpdateReviewHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    order_repository,
    product_repository,
    review_repository,
)
from storefront.infrastructure.cli.errors import cli_error
from storefront.infrastructure.config import Settings

_RATING = click.IntRange(1, 5)


def _display_review(dto: ReviewDTO) -> None:
    stars = "*" * dto.rating
    badges = []
    if dto.is_verified:
        badges.append("verified purchase")
    if not dto.is_approved:
        badges.append("hidden")
    suffix = f"  [{', '.join(badges)}]" if badges else ""
    click.echo(f"#{dto.id} {stars:<5} {dto.title or ''} by {dto.user_id} on {dto.created_at}{suffix}")
    click.echo(f"    {dto.comment}")
    if dto.helpful_votes:
        click.echo(f"    {dto.helpful_votes} found this helpful")


@click.command("create")
@click.option("--user", "user_id", required=True, help="Reviewer's user ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--rating", required=True, type=_RATING, help="Stars, 1 to 5.")
@click.option("--comment", required=True, help="Review text (10 to 1000 characters).")
@click.option("--title", default=None, help="Short headline.")
@click.option("--order", "order_id", default=None, type=int, help="Order the product came from.")
@click.pass_obj
def review_create(
    settings: Settings,
    user_id: str,
    product_id: str,
    rating: int,
    comment: str,
    title: str | None,
    order_id: int | None,
) -> None:
    """Review a product."""
    handler = CreateReviewHandler(
        review_repo=review_repository(settings.data_dir),
        product_repo=product_repository(settings.data_dir),
        order_repo=order_repository(settings.data_dir),
    )

    try:
        dto = handler.handle(
            user_id=user_id,
            product_id=product_id,
            rating=rating,
            comment=comment,
            title=title,
            order_id=order_id,
        )
    except DomainException as exc:
        raise cli_error(exc)

    click.echo(f"Review #{dto.id} created.")
    _display_review(dto)


@click.command("update")
@click.option("--id", "review_id", required=True, type=int, help="Review ID.")
@click.option("--user", "user_id", required=True, help="Reviewer's user ID.")
@click.option("--rating", default=None, type=_RATING, help="New star rating.")
@click.option("--comment", default=None, help="New review text.")
@click.option("--title", default=None, help="New headline.")
@click.pass_obj
def review_update(
    settings: Settings,
    review_id: int,
    user_id: str,
    rating: int | None,
    comment: str | None,
    title: str | None,
) -> None:
    """Edit your own review."""
    handler = UpdateReviewHandler(
        review_repo=review_repository(settings.data_dir),
        product_repo=product_repository(settings.data_dir),
        order_repo=order_repository(settings.data_dir),
    )

    try:
        dto = handler.handle(
            review_id=review_id, user_id=user_id, rating=rating, title=title, comment=comment
        )
    except DomainException as exc:
        raise cli_error(exc)

    click.echo(f"Review #{dto.id} updated.")
    _display_review(dto)


@click.command("delete")
@click.option("--id", "review_id", required=True, type=int, help="Review ID.")
@click.option("--user", "user_id", required=True, help="User deleting the review.")
@click.option("--admin", "is_admin", is_flag=True, help="Delete as an administrator.")
@click.pass_obj
def review_delete(settings: Settings, review_id: int, user_id: str, is_admin: bool) -> None:
    """Delete a review."""
    handler = DeleteReviewHandler(
        review_repo=review_repository(settings.data_dir),
        product_repo=product_repository(settings.data_dir),
    )

    try:
        handler.handle(review_id=review_id, user_id=user_id, is_admin=is_admin)
    except DomainException as exc:
        raise cli_error(exc)

    click.echo(f"Review #{review_id} deleted.")


@click.command("helpful")
@click.option("--id", "review_id", required=True, type=int, help="Review ID.")
@click.pass_obj
def review_helpful(settings: Settings, review_id: int) -> None:
    """Vote a review as helpful."""
    handler = ModerateReviewHandler(
        review_repo=review_repository(settings.data_dir),
        product_repo=product_repository(settings.data_dir),
    )

    try:
        dto = handler.mark_helpful(review_id)
    except DomainException as exc:
        raise cli_error(exc)

    click.echo(f"Review #{review_id} now has {dto.helpful_votes} helpful vote(s).")


@click.command("approve")
@click.option("--id", "review_id", required=True, type=int, help="Review ID.")
@click.pass_obj
def review_approve(settings: Settings, review_id: int) -> None:
    """Make a review visible again (admin)."""
    handler = ModerateReviewHandler(
        review_repo=review_repository(settings.data_dir),
        product_repo=product_repository(settings.data_dir),
    )

    try:
        handler.approve(review_id)
    except DomainException as exc:
        raise cli_error(exc)

    click.echo(f"Review #{review_id} approved.")


@click.command("reject")
@click.option("--id", "review_id", required=True, type=int, help="Review ID.")
@click.option("--reason", default="", help="Moderation note.")
@click.pass_obj
def review_reject(settings: Settings, review_id: int, reason: str) -> None:
    """Hide a review from the product page (admin)."""
    handler = ModerateReviewHandler(
        review_repo=review_repository(settings.data_dir),
        product_repo=product_repository(settings.data_dir),
    )

    try:
        handler.reject(review_id, reason=reason)
    except DomainException as exc:
        raise cli_error(exc)

    click.echo(f"Review #{review_id} rejected.")


@click.command("list")
@click.option("--product", "product_id", default=None, help="Reviews of this product.")
@click.option("--user", "user_id", default=None, help="Reviews written by this user.")
@click.option("--rating", default=None, type=_RATING, help="Only reviews with this many stars.")
@click.pass_obj
def review_list(
    settings: Settings,
    product_id: str | None,
    user_id: str | None,
    rating: int | None,
) -> None:
    """List reviews of a product or by a user."""
    if (product_id is None) == (user_id is None):
        raise click.UsageError("Give exactly one of --product or --user.")

    if user_id is not None:
        reviews = ListUserReviewsHandler(
            review_repo=review_repository(settings.data_dir)
        ).handle(user_id)
        if not reviews:
            click.echo("No reviews found.")
        for dto in reviews:
            _display_review(dto)
        return

    handler = ShowProductReviewsHandler(
        review_repo=review_repository(settings.data_dir),
        product_repo=product_repository(settings.data_dir),
    )
    try:
        result = handler.handle(product_id, rating=rating)
    except DomainException as exc:
        raise cli_error(exc)

    summary = result.summary
    click.echo(f"{result.product_name}: {summary.average_rating} / 5 from {summary.total_reviews} review(s)")
    for stars in sorted(summary.breakdown, reverse=True):
        click.echo(f"  {stars} star: {summary.breakdown[stars]}")
    click.echo()
    if not result.reviews:
        click.echo("No reviews found.")
    for dto in result.reviews:
        _display_review(dto)
