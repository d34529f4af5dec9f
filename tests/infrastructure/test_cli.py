"""End-to-end tests for the click CLI against a temporary data directory."""

import pytest
from click.testing import CliRunner

from storefront.infrastructure.cli.main import cli
from storefront.infrastructure.persistence.json_cart_repository import JsonCartRepository
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)

CHECKOUT = [
    "order", "checkout", "--user", "alice",
    "--name", "Alice", "--phone", "9999999999", "--address", "1 MG Road",
    "--city", "Bengaluru", "--state", "KA", "--pincode", "560001",
]


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()

    def _run(*args: str):
        return runner.invoke(cli, ["--data-dir", str(tmp_path), "--log-level", "ERROR", *args])

    return _run


@pytest.fixture
def stocked(run):
    assert run("product", "add", "--name", "Shirt", "--price", "1000", "--stock", "5").exit_code == 0
    assert run("product", "add", "--name", "Mug", "--price", "200", "--stock", "1").exit_code == 0
    return run


class TestProductCommands:

    def test_add_and_list(self, stocked):
        result = stocked("product", "list")
        assert result.exit_code == 0
        assert "Shirt" in result.output
        assert "INR 1000.00" in result.output

    def test_duplicate_name_fails(self, stocked):
        result = stocked("product", "add", "--name", "Shirt", "--price", "10")
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_variant_stock_and_deactivate(self, stocked):
        assert stocked("product", "variant", "--id", "1", "--name", "Size", "--value", "XL").exit_code == 0
        assert stocked("product", "stock", "--id", "1", "--quantity", "9").exit_code == 0
        assert stocked("product", "deactivate", "--id", "2").exit_code == 0

        listed = stocked("product", "list").output
        assert "Size: XL" in listed
        assert "Mug" not in listed
        assert "Mug (inactive)" in stocked("product", "list", "--all").output


class TestShoppingFlow:

    def test_cart_to_order_to_cancel(self, stocked, tmp_path):
        assert stocked("cart", "add", "--user", "alice", "--product", "1", "--quantity", "2").exit_code == 0
        assert stocked("cart", "adjust", "--user", "alice", "--discount", "100", "--shipping", "50").exit_code == 0

        shown = stocked("cart", "show", "--user", "alice")
        assert "INR 1950.00" in shown.output

        placed = stocked(*CHECKOUT)
        assert placed.exit_code == 0, placed.output
        # 2000 - 100 + 50 + 360 tax
        assert "INR 2310.00" in placed.output
        assert "(empty)" in stocked("cart", "show", "--user", "alice").output
        assert JsonProductRepository(tmp_path / "products.json").get_by_id("1").stock == 3

        cancelled = stocked("order", "cancel", "--id", "1", "--user", "alice")
        assert cancelled.exit_code == 0
        assert "status=cancelled" in stocked("order", "show", "--id", "1").output

    def test_update_line_by_id(self, stocked, tmp_path):
        stocked("cart", "add", "--user", "alice", "--product", "1")
        line_id = JsonCartRepository(tmp_path / "carts.json").get_by_user("alice").items[0].id

        result = stocked("cart", "update", "--user", "alice", "--line", line_id, "--quantity", "3")

        assert result.exit_code == 0
        assert "INR 3000.00" in result.output

    def test_checkout_empty_cart_fails(self, stocked):
        result = stocked(*CHECKOUT)
        assert result.exit_code == 1
        assert "Cart is empty" in result.output

    def test_validation_errors_are_itemized(self, stocked):
        stocked("cart", "add", "--user", "alice", "--product", "1")
        args = [a if a != "560001" else " " for a in CHECKOUT]

        result = stocked(*args)

        assert result.exit_code == 1
        assert "pincode: Shipping pincode is required" in result.output

    def test_validate_reports_shortfall(self, stocked):
        stocked("cart", "add", "--user", "alice", "--product", "2")
        stocked("product", "stock", "--id", "2", "--quantity", "0")

        result = stocked("cart", "validate", "--user", "alice")

        assert result.exit_code == 1
        assert "insufficient_stock" in result.output

    def test_admin_status_and_payment(self, stocked):
        stocked("cart", "add", "--user", "alice", "--product", "1")
        stocked(*CHECKOUT, "--payment", "razorpay")

        assert "now shipped" in stocked("order", "status", "--id", "1", "--status", "shipped").output
        assert "payment is paid" in stocked("order", "payment", "--id", "1", "--status", "paid").output

        listed = stocked("order", "list", "--status", "shipped")
        assert "alice" in listed.output
        stats = stocked("order", "stats").output.splitlines()
        assert ["Orders", "1"] in [line.split() for line in stats]


class TestReviewCommands:

    def test_review_updates_product_rating(self, stocked):
        for user, rating in [("a", "5"), ("b", "4")]:
            result = stocked(
                "review", "create", "--user", user, "--product", "1",
                "--rating", rating, "--comment", "Nice and comfortable",
            )
            assert result.exit_code == 0, result.output

        listed = stocked("review", "list", "--product", "1")
        assert "4.5 / 5 from 2 review(s)" in listed.output

    def test_rating_out_of_range_is_a_usage_error(self, stocked):
        result = stocked(
            "review", "create", "--user", "a", "--product", "1",
            "--rating", "7", "--comment", "Nice and comfortable",
        )
        assert result.exit_code == 2

    def test_list_needs_product_or_user(self, stocked):
        assert stocked("review", "list").exit_code == 2
