"""Unit tests for the Product aggregate."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product, ProductVariant
from storefront.domain.model.value_objects import Money


def _product(**overrides) -> Product:
    fields = dict(id="1", name="T-Shirt", price=Money.of("500"), stock=10)
    fields.update(overrides)
    return Product(**fields)


class TestProduct:

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            _product(stock=-1)

    def test_in_stock(self):
        assert _product(stock=1).in_stock
        assert not _product(stock=0).in_stock

    def test_update_price(self):
        product = _product()
        product.update_price(Money.of("450"))
        assert product.price == Money.of("450")

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            _product().update_price(Money.zero())

    def test_deactivate(self):
        product = _product()
        product.deactivate()
        assert not product.is_active


class TestVariants:

    def test_add_and_find_variant(self):
        product = _product()
        product.add_variant(ProductVariant(id="1-1", name="Size", value="XL", stock=3))

        assert product.get_variant("1-1").label == "Size: XL"
        assert product.find_variant("Size", "XL").id == "1-1"
        assert product.get_variant("nope") is None

    def test_duplicate_variant_rejected(self):
        product = _product()
        product.add_variant(ProductVariant(id="1-1", name="Size", value="XL"))
        with pytest.raises(ValidationError, match="already exists"):
            product.add_variant(ProductVariant(id="1-2", name="Size", value="XL"))

    def test_negative_variant_stock_rejected(self):
        with pytest.raises(ValidationError):
            ProductVariant(id="1-1", name="Size", value="XL", stock=-2)


class TestRatingSummary:

    def test_update_rating(self):
        product = _product()
        product.update_rating(Decimal("4.5"), 2)
        assert product.rating == Decimal("4.5")
        assert product.num_reviews == 2

    def test_out_of_range_rejected(self):
        with pytest.raises(ValidationError, match="between 0 and 5"):
            _product().update_rating(Decimal("5.1"), 1)
