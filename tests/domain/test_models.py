"""Unit tests for the Product, Category and MigrationSnapshot models."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from costprice.domain.exceptions import ValidationError
from costprice.domain.model.category import Category
from costprice.domain.model.migration_snapshot import MigrationSnapshot
from costprice.domain.model.product import Product


class TestProduct:

    def test_new_product_inherits(self):
        p = Product(sku="SKU-1", category_id="cat")
        assert not p.has_custom_cost_price

    def test_set_custom_cost_price(self):
        p = Product(sku="SKU-1")
        p.set_custom_cost_price(Decimal("12.50"))
        assert p.custom_cost_price == Decimal("12.50")
        assert p.has_custom_cost_price

    def test_negative_custom_cost_price_rejected(self):
        p = Product(sku="SKU-1")
        with pytest.raises(ValidationError, match="negative"):
            p.set_custom_cost_price(Decimal("-5"))
        assert p.custom_cost_price is None

    def test_inherit_clears_override(self):
        p = Product(sku="SKU-1", custom_cost_price=Decimal("3"))
        p.inherit_cost_price()
        assert p.custom_cost_price is None

    def test_blank_sku_rejected(self):
        with pytest.raises(ValidationError, match="SKU is required"):
            Product(sku="  ")

    def test_blank_category_means_none(self):
        assert Product(sku="SKU-1", category_id="").category_id is None


class TestCategory:

    def test_blank_id_rejected(self):
        with pytest.raises(ValidationError, match="ID is required"):
            Category(id="")

    def test_has_cost_price(self):
        assert not Category(id="c").has_cost_price
        assert Category(id="c", cost_price=Decimal("0")).has_cost_price


class TestMigrationSnapshot:

    def test_merge_keeps_first_previous_price_and_newest_overrides(self):
        first = MigrationSnapshot(
            category_id="c",
            previous_cost_price=None,
            overrides={"a": Decimal("1"), "b": Decimal("2")},
            migrated_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        later = MigrationSnapshot(
            category_id="c",
            previous_cost_price=Decimal("1.5"),
            overrides={"b": Decimal("20"), "c": Decimal("3")},
            migrated_at=datetime(2024, 2, 1, tzinfo=timezone.utc),
        )

        merged = first.merge(later)

        assert merged.previous_cost_price is None
        assert merged.overrides == {"a": Decimal("1"), "b": Decimal("20"), "c": Decimal("3")}
        assert merged.migrated_at == later.migrated_at
