"""Domain service: Cost Price Resolution.

Works out the effective cost price of a product. The layers are checked
in a fixed order:

  1. the product's own custom cost price,
  2. the price of the product's category,
  3. the system default (0).

Resolution is a pure read. A store failure is raised, never reported as a
default. Batch resolution is the exception: one unreadable category
degrades to "missing" and the rest of the batch still resolves.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable

from costprice.domain.exceptions import EntityNotFoundError, StoreError
from costprice.domain.model.product import Product
from costprice.domain.model.value_objects import (
    CostPriceResolution,
    CostPriceSource,
)
from costprice.domain.repository.category_store import CategoryStore
from costprice.domain.repository.product_store import ProductStore

logger = logging.getLogger(__name__)


class CostResolutionService:

    def __init__(self, product_store: ProductStore, category_store: CategoryStore) -> None:
        self._product_store = product_store
        self._category_store = category_store

    def resolve_for_product(self, sku: str) -> CostPriceResolution:
        product = self._product_store.get_by_sku(sku)
        if product is None:
            return CostPriceResolution.default(sku)

        if product.has_custom_cost_price or product.category_id is None:
            return self._resolve(product, {})

        category = self._category_store.get_by_id(product.category_id)
        prices: dict[str, Decimal] = {}
        if category is not None and category.has_cost_price:
            prices[category.id] = category.cost_price
        return self._resolve(product, prices)

    def resolve_for_category(self, category_id: str) -> CostPriceResolution:
        """The category's own price, without any product in the picture.

        Unlike product resolution this is a direct lookup, so a missing
        category raises EntityNotFoundError instead of degrading.
        """
        category = self._category_store.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundError(f"Category '{category_id}' not found")
        if not category.has_cost_price:
            return CostPriceResolution.default("", category_id)
        return CostPriceResolution(
            value=category.cost_price,
            source=CostPriceSource.CATEGORY,
            category_id=category_id,
            sku="",
        )

    def resolve_batch(self, products: Iterable[Product]) -> dict[str, CostPriceResolution]:
        """Resolve many products with one category fetch per distinct category."""
        products = list(products)
        prices = self._load_category_prices(
            {p.category_id for p in products if p.category_id is not None}
        )
        return {product.sku: self._resolve(product, prices) for product in products}

    # --- Internal helpers -----------------------------------------------------

    def _load_category_prices(self, category_ids: set[str]) -> dict[str, Decimal]:
        """Build the ``category_id -> price`` table for one batch.

        Categories that are missing, unpriced or fail to load are left out,
        which makes their products fall back to the default.
        """
        prices: dict[str, Decimal] = {}
        for category_id in sorted(category_ids):
            try:
                category = self._category_store.get_by_id(category_id)
            except StoreError as exc:
                logger.warning(
                    "Could not load category %s during batch resolution, "
                    "treating it as missing: %s", category_id, exc,
                )
                continue
            if category is not None and category.has_cost_price:
                prices[category_id] = category.cost_price
        return prices

    @staticmethod
    def _resolve(product: Product, category_prices: dict[str, Decimal]) -> CostPriceResolution:
        if product.has_custom_cost_price:
            return CostPriceResolution(
                value=product.custom_cost_price,
                source=CostPriceSource.PRODUCT,
                category_id=product.category_id,
                sku=product.sku,
            )

        if product.category_id is None:
            return CostPriceResolution.default(product.sku)

        price = category_prices.get(product.category_id)
        if price is None:
            # Dangling or unpriced category: keep the reference for diagnostics.
            return CostPriceResolution.default(product.sku, product.category_id)

        return CostPriceResolution(
            value=price,
            source=CostPriceSource.CATEGORY,
            category_id=product.category_id,
            sku=product.sku,
        )
