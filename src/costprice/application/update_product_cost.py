"""Application service: Update Product Cost use case."""

from __future__ import annotations

from costprice.domain.exceptions import EntityNotFoundError
from costprice.domain.model.value_objects import price_of
from costprice.domain.repository.product_store import ProductStore


class UpdateProductCostHandler:

    def __init__(self, product_store: ProductStore) -> None:
        self._product_store = product_store

    def handle(self, sku: str, new_price: str | None) -> None:
        """Set a product's custom cost price, or clear it with ``None``.

        Clearing makes the product inherit its category's price again.
        """
        price = price_of(new_price) if new_price is not None else None

        product = self._product_store.get_by_sku(sku)
        if product is None:
            raise EntityNotFoundError(f"Product '{sku}' not found")

        if price is None:
            product.inherit_cost_price()
        else:
            product.set_custom_cost_price(price)
        self._product_store.save(product)
