"""Application service: Add Product use case.

New products never carry a custom cost price; they inherit from their
category until a user sets one.
"""

from __future__ import annotations

from costprice.domain.exceptions import EntityNotFoundError, ValidationError
from costprice.domain.model.product import Product
from costprice.domain.repository.category_store import CategoryStore
from costprice.domain.repository.product_store import ProductStore


class AddProductHandler:

    def __init__(self, product_store: ProductStore, category_store: CategoryStore) -> None:
        self._product_store = product_store
        self._category_store = category_store

    def handle(self, sku: str, name: str, category_id: str | None = None) -> Product:
        """Add a new product to the catalog."""
        product = Product(
            sku=(sku or "").strip(),
            name=(name or "").strip(),
            category_id=category_id.strip() if category_id else None,
        )

        if self._product_store.get_by_sku(product.sku) is not None:
            raise ValidationError(f"Product '{product.sku}' already exists")

        if product.category_id is not None:
            if self._category_store.get_by_id(product.category_id) is None:
                raise EntityNotFoundError(
                    f"Category '{product.category_id}' not found"
                )

        self._product_store.save(product)
        return product
