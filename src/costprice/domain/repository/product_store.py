"""Product Store: typed access to the ``products`` collection.

Documents are keyed by SKU. Reads decode raw records into Product
aggregates at this boundary; writes are expressed as WriteOperations and
committed through the BatchWriter.
"""

from __future__ import annotations

from decimal import Decimal

from costprice.domain.model.product import Product
from costprice.domain.repository._codec import decode_price, encode_price
from costprice.domain.repository.document_store import (
    DocumentStore,
    WriteOperation,
    where,
)
from costprice.domain.service.batch_writer import BatchWriter

PRODUCTS_COLLECTION = "products"


class ProductStore:

    def __init__(self, store: DocumentStore, writer: BatchWriter) -> None:
        self._store = store
        self._writer = writer

    # --- Queries --------------------------------------------------------------

    def get_by_sku(self, sku: str) -> Product | None:
        raw = self._store.get_one(PRODUCTS_COLLECTION, sku)
        if raw is None:
            return None
        return self._to_domain(raw, sku)

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._store.get_many(PRODUCTS_COLLECTION)]

    def list_by_category(self, category_id: str) -> list[Product]:
        records = self._store.get_many(
            PRODUCTS_COLLECTION, [where("categoryId", "==", category_id)]
        )
        return [self._to_domain(raw) for raw in records]

    def list_inheriting(self, category_id: str) -> list[Product]:
        """Products in the category without a custom cost price."""
        records = self._store.get_many(
            PRODUCTS_COLLECTION,
            [
                where("categoryId", "==", category_id),
                where("customCostPrice", "==", None),
            ],
        )
        return [self._to_domain(raw) for raw in records]

    # --- Writes ---------------------------------------------------------------

    def save(self, product: Product) -> None:
        self._writer.commit([self.save_op(product)])

    @staticmethod
    def save_op(product: Product) -> WriteOperation:
        return WriteOperation.create(
            PRODUCTS_COLLECTION, product.sku, ProductStore._to_raw(product)
        )

    @staticmethod
    def custom_cost_price_op(sku: str, price: Decimal | None) -> WriteOperation:
        return WriteOperation.update(
            PRODUCTS_COLLECTION, sku, {"customCostPrice": encode_price(price)}
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "sku": product.sku,
            "name": product.name,
            "categoryId": product.category_id,
            "customCostPrice": encode_price(product.custom_cost_price),
        }

    @staticmethod
    def _to_domain(raw: dict, sku: str | None = None) -> Product:
        sku = raw.get("sku") or raw.get("id") or sku
        return Product(
            sku=sku,
            name=raw.get("name") or "",
            category_id=raw.get("categoryId") or None,
            custom_cost_price=decode_price(
                raw.get("customCostPrice"), f"product {sku}"
            ),
        )
