"""Category Store: typed access to the ``categories`` collection."""

from __future__ import annotations

from decimal import Decimal

from costprice.domain.model.category import Category
from costprice.domain.repository._codec import decode_price, encode_price
from costprice.domain.repository.document_store import DocumentStore, WriteOperation
from costprice.domain.service.batch_writer import BatchWriter

CATEGORIES_COLLECTION = "categories"


class CategoryStore:

    def __init__(self, store: DocumentStore, writer: BatchWriter) -> None:
        self._store = store
        self._writer = writer

    def get_by_id(self, category_id: str) -> Category | None:
        raw = self._store.get_one(CATEGORIES_COLLECTION, category_id)
        if raw is None:
            return None
        return self._to_domain(raw, category_id)

    def list_all(self) -> list[Category]:
        return [
            self._to_domain(raw)
            for raw in self._store.get_many(CATEGORIES_COLLECTION)
        ]

    def save(self, category: Category) -> None:
        self._writer.commit([self.save_op(category)])

    def set_cost_price(self, category_id: str, price: Decimal | None) -> None:
        self._writer.commit([self.cost_price_op(category_id, price)])

    @staticmethod
    def save_op(category: Category) -> WriteOperation:
        return WriteOperation.create(
            CATEGORIES_COLLECTION,
            category.id,
            {"name": category.name, "costPrice": encode_price(category.cost_price)},
        )

    @staticmethod
    def cost_price_op(category_id: str, price: Decimal | None) -> WriteOperation:
        return WriteOperation.update(
            CATEGORIES_COLLECTION, category_id, {"costPrice": encode_price(price)}
        )

    @staticmethod
    def _to_domain(raw: dict, category_id: str | None = None) -> Category:
        category_id = raw.get("id") or category_id
        return Category(
            id=category_id,
            name=raw.get("name") or "",
            cost_price=decode_price(raw.get("costPrice"), f"category {category_id}"),
        )
