"""Application service: Add Category use case."""

from __future__ import annotations

from costprice.domain.exceptions import ValidationError
from costprice.domain.model.category import Category
from costprice.domain.model.value_objects import optional_price_of
from costprice.domain.repository.category_store import CategoryStore


class AddCategoryHandler:

    def __init__(self, category_store: CategoryStore) -> None:
        self._category_store = category_store

    def handle(self, category_id: str, name: str, price: str | None = None) -> Category:
        """Add a new category, optionally with a cost price."""
        category = Category(
            id=(category_id or "").strip(),
            name=(name or "").strip(),
            cost_price=optional_price_of(price),
        )

        if self._category_store.get_by_id(category.id) is not None:
            raise ValidationError(f"Category '{category.id}' already exists")

        self._category_store.save(category)
        return category
