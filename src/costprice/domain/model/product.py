"""Product aggregate.

A product either carries its own cost price (an override) or inherits
the cost price of its category.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from costprice.domain.exceptions import ValidationError
from costprice.domain.model.value_objects import price_of


@dataclass
class Product:
    """A product in the catalog, keyed by SKU.

    ``custom_cost_price`` of ``None`` means "inherit from the category".
    A product with a custom cost price is never affected by changes to
    its category's price.
    """

    sku: str
    name: str = ""
    category_id: str | None = None
    custom_cost_price: Decimal | None = None

    def __post_init__(self) -> None:
        if not self.sku or not self.sku.strip():
            raise ValidationError("Product SKU is required")
        if self.category_id is not None and not self.category_id.strip():
            self.category_id = None

    @property
    def has_custom_cost_price(self) -> bool:
        return self.custom_cost_price is not None

    def set_custom_cost_price(self, price: Decimal) -> None:
        """Pin the product to an explicit cost price."""
        self.custom_cost_price = price_of(price)

    def inherit_cost_price(self) -> None:
        """Drop the override so the category price applies again."""
        self.custom_cost_price = None
