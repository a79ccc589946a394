"""Category aggregate.

The category's ``cost_price`` is a snapshot, not a live average of its
products. It only changes through an explicit update, a migration or a
rollback.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from costprice.domain.exceptions import ValidationError


@dataclass
class Category:

    id: str
    name: str = ""
    cost_price: Decimal | None = None

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValidationError("Category ID is required")

    @property
    def has_cost_price(self) -> bool:
        return self.cost_price is not None
