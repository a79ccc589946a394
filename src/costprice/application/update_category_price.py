"""Application service: Update Category Price use case.

Only the category is written. Products without an override pick up
the new price the next time they are resolved.
"""

from __future__ import annotations

from costprice.domain.model.value_objects import optional_price_of
from costprice.domain.service.cost_migration_service import CostMigrationService


class UpdateCategoryPriceHandler:

    def __init__(self, migration_service: CostMigrationService) -> None:
        self._migration_service = migration_service

    def handle(self, category_id: str, new_price: str | None) -> None:
        self._migration_service.update_category_price(
            category_id, optional_price_of(new_price)
        )
