"""Application service: Show Inheriting Products use case (query).

Lists the products a category price change would affect.
"""

from __future__ import annotations

from costprice.application.dto import ProductDTO
from costprice.domain.service.cost_migration_service import CostMigrationService


class ShowInheritingProductsHandler:

    def __init__(self, migration_service: CostMigrationService) -> None:
        self._migration_service = migration_service

    def handle(self, category_id: str) -> list[ProductDTO]:
        products = self._migration_service.get_products_inheriting_cost(category_id)
        return [
            ProductDTO.from_product(p)
            for p in sorted(products, key=lambda p: p.sku)
        ]
