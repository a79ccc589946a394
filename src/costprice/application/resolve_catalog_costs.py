"""Application service: Resolve Catalog Costs use case (query).

Resolves every product in the catalog, or in one category, in a single
batch so each category is read once.
"""

from __future__ import annotations

from costprice.application.dto import CostPriceDTO
from costprice.domain.repository.product_store import ProductStore
from costprice.domain.service.cost_resolution_service import CostResolutionService


class ResolveCatalogCostsHandler:

    def __init__(
        self,
        product_store: ProductStore,
        resolution_service: CostResolutionService,
    ) -> None:
        self._product_store = product_store
        self._resolution_service = resolution_service

    def handle(self, category_id: str | None = None) -> list[CostPriceDTO]:
        if category_id is None:
            products = self._product_store.list_all()
        else:
            products = self._product_store.list_by_category(category_id)

        resolutions = self._resolution_service.resolve_batch(products)
        return [
            CostPriceDTO.from_resolution(resolutions[sku])
            for sku in sorted(resolutions)
        ]
