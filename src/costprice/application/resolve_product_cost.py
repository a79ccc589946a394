"""Application service: Resolve Product Cost use case (query)."""

from __future__ import annotations

from costprice.application.dto import CostPriceDTO
from costprice.domain.service.cost_resolution_service import CostResolutionService


class ResolveProductCostHandler:

    def __init__(self, resolution_service: CostResolutionService) -> None:
        self._resolution_service = resolution_service

    def handle(self, sku: str) -> CostPriceDTO:
        return CostPriceDTO.from_resolution(
            self._resolution_service.resolve_for_product(sku)
        )
