"""Application service: Resolve Category Cost use case (query)."""

from __future__ import annotations

from costprice.application.dto import CostPriceDTO
from costprice.domain.service.cost_resolution_service import CostResolutionService


class ResolveCategoryCostHandler:

    def __init__(self, resolution_service: CostResolutionService) -> None:
        self._resolution_service = resolution_service

    def handle(self, category_id: str) -> CostPriceDTO:
        """Raises EntityNotFoundError if the category does not exist."""
        return CostPriceDTO.from_resolution(
            self._resolution_service.resolve_for_category(category_id)
        )
