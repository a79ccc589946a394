"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from costprice.domain.model.product import Product
from costprice.domain.model.value_objects import CostPriceResolution


def format_price(value) -> str:
    if value is None:
        return "-"
    return f"{value:.2f}"


@dataclass(frozen=True)
class CostPriceDTO:
    """Output: a resolved cost price as displayed to the user."""

    sku: str
    category_id: str | None
    value: str  # formatted, e.g. "12.50"
    source: str  # "product" | "category" | "default"

    @staticmethod
    def from_resolution(resolution: CostPriceResolution) -> CostPriceDTO:
        return CostPriceDTO(
            sku=resolution.sku,
            category_id=resolution.category_id,
            value=format_price(resolution.value),
            source=resolution.source.value,
        )


@dataclass(frozen=True)
class ProductDTO:
    """Output: a product and its own (unresolved) override."""

    sku: str
    name: str
    category_id: str | None
    custom_cost_price: str

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            sku=product.sku,
            name=product.name,
            category_id=product.category_id,
            custom_cost_price=format_price(product.custom_cost_price),
        )


@dataclass(frozen=True)
class MigrationDTO:
    """Output: what a migration did to one category."""

    category_id: str
    average: str
    migrated_skus: list[str]
    skipped: bool
