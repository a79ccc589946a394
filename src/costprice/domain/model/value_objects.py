"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
Prices are Decimal so averages and stored values never pick up
floating-point noise.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum

from costprice.domain.exceptions import ValidationError

DEFAULT_COST_PRICE = Decimal("0")


def price_of(amount: str | float | int | Decimal) -> Decimal:
    """Coerce an amount to a non-negative Decimal price."""
    if isinstance(amount, bool):
        raise ValidationError(f"Invalid cost price: {amount!r}")
    try:
        price = Decimal(str(amount).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid cost price: {amount!r}") from exc
    if not price.is_finite():
        raise ValidationError(f"Invalid cost price: {amount!r}")
    if price < Decimal("0"):
        raise ValidationError(f"Cost price cannot be negative, got {price}")
    return price


def optional_price_of(amount: str | float | int | Decimal | None) -> Decimal | None:
    """Like ``price_of`` but passes ``None`` through (meaning "unset")."""
    if amount is None:
        return None
    return price_of(amount)


class CostPriceSource(Enum):
    PRODUCT = "product"
    CATEGORY = "category"
    DEFAULT = "default"


@dataclass(frozen=True)
class CostPriceResolution:
    """The effective cost price of a product and where it came from.

    Computed on demand, never persisted.
    """

    value: Decimal
    source: CostPriceSource
    category_id: str | None
    sku: str

    @property
    def is_default(self) -> bool:
        """True when nothing is configured, as opposed to a failed lookup."""
        return self.source is CostPriceSource.DEFAULT

    @staticmethod
    def default(sku: str, category_id: str | None = None) -> CostPriceResolution:
        return CostPriceResolution(
            value=DEFAULT_COST_PRICE,
            source=CostPriceSource.DEFAULT,
            category_id=category_id,
            sku=sku,
        )
