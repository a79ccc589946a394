"""Price encoding shared by the store adapters.

Prices travel through the document store as decimal strings so no
precision is lost. Reading tolerates plain numbers written by other
clients.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from costprice.domain.exceptions import CorruptRecordError


def encode_price(price: Decimal | None) -> str | None:
    if price is None:
        return None
    return str(price)


def decode_price(raw: object, where: str) -> Decimal | None:
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise CorruptRecordError(f"Invalid price {raw!r} in {where}")
    try:
        price = Decimal(str(raw))
    except (InvalidOperation, ValueError) as exc:
        raise CorruptRecordError(f"Invalid price {raw!r} in {where}") from exc
    if not price.is_finite():
        raise CorruptRecordError(f"Invalid price {raw!r} in {where}")
    return price
