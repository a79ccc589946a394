"""Snapshot of the per-product overrides a migration cleared.

Migrating a category replaces its products' custom cost prices with one
average. The snapshot keeps the replaced values so a rollback can put
them back exactly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal


@dataclass
class MigrationSnapshot:

    category_id: str
    previous_cost_price: Decimal | None
    overrides: dict[str, Decimal] = field(default_factory=dict)
    migrated_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def merge(self, newer: MigrationSnapshot) -> MigrationSnapshot:
        """Fold a later migration of the same category into this one.

        The earliest ``previous_cost_price`` is kept; overrides captured by
        the later run win for SKUs present in both.
        """
        overrides = dict(self.overrides)
        overrides.update(newer.overrides)
        return MigrationSnapshot(
            category_id=self.category_id,
            previous_cost_price=self.previous_cost_price,
            overrides=overrides,
            migrated_at=newer.migrated_at,
        )
