"""Domain service: Cost Price Migration & Aggregation.

Moves explicit per-product cost prices into their category:

  Phase 1: average the overrides and write the category price, together
           with a snapshot of the overrides, as one atomic batch.
  Phase 2: clear the overrides so the products inherit.

Phase 2 is only issued after phase 1 is committed. If the process dies in
between, the products still carry their explicit prices and resolve exactly
as before. A phase 2 failure is reported as PartialBatchFailureError and can
be finished with ``complete_migration``.

Category price updates are lazy: only the category document is written and
inheriting products see the new value on their next resolution.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from costprice.domain.exceptions import (
    DocumentNotFoundError,
    EntityNotFoundError,
    PartialBatchFailureError,
)
from costprice.domain.model.migration_snapshot import MigrationSnapshot
from costprice.domain.model.product import Product
from costprice.domain.model.value_objects import optional_price_of
from costprice.domain.repository.category_store import CategoryStore
from costprice.domain.repository.document_store import WriteOperation
from costprice.domain.repository.product_store import ProductStore
from costprice.domain.repository.snapshot_store import SnapshotStore
from costprice.domain.service.batch_writer import BatchWriter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MigrationResult:
    category_id: str
    average: Decimal | None = None
    migrated_skus: list[str] = field(default_factory=list)

    @property
    def skipped(self) -> bool:
        return not self.migrated_skus


@dataclass(frozen=True)
class RollbackResult:
    category_id: str
    restored_skus: list[str] = field(default_factory=list)
    from_snapshot: bool = False


class CostMigrationService:

    def __init__(
        self,
        product_store: ProductStore,
        category_store: CategoryStore,
        snapshot_store: SnapshotStore,
        writer: BatchWriter,
    ) -> None:
        self._product_store = product_store
        self._category_store = category_store
        self._snapshot_store = snapshot_store
        self._writer = writer

    # --- Migration ------------------------------------------------------------

    def migrate_category_from_products(self, category_id: str) -> MigrationResult:
        """Replace the category's product overrides with their average.

        A category without products, or whose products carry no override,
        is left untouched. Running the migration twice is therefore safe:
        the second run finds nothing to migrate.
        """
        products = self._product_store.list_by_category(category_id)
        overridden = [p for p in products if p.has_custom_cost_price]
        if not overridden:
            logger.debug("Category %s has no product overrides to migrate", category_id)
            return MigrationResult(category_id=category_id)

        category = self._category_store.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundError(f"Category '{category_id}' not found")

        prices = [p.custom_cost_price for p in overridden]
        average = sum(prices, Decimal("0")) / len(prices)

        snapshot = MigrationSnapshot(
            category_id=category_id,
            previous_cost_price=category.cost_price,
            overrides={p.sku: p.custom_cost_price for p in overridden},
        )
        existing = self._snapshot_store.get(category_id)
        if existing is not None:
            snapshot = existing.merge(snapshot)

        # Phase 1: the aggregate must be durable before any override goes.
        self._writer.commit([
            self._category_store.cost_price_op(category_id, average),
            self._snapshot_store.save_op(snapshot),
        ])

        # Phase 2
        skus = [p.sku for p in overridden]
        self._clear_overrides(category_id, skus)

        logger.info(
            "Migrated category %s: %d product override(s) averaged to %s",
            category_id, len(skus), average,
        )
        return MigrationResult(category_id=category_id, average=average, migrated_skus=skus)

    def complete_migration(self, category_id: str) -> MigrationResult:
        """Finish phase 2 of an interrupted migration.

        Clears the overrides that still hold the value captured in the
        category's snapshot. Overrides changed since then are kept.
        """
        snapshot = self._snapshot_store.get(category_id)
        if snapshot is None:
            raise EntityNotFoundError(
                f"No migration snapshot for category '{category_id}'"
            )
        category = self._category_store.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundError(f"Category '{category_id}' not found")

        skus = [
            p.sku
            for p in self._product_store.list_by_category(category_id)
            if p.has_custom_cost_price
            and snapshot.overrides.get(p.sku) == p.custom_cost_price
        ]
        self._clear_overrides(category_id, skus)
        if skus:
            logger.info(
                "Completed migration of category %s: cleared %d remaining override(s)",
                category_id, len(skus),
            )
        return MigrationResult(
            category_id=category_id, average=category.cost_price, migrated_skus=skus
        )

    def migrate_all_categories(self) -> list[MigrationResult]:
        results = [
            self.migrate_category_from_products(category.id)
            for category in self._category_store.list_all()
        ]
        migrated = sum(1 for r in results if not r.skipped)
        logger.info("Migration pass complete: %d of %d categories migrated",
                    migrated, len(results))
        return results

    # --- Category price -------------------------------------------------------

    def update_category_price(self, category_id: str, price: Decimal | None) -> None:
        """Set or clear the category price. No product is rewritten."""
        price = optional_price_of(price)
        try:
            self._category_store.set_cost_price(category_id, price)
        except DocumentNotFoundError as exc:
            raise EntityNotFoundError(f"Category '{category_id}' not found") from exc
        logger.info("Category %s cost price set to %s", category_id, price)

    def get_products_inheriting_cost(self, category_id: str) -> list[Product]:
        return self._product_store.list_inheriting(category_id)

    # --- Rollback -------------------------------------------------------------

    def rollback_migration(self, category_id: str) -> RollbackResult:
        """Put product overrides back and reset the category price.

        With a snapshot the pre-migration per-product prices come back exactly,
        on products that are still in the category and still inherit, and the
        category gets back the price it had before the migration. Without one,
        every inheriting product is pinned to the current category price, the
        closest value still known, and the category price is cleared.

        Products are restored before the category price is reset, so an
        interruption never leaves a product without a price source.
        """
        category = self._category_store.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundError(f"Category '{category_id}' not found")

        snapshot = self._snapshot_store.get(category_id)
        if snapshot is not None:
            restores = {
                p.sku: snapshot.overrides[p.sku]
                for p in self._product_store.list_by_category(category_id)
                if not p.has_custom_cost_price and p.sku in snapshot.overrides
            }
        elif category.has_cost_price:
            restores = {
                p.sku: category.cost_price
                for p in self._product_store.list_inheriting(category_id)
            }
        else:
            logger.debug("Category %s has nothing to roll back", category_id)
            return RollbackResult(category_id=category_id)

        self._writer.commit_chunked([
            self._product_store.custom_cost_price_op(sku, price)
            for sku, price in restores.items()
        ])

        restored_price = snapshot.previous_cost_price if snapshot is not None else None
        final_ops: list[WriteOperation] = [
            self._category_store.cost_price_op(category_id, restored_price)
        ]
        if snapshot is not None:
            final_ops.append(self._snapshot_store.delete_op(category_id))
        self._writer.commit(final_ops)

        logger.info(
            "Rolled back category %s: %d override(s) restored (%s)",
            category_id, len(restores),
            "from snapshot" if snapshot is not None else "best effort",
        )
        return RollbackResult(
            category_id=category_id,
            restored_skus=list(restores),
            from_snapshot=snapshot is not None,
        )

    def rollback_all_migrations(self) -> list[RollbackResult]:
        snapshot_ids = set(self._snapshot_store.list_category_ids())
        return [
            self.rollback_migration(category.id)
            for category in self._category_store.list_all()
            if category.has_cost_price or category.id in snapshot_ids
        ]

    # --- Internal helpers -----------------------------------------------------

    def _clear_overrides(self, category_id: str, skus: list[str]) -> None:
        ops = [self._product_store.custom_cost_price_op(sku, None) for sku in skus]
        try:
            self._writer.commit_chunked(ops)
        except PartialBatchFailureError as exc:
            pending = [op.doc_id for op in exc.pending]
            logger.error(
                "Category %s price is written but %d product override(s) were not "
                "cleared", category_id, len(pending),
            )
            raise PartialBatchFailureError(
                f"Category '{category_id}' price was written but {len(pending)} "
                "product override(s) were not cleared; run complete_migration",
                applied=[op.doc_id for op in exc.applied],
                pending=pending,
                category_id=category_id,
            ) from exc
        except Exception as exc:
            logger.error(
                "Category %s price is written but clearing overrides failed: %s",
                category_id, exc,
            )
            raise PartialBatchFailureError(
                f"Category '{category_id}' price was written but product "
                f"overrides were not cleared ({exc}); run complete_migration",
                pending=skus,
                category_id=category_id,
            ) from exc
