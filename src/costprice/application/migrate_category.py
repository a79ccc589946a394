"""Application service: Migrate Category use case.

Moves a category's product overrides into the category price. With
``resume`` it only finishes the override-clearing step of a migration
that was interrupted.
"""

from __future__ import annotations

from costprice.application.dto import MigrationDTO, format_price
from costprice.domain.service.cost_migration_service import (
    CostMigrationService,
    MigrationResult,
)


class MigrateCategoryHandler:

    def __init__(self, migration_service: CostMigrationService) -> None:
        self._migration_service = migration_service

    def handle(self, category_id: str | None = None, resume: bool = False) -> list[MigrationDTO]:
        """Migrate one category, or every category when ``category_id`` is None."""
        svc = self._migration_service

        if category_id is None:
            results = svc.migrate_all_categories()
        elif resume:
            results = [svc.complete_migration(category_id)]
        else:
            results = [svc.migrate_category_from_products(category_id)]

        return [self._to_dto(r) for r in results]

    @staticmethod
    def _to_dto(result: MigrationResult) -> MigrationDTO:
        return MigrationDTO(
            category_id=result.category_id,
            average=format_price(result.average),
            migrated_skus=list(result.migrated_skus),
            skipped=result.skipped,
        )
