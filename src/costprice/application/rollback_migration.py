"""Application service: Rollback Migration use case (admin)."""

from __future__ import annotations

from costprice.domain.service.cost_migration_service import (
    CostMigrationService,
    RollbackResult,
)


class RollbackMigrationHandler:

    def __init__(self, migration_service: CostMigrationService) -> None:
        self._migration_service = migration_service

    def handle(self, category_id: str | None = None) -> list[RollbackResult]:
        """Roll back one category, or every migrated category when None."""
        if category_id is None:
            return self._migration_service.rollback_all_migrations()
        return [self._migration_service.rollback_migration(category_id)]
