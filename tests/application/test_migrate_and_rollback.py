"""Integration tests for the MigrateCategory and RollbackMigration use cases."""

from decimal import Decimal

import pytest

from costprice.application.migrate_category import MigrateCategoryHandler
from costprice.application.resolve_product_cost import ResolveProductCostHandler
from costprice.application.rollback_migration import RollbackMigrationHandler
from costprice.application.update_category_price import UpdateCategoryPriceHandler
from costprice.application.update_product_cost import UpdateProductCostHandler
from costprice.domain.exceptions import EntityNotFoundError, PartialBatchFailureError
from costprice.domain.repository.category_store import CategoryStore
from costprice.domain.repository.product_store import ProductStore
from costprice.domain.repository.snapshot_store import SnapshotStore
from costprice.domain.service.batch_writer import BatchWriter
from costprice.domain.service.cost_migration_service import CostMigrationService
from costprice.domain.service.cost_resolution_service import CostResolutionService
from tests.fakes import FakeDocumentStore, RecordingSleep


def _setup(max_retries=3):
    store = FakeDocumentStore()
    writer = BatchWriter(store, max_retries=max_retries, sleep=RecordingSleep())
    products = ProductStore(store, writer)
    categories = CategoryStore(store, writer)
    migration = CostMigrationService(products, categories, SnapshotStore(store), writer)
    resolve = ResolveProductCostHandler(CostResolutionService(products, categories))
    return store, products, migration, resolve


def _seed_tilak(store):
    store.seed("categories", "tilak", {"name": "Tilak", "costPrice": None})
    store.seed("products", "T-1", {"sku": "T-1", "categoryId": "tilak", "customCostPrice": "100"})
    store.seed("products", "T-2", {"sku": "T-2", "categoryId": "tilak", "customCostPrice": "200"})
    store.seed("products", "T-3", {"sku": "T-3", "categoryId": "tilak", "customCostPrice": None})


class TestMigrateCategory:

    def test_full_lifecycle(self):
        store, products, migration, resolve = _setup()
        _seed_tilak(store)

        [dto] = MigrateCategoryHandler(migration).handle("tilak")
        assert dto.average == "150.00"
        assert sorted(dto.migrated_skus) == ["T-1", "T-2"]
        assert not dto.skipped
        for sku in ("T-1", "T-2", "T-3"):
            assert resolve.handle(sku).value == "150.00"
            assert resolve.handle(sku).source == "category"

        UpdateCategoryPriceHandler(migration).handle("tilak", "175")
        assert resolve.handle("T-1").value == "175.00"

        UpdateProductCostHandler(products).handle("T-2", "190")
        assert resolve.handle("T-2").value == "190.00"
        assert resolve.handle("T-3").value == "175.00"

    def test_nothing_to_migrate(self):
        store, _, migration, _ = _setup()
        store.seed("categories", "empty", {})

        [dto] = MigrateCategoryHandler(migration).handle("empty")

        assert dto.skipped
        assert dto.average == "-"
        assert store.commits == []

    def test_all_categories(self):
        store, _, migration, _ = _setup()
        _seed_tilak(store)
        store.seed("categories", "flags", {})

        dtos = {d.category_id: d for d in MigrateCategoryHandler(migration).handle()}

        assert dtos["tilak"].average == "150.00"
        assert dtos["flags"].skipped

    def test_resume_after_partial_failure(self):
        store, _, migration, resolve = _setup(max_retries=0)
        _seed_tilak(store)
        store.fail_next_commits(1, collection="products")
        handler = MigrateCategoryHandler(migration)

        with pytest.raises(PartialBatchFailureError):
            handler.handle("tilak")

        [dto] = handler.handle("tilak", resume=True)

        assert sorted(dto.migrated_skus) == ["T-1", "T-2"]
        assert resolve.handle("T-1").source == "category"

    def test_resume_without_migration(self):
        store, _, migration, _ = _setup()
        store.seed("categories", "flags", {})
        with pytest.raises(EntityNotFoundError):
            MigrateCategoryHandler(migration).handle("flags", resume=True)


class TestRollbackMigration:

    def test_restores_pre_migration_prices(self):
        store, _, migration, resolve = _setup()
        _seed_tilak(store)
        MigrateCategoryHandler(migration).handle("tilak")

        [result] = RollbackMigrationHandler(migration).handle("tilak")

        assert result.from_snapshot
        assert resolve.handle("T-1").value == "100.00"
        assert resolve.handle("T-2").value == "200.00"
        assert resolve.handle("T-3").source == "default"

    def test_rollback_all(self):
        store, _, migration, _ = _setup()
        _seed_tilak(store)
        store.seed("categories", "flags", {})
        MigrateCategoryHandler(migration).handle()

        results = RollbackMigrationHandler(migration).handle()

        assert [r.category_id for r in results] == ["tilak"]
        assert Decimal(store.raw("products", "T-2")["customCostPrice"]) == Decimal("200")
