"""Integration tests for the cost resolution queries."""

import pytest

from costprice.application.resolve_catalog_costs import ResolveCatalogCostsHandler
from costprice.application.resolve_category_cost import ResolveCategoryCostHandler
from costprice.application.resolve_product_cost import ResolveProductCostHandler
from costprice.domain.exceptions import EntityNotFoundError
from costprice.domain.repository.category_store import CategoryStore
from costprice.domain.repository.product_store import ProductStore
from costprice.domain.service.batch_writer import BatchWriter
from costprice.domain.service.cost_resolution_service import CostResolutionService
from tests.fakes import FakeDocumentStore, RecordingSleep


def _setup():
    store = FakeDocumentStore()
    store.seed("categories", "tilak", {"name": "Tilak", "costPrice": "40"})
    store.seed("categories", "flags", {"name": "Flags", "costPrice": None})
    store.seed("products", "T-2", {"sku": "T-2", "categoryId": "tilak", "customCostPrice": "55.5"})
    store.seed("products", "T-1", {"sku": "T-1", "categoryId": "tilak", "customCostPrice": None})
    store.seed("products", "F-1", {"sku": "F-1", "categoryId": "flags", "customCostPrice": None})
    store.seed("products", "X-1", {"sku": "X-1", "customCostPrice": None})

    writer = BatchWriter(store, sleep=RecordingSleep())
    products = ProductStore(store, writer)
    svc = CostResolutionService(products, CategoryStore(store, writer))
    return store, products, svc


class TestResolveProductCost:

    def test_formats_value_and_source(self):
        _, _, svc = _setup()
        dto = ResolveProductCostHandler(svc).handle("T-2")
        assert dto.value == "55.50"
        assert dto.source == "product"
        assert dto.category_id == "tilak"

    def test_unknown_sku_resolves_to_default(self):
        _, _, svc = _setup()
        dto = ResolveProductCostHandler(svc).handle("missing")
        assert dto.value == "0.00"
        assert dto.source == "default"


class TestResolveCategoryCost:

    def test_category_price(self):
        _, _, svc = _setup()
        dto = ResolveCategoryCostHandler(svc).handle("tilak")
        assert dto.value == "40.00"
        assert dto.source == "category"

    def test_missing_category(self):
        _, _, svc = _setup()
        with pytest.raises(EntityNotFoundError):
            ResolveCategoryCostHandler(svc).handle("nope")


class TestResolveCatalogCosts:

    def test_whole_catalog_sorted_by_sku(self):
        _, products, svc = _setup()
        rows = ResolveCatalogCostsHandler(products, svc).handle()

        assert [(r.sku, r.value, r.source) for r in rows] == [
            ("F-1", "0.00", "default"),
            ("T-1", "40.00", "category"),
            ("T-2", "55.50", "product"),
            ("X-1", "0.00", "default"),
        ]

    def test_single_category(self):
        _, products, svc = _setup()
        rows = ResolveCatalogCostsHandler(products, svc).handle(category_id="tilak")
        assert [r.sku for r in rows] == ["T-1", "T-2"]

    def test_each_category_read_once(self):
        store, products, svc = _setup()
        ResolveCatalogCostsHandler(products, svc).handle()

        category_reads = [c for c in store.get_one_calls if c[0] == "categories"]
        assert sorted(category_reads) == [("categories", "flags"), ("categories", "tilak")]

    def test_empty_catalog(self):
        store = FakeDocumentStore()
        writer = BatchWriter(store, sleep=RecordingSleep())
        products = ProductStore(store, writer)
        svc = CostResolutionService(products, CategoryStore(store, writer))
        assert ResolveCatalogCostsHandler(products, svc).handle() == []
