"""Tests for the JSON-file-backed DocumentStore."""

import json

import pytest

from costprice.domain.exceptions import (
    CorruptRecordError,
    DocumentNotFoundError,
    StoreUnavailableError,
)
from costprice.domain.repository.document_store import WriteOperation, where
from costprice.infrastructure.persistence.json_document_store import JsonDocumentStore


def _setup(tmp_path):
    store = JsonDocumentStore(tmp_path)
    store.set_one("products", "a", {"sku": "a", "categoryId": "c", "customCostPrice": None})
    store.set_one("products", "b", {"sku": "b", "categoryId": "c", "customCostPrice": "5"})
    store.set_one("products", "x", {"sku": "x", "categoryId": "d", "customCostPrice": None})
    return store


class TestReads:

    def test_missing_collection_is_empty(self, tmp_path):
        store = JsonDocumentStore(tmp_path)
        assert store.get_one("products", "a") is None
        assert store.get_many("products") == []

    def test_get_one_includes_id(self, tmp_path):
        store = _setup(tmp_path)
        assert store.get_one("products", "a")["id"] == "a"

    def test_get_many_filters(self, tmp_path):
        store = _setup(tmp_path)
        records = store.get_many("products", [
            where("categoryId", "==", "c"),
            where("customCostPrice", "==", None),
        ])
        assert [r["id"] for r in records] == ["a"]

    def test_data_survives_new_instance(self, tmp_path):
        _setup(tmp_path)
        assert JsonDocumentStore(tmp_path).get_one("products", "b")["customCostPrice"] == "5"

    def test_malformed_file_is_corrupt(self, tmp_path):
        (tmp_path / "products.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(CorruptRecordError):
            JsonDocumentStore(tmp_path).get_many("products")

    def test_unreadable_path_is_unavailable(self, tmp_path):
        (tmp_path / "products.json").mkdir()
        with pytest.raises(StoreUnavailableError):
            JsonDocumentStore(tmp_path).get_one("products", "a")


class TestWrites:

    def test_update_merges_fields(self, tmp_path):
        store = _setup(tmp_path)
        store.update_one("products", "b", {"customCostPrice": None})
        assert store.get_one("products", "b") == {
            "sku": "b", "categoryId": "c", "customCostPrice": None, "id": "b",
        }

    def test_update_missing_document(self, tmp_path):
        store = _setup(tmp_path)
        with pytest.raises(DocumentNotFoundError):
            store.update_one("products", "nope", {"customCostPrice": "1"})

    def test_delete(self, tmp_path):
        store = _setup(tmp_path)
        store.delete_one("products", "x")
        assert store.get_one("products", "x") is None

    def test_batch_spans_collections(self, tmp_path):
        store = _setup(tmp_path)
        store.commit_batch([
            WriteOperation.create("categories", "c", {"costPrice": "10"}),
            WriteOperation.update("products", "b", {"customCostPrice": None}),
        ])
        assert store.get_one("categories", "c")["costPrice"] == "10"
        assert store.get_one("products", "b")["customCostPrice"] is None

    def test_invalid_batch_writes_nothing(self, tmp_path):
        store = _setup(tmp_path)
        with pytest.raises(DocumentNotFoundError):
            store.commit_batch([
                WriteOperation.create("categories", "c", {"costPrice": "10"}),
                WriteOperation.update("products", "a", {"customCostPrice": "1"}),
                WriteOperation.update("products", "ghost", {"customCostPrice": "1"}),
            ])
        assert store.get_one("categories", "c") is None
        assert store.get_one("products", "a")["customCostPrice"] is None

    def test_failed_write_of_second_collection_writes_nothing(self, tmp_path):
        store = JsonDocumentStore(tmp_path)
        store.set_one("categories", "c", {"costPrice": None})
        (tmp_path / "cost_price_migrations.json.tmp").mkdir()

        with pytest.raises(StoreUnavailableError):
            store.commit_batch([
                WriteOperation.update("categories", "c", {"costPrice": "150"}),
                WriteOperation.create("cost_price_migrations", "c", {"categoryId": "c"}),
            ])

        assert store.get_one("categories", "c") == {"costPrice": None, "id": "c"}
        assert store.get_one("cost_price_migrations", "c") is None
        assert not (tmp_path / "categories.json.tmp").exists()

    def test_file_is_a_list_of_records(self, tmp_path):
        _setup(tmp_path)
        records = json.loads((tmp_path / "products.json").read_text(encoding="utf-8"))
        assert [r["id"] for r in records] == ["a", "b", "x"]
        assert not (tmp_path / "products.json.tmp").exists()
