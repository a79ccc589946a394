"""Snapshot Store: pre-migration overrides, one document per category."""

from __future__ import annotations

from datetime import datetime

from costprice.domain.exceptions import CorruptRecordError
from costprice.domain.model.migration_snapshot import MigrationSnapshot
from costprice.domain.repository._codec import decode_price, encode_price
from costprice.domain.repository.document_store import DocumentStore, WriteOperation

SNAPSHOTS_COLLECTION = "cost_price_migrations"


class SnapshotStore:

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def get(self, category_id: str) -> MigrationSnapshot | None:
        raw = self._store.get_one(SNAPSHOTS_COLLECTION, category_id)
        if raw is None:
            return None
        return self._to_domain(raw, category_id)

    def list_category_ids(self) -> list[str]:
        return [raw["id"] for raw in self._store.get_many(SNAPSHOTS_COLLECTION)]

    @staticmethod
    def save_op(snapshot: MigrationSnapshot) -> WriteOperation:
        return WriteOperation.create(
            SNAPSHOTS_COLLECTION,
            snapshot.category_id,
            {
                "categoryId": snapshot.category_id,
                "previousCostPrice": encode_price(snapshot.previous_cost_price),
                "overrides": {
                    sku: encode_price(price)
                    for sku, price in snapshot.overrides.items()
                },
                "migratedAt": snapshot.migrated_at.isoformat(),
            },
        )

    @staticmethod
    def delete_op(category_id: str) -> WriteOperation:
        return WriteOperation.delete(SNAPSHOTS_COLLECTION, category_id)

    @staticmethod
    def _to_domain(raw: dict, category_id: str) -> MigrationSnapshot:
        where = f"migration snapshot {category_id}"
        return MigrationSnapshot(
            category_id=raw.get("categoryId") or category_id,
            previous_cost_price=decode_price(raw.get("previousCostPrice"), where),
            overrides={
                sku: decode_price(price, where)
                for sku, price in (raw.get("overrides") or {}).items()
                if price is not None
            },
            migrated_at=_decode_timestamp(raw.get("migratedAt"), where),
        )


def _decode_timestamp(raw: object, where: str) -> datetime:
    if not isinstance(raw, str):
        raise CorruptRecordError(f"Missing or invalid migratedAt {raw!r} in {where}")
    try:
        return datetime.fromisoformat(raw)
    except ValueError as exc:
        raise CorruptRecordError(f"Invalid migratedAt {raw!r} in {where}") from exc
