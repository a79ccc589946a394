"""JSON-file-backed implementation of DocumentStore.

Each collection is one ``<collection>.json`` file holding a list of
records, every record carrying its document id under ``"id"``.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Iterable

from costprice.domain.exceptions import (
    CorruptRecordError,
    DocumentNotFoundError,
    StoreUnavailableError,
)
from costprice.domain.repository.document_store import (
    DocumentStore,
    Predicate,
    WriteKind,
    WriteOperation,
)


class JsonDocumentStore(DocumentStore):

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir

    # --- DocumentStore interface ----------------------------------------------

    def get_one(self, collection: str, doc_id: str) -> dict | None:
        return self._load(collection).get(doc_id)

    def get_many(
        self, collection: str, predicates: Iterable[Predicate] = ()
    ) -> list[dict]:
        predicates = list(predicates)
        return [
            raw
            for raw in self._load(collection).values()
            if all(p.matches(raw) for p in predicates)
        ]

    def set_one(self, collection: str, doc_id: str, record: dict) -> None:
        self.commit_batch([WriteOperation.create(collection, doc_id, record)])

    def update_one(self, collection: str, doc_id: str, partial: dict) -> None:
        self.commit_batch([WriteOperation.update(collection, doc_id, partial)])

    def delete_one(self, collection: str, doc_id: str) -> None:
        self.commit_batch([WriteOperation.delete(collection, doc_id)])

    def commit_batch(self, operations: list[WriteOperation]) -> None:
        # Apply everything to in-memory copies first; nothing touches disk
        # unless every operation is valid.
        staged: dict[str, dict[str, dict]] = {}
        for op in operations:
            if op.collection not in staged:
                staged[op.collection] = self._load(op.collection)
            docs = staged[op.collection]

            if op.kind is WriteKind.CREATE:
                docs[op.doc_id] = {**copy.deepcopy(op.data), "id": op.doc_id}
            elif op.kind is WriteKind.UPDATE:
                if op.doc_id not in docs:
                    raise DocumentNotFoundError(
                        f"No document '{op.doc_id}' in collection '{op.collection}'"
                    )
                docs[op.doc_id].update(copy.deepcopy(op.data))
            else:
                docs.pop(op.doc_id, None)

        self._persist(staged)

    # --- File helpers ---------------------------------------------------------

    def _path(self, collection: str) -> Path:
        return self._data_dir / f"{collection}.json"

    def _load(self, collection: str) -> dict[str, dict]:
        path = self._path(collection)
        try:
            if not path.exists():
                return {}
            records = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise StoreUnavailableError(f"Cannot read {path}: {exc}") from exc
        except ValueError as exc:
            raise CorruptRecordError(f"Malformed collection file {path}: {exc}") from exc
        return {raw["id"]: raw for raw in records}

    def _persist(self, staged: dict[str, dict[str, dict]]) -> None:
        """Write every collection of a batch to disk.

        All temp files are written before any of them replaces its
        collection file, so a failed write leaves every collection as it was.
        """
        written: list[tuple[Path, Path]] = []
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            for collection, docs in staged.items():
                path = self._path(collection)
                tmp = path.with_suffix(".json.tmp")
                tmp.write_text(
                    json.dumps(list(docs.values()), indent=2) + "\n", encoding="utf-8"
                )
                written.append((tmp, path))
        except OSError as exc:
            for tmp, _ in written:
                tmp.unlink(missing_ok=True)
            raise StoreUnavailableError(f"Cannot write batch to {self._data_dir}: {exc}") from exc

        try:
            for tmp, path in written:
                os.replace(tmp, path)
        except OSError as exc:
            raise StoreUnavailableError(f"Cannot write {path}: {exc}") from exc
