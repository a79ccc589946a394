"""Abstract document store.

The store is a collection-of-documents service with equality and range
queries and atomic multi-document batches. Defined in the domain layer so
the domain never depends on a concrete driver; implementations (JSON
files, in-memory, a hosted document database) live elsewhere.

Records are plain dicts. Records returned by the store carry their
document id under ``"id"``.
"""

from __future__ import annotations

import operator
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable

_COMPARATORS: dict[str, Callable[[Any, Any], bool]] = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


@dataclass(frozen=True)
class Predicate:
    """A single ``field <op> value`` constraint.

    A missing field compares as ``None``. Range operators never match
    ``None`` on either side.
    """

    field: str
    op: str
    value: Any

    def __post_init__(self) -> None:
        if self.op not in _COMPARATORS:
            raise ValueError(f"Unsupported query operator: {self.op!r}")

    def matches(self, record: dict) -> bool:
        actual = record.get(self.field)
        if self.op in ("==", "!="):
            return _COMPARATORS[self.op](actual, self.value)
        if actual is None or self.value is None:
            return False
        try:
            return _COMPARATORS[self.op](actual, self.value)
        except TypeError:
            return False


def where(field_name: str, op: str, value: Any) -> Predicate:
    return Predicate(field_name, op, value)


class WriteKind(Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class WriteOperation:
    """One document mutation inside a batch.

    CREATE replaces the whole document, UPDATE merges ``data`` into an
    existing one, DELETE removes it (a missing document is not an error).
    """

    kind: WriteKind
    collection: str
    doc_id: str
    data: dict = field(default_factory=dict)

    @staticmethod
    def create(collection: str, doc_id: str, data: dict) -> WriteOperation:
        return WriteOperation(WriteKind.CREATE, collection, doc_id, dict(data))

    @staticmethod
    def update(collection: str, doc_id: str, data: dict) -> WriteOperation:
        return WriteOperation(WriteKind.UPDATE, collection, doc_id, dict(data))

    @staticmethod
    def delete(collection: str, doc_id: str) -> WriteOperation:
        return WriteOperation(WriteKind.DELETE, collection, doc_id)


class DocumentStore(ABC):

    @abstractmethod
    def get_one(self, collection: str, doc_id: str) -> dict | None:
        """Return a document by id, or None if not found."""

    @abstractmethod
    def get_many(
        self, collection: str, predicates: Iterable[Predicate] = ()
    ) -> list[dict]:
        """Return every document matching all predicates."""

    @abstractmethod
    def set_one(self, collection: str, doc_id: str, record: dict) -> None:
        """Create or replace a document."""

    @abstractmethod
    def update_one(self, collection: str, doc_id: str, partial: dict) -> None:
        """Merge fields into an existing document.

        Raises DocumentNotFoundError if the document does not exist.
        """

    @abstractmethod
    def delete_one(self, collection: str, doc_id: str) -> None:
        """Remove a document if present."""

    @abstractmethod
    def commit_batch(self, operations: list[WriteOperation]) -> None:
        """Apply every operation, or none of them."""
