"""Domain-level and store-level exceptions.

Business rule violations are subclasses of DomainException; failures
reported by a document store are subclasses of StoreError. The CLI layer
catches both bases and displays user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ServiceUnavailableError(DomainException):
    """The store stayed unavailable after every retry was spent."""


class PartialBatchFailureError(DomainException):
    """A multi-batch write stopped after some batches were applied.

    ``pending`` lists what still has to be written; for migrations this is
    the SKUs that kept their custom cost price, and ``category_id`` names
    the category to resume.
    """

    def __init__(self, message: str, applied: list | None = None,
                 pending: list | None = None, category_id: str | None = None) -> None:
        super().__init__(message)
        self.applied = list(applied or [])
        self.pending = list(pending or [])
        self.category_id = category_id


# --- Store errors -------------------------------------------------------------


class StoreError(Exception):
    """Base class for errors raised by a document store."""


class StoreUnavailableError(StoreError):
    """Transient failure: the store could not be reached. Retryable."""


class DocumentNotFoundError(StoreError):
    """An update targeted a document that does not exist."""


class CorruptRecordError(StoreError):
    """A stored record could not be decoded into a domain object."""
