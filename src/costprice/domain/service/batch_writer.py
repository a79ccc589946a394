"""Domain service: Batch Writer.

The single mutation gateway for every collection. Each batch is handed to
the store as one atomic unit; transient unavailability is retried with
exponential backoff, anything else propagates untouched.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from costprice.domain.exceptions import (
    PartialBatchFailureError,
    ServiceUnavailableError,
    StoreUnavailableError,
)
from costprice.domain.repository.document_store import DocumentStore, WriteOperation

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY = 0.5
MAX_BATCH_SIZE = 500


class BatchWriter:

    def __init__(
        self,
        store: DocumentStore,
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_delay: float = DEFAULT_BASE_DELAY,
        batch_size: int = MAX_BATCH_SIZE,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries cannot be negative")
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self._store = store
        self._max_retries = max_retries
        self._base_delay = base_delay
        self._batch_size = batch_size
        self._sleep = sleep

    def commit(self, operations: list[WriteOperation]) -> None:
        """Commit one atomic batch, retrying while the store is unavailable.

        Retry ``attempt`` (counted from 0) waits ``2 ** attempt * base_delay``
        seconds. Once ``max_retries`` retries have failed, raises
        ServiceUnavailableError chained to the last transient error.
        """
        if not operations:
            return

        last_error: StoreUnavailableError | None = None
        for attempt in range(self._max_retries + 1):
            if attempt > 0:
                delay = (2 ** (attempt - 1)) * self._base_delay
                logger.warning(
                    "Store unavailable (%s), retrying batch of %d op(s) in %.2fs "
                    "[retry %d/%d]",
                    last_error, len(operations), delay, attempt, self._max_retries,
                )
                self._sleep(delay)
            try:
                self._store.commit_batch(operations)
                return
            except StoreUnavailableError as exc:
                last_error = exc

        logger.error(
            "Giving up on batch of %d op(s) after %d retries",
            len(operations), self._max_retries,
        )
        raise ServiceUnavailableError(
            "Document store is temporarily unavailable; "
            f"batch not committed after {self._max_retries} retries"
        ) from last_error

    def commit_chunked(
        self,
        operations: list[WriteOperation],
        chunk_size: int | None = None,
    ) -> None:
        """Commit operations in consecutive atomic chunks.

        Each chunk is all-or-nothing, the sequence as a whole is not: when a
        chunk fails after earlier ones were applied, raises
        PartialBatchFailureError with the applied and pending operations.
        A failure of the first chunk propagates unchanged.
        """
        size = chunk_size or self._batch_size
        chunks = [operations[i:i + size] for i in range(0, len(operations), size)]

        applied: list[WriteOperation] = []
        for chunk in chunks:
            try:
                self.commit(chunk)
            except Exception as exc:
                if not applied:
                    raise
                pending = operations[len(applied):]
                raise PartialBatchFailureError(
                    f"Batch write stopped after {len(applied)} of "
                    f"{len(operations)} operations: {exc}",
                    applied=applied,
                    pending=pending,
                ) from exc
            applied.extend(chunk)
