"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass

from costprice.domain.repository.category_store import CategoryStore
from costprice.domain.repository.document_store import DocumentStore
from costprice.domain.repository.product_store import ProductStore
from costprice.domain.repository.snapshot_store import SnapshotStore
from costprice.domain.service.batch_writer import BatchWriter
from costprice.domain.service.cost_migration_service import CostMigrationService
from costprice.domain.service.cost_resolution_service import CostResolutionService
from costprice.infrastructure.config import Settings
from costprice.infrastructure.persistence.json_document_store import JsonDocumentStore


@dataclass(frozen=True)
class Container:
    product_store: ProductStore
    category_store: CategoryStore
    resolution_service: CostResolutionService
    migration_service: CostMigrationService


def build(store: DocumentStore, settings: Settings) -> Container:
    writer = BatchWriter(
        store,
        max_retries=settings.max_retries,
        base_delay=settings.base_delay,
        batch_size=settings.batch_size,
    )
    product_store = ProductStore(store, writer)
    category_store = CategoryStore(store, writer)
    return Container(
        product_store=product_store,
        category_store=category_store,
        resolution_service=CostResolutionService(product_store, category_store),
        migration_service=CostMigrationService(
            product_store, category_store, SnapshotStore(store), writer
        ),
    )


def container(settings: Settings | None = None) -> Container:
    settings = settings or Settings.from_env()
    return build(JsonDocumentStore(settings.data_dir), settings)
