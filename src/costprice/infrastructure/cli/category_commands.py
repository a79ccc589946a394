"""CLI commands for categories and category-level cost prices."""

from __future__ import annotations

import click

from costprice.application.add_category import AddCategoryHandler
from costprice.application.migrate_category import MigrateCategoryHandler
from costprice.application.resolve_category_cost import ResolveCategoryCostHandler
from costprice.application.rollback_migration import RollbackMigrationHandler
from costprice.application.show_inheriting_products import ShowInheritingProductsHandler
from costprice.application.update_category_price import UpdateCategoryPriceHandler
from costprice.domain.exceptions import (
    DomainException,
    PartialBatchFailureError,
    StoreError,
)
from costprice.infrastructure.bootstrap import container


@click.command("add")
@click.option("--id", "category_id", required=True, help="Category ID.")
@click.option("--name", default="", help="Category name.")
@click.option("--price", default=None, help="Cost price (e.g. 120.00).")
def category_add(category_id: str, name: str, price: str | None) -> None:
    """Add a new category."""
    handler = AddCategoryHandler(category_store=container().category_store)

    try:
        category = handler.handle(category_id=category_id, name=name, price=price)
    except (DomainException, StoreError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category '{category.id}' added")


@click.command("price")
@click.option("--id", "category_id", required=True, help="Category ID.")
@click.option("--price", default=None, help="New cost price (e.g. 99.50).")
@click.option("--clear", is_flag=True, default=False, help="Remove the category price.")
def category_price(category_id: str, price: str | None, clear: bool) -> None:
    """Set or clear a category's cost price.

    Products without their own cost price pick up the change on their
    next resolution; no product is rewritten.
    """
    if (price is not None) == clear:
        raise click.ClickException("Give exactly one of --price or --clear")

    svc = container().migration_service
    handler = UpdateCategoryPriceHandler(migration_service=svc)

    try:
        handler.handle(category_id, None if clear else price)
        affected = ShowInheritingProductsHandler(migration_service=svc).handle(category_id)
    except (DomainException, StoreError) as exc:
        raise click.ClickException(str(exc))

    new_value = "cleared" if clear else f"set to {price}"
    click.echo(f"Category '{category_id}' cost price {new_value}")
    click.echo(f"{len(affected)} product(s) inherit this price")


@click.command("show")
@click.option("--id", "category_id", required=True, help="Category ID.")
def category_show(category_id: str) -> None:
    """Show a category's own cost price."""
    handler = ResolveCategoryCostHandler(resolution_service=container().resolution_service)

    try:
        dto = handler.handle(category_id)
    except (DomainException, StoreError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category '{category_id}': {dto.value}  (source={dto.source})")


@click.command("inheriting")
@click.option("--id", "category_id", required=True, help="Category ID.")
def category_inheriting(category_id: str) -> None:
    """List products that inherit the category's cost price."""
    handler = ShowInheritingProductsHandler(migration_service=container().migration_service)

    try:
        products = handler.handle(category_id)
    except (DomainException, StoreError) as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No inheriting products found.")
        return

    click.echo(f"{'SKU':<20} {'Name':<30}")
    click.echo("-" * 51)
    for p in products:
        click.echo(f"{p.sku:<20} {p.name:<30}")


@click.command("migrate")
@click.option("--id", "category_id", default=None, help="Category ID to migrate.")
@click.option("--all", "migrate_all", is_flag=True, default=False, help="Migrate every category.")
@click.option("--resume", is_flag=True, default=False,
              help="Only clear the overrides left by an interrupted migration.")
def category_migrate(category_id: str | None, migrate_all: bool, resume: bool) -> None:
    """Move product cost prices into the category price (their average)."""
    if bool(category_id) == migrate_all:
        raise click.ClickException("Give exactly one of --id or --all")
    if resume and migrate_all:
        raise click.ClickException("--resume requires --id")

    handler = MigrateCategoryHandler(migration_service=container().migration_service)

    try:
        results = handler.handle(category_id=category_id, resume=resume)
    except PartialBatchFailureError as exc:
        raise click.ClickException(
            f"{exc}\nPending SKUs: {', '.join(exc.pending)}\n"
            f"Re-run with: category migrate --id {exc.category_id or category_id} --resume"
        )
    except (DomainException, StoreError) as exc:
        raise click.ClickException(str(exc))

    for r in results:
        if r.skipped:
            click.echo(f"Category '{r.category_id}': nothing to migrate")
        else:
            click.echo(
                f"Category '{r.category_id}': cost price {r.average}, "
                f"{len(r.migrated_skus)} product(s) now inherit"
            )


@click.command("rollback")
@click.option("--id", "category_id", default=None, help="Category ID to roll back.")
@click.option("--all", "rollback_all", is_flag=True, default=False,
              help="Roll back every migrated category.")
def category_rollback(category_id: str | None, rollback_all: bool) -> None:
    """Restore product cost prices and clear the category price."""
    if bool(category_id) == rollback_all:
        raise click.ClickException("Give exactly one of --id or --all")

    handler = RollbackMigrationHandler(migration_service=container().migration_service)

    try:
        results = handler.handle(category_id=category_id)
    except (DomainException, StoreError) as exc:
        raise click.ClickException(str(exc))

    for r in results:
        mode = "from snapshot" if r.from_snapshot else "best effort"
        click.echo(
            f"Category '{r.category_id}' rolled back: "
            f"{len(r.restored_skus)} product price(s) restored ({mode})"
        )
