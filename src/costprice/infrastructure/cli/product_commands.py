"""CLI commands for products and their cost prices."""

from __future__ import annotations

import click

from costprice.application.add_product import AddProductHandler
from costprice.application.resolve_catalog_costs import ResolveCatalogCostsHandler
from costprice.application.resolve_product_cost import ResolveProductCostHandler
from costprice.application.update_product_cost import UpdateProductCostHandler
from costprice.domain.exceptions import DomainException, StoreError
from costprice.infrastructure.bootstrap import container


@click.command("add")
@click.option("--sku", required=True, help="Product SKU.")
@click.option("--name", default="", help="Product name.")
@click.option("--category", "category_id", default=None, help="Category ID to inherit from.")
def product_add(sku: str, name: str, category_id: str | None) -> None:
    """Add a new product to the catalog."""
    app = container()
    handler = AddProductHandler(
        product_store=app.product_store,
        category_store=app.category_store,
    )

    try:
        product = handler.handle(sku=sku, name=name, category_id=category_id)
    except (DomainException, StoreError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{product.sku}' added")


@click.command("cost")
@click.option("--sku", required=True, help="Product SKU.")
@click.option("--price", default=None, help="Custom cost price (e.g. 29.99).")
@click.option("--inherit", is_flag=True, default=False,
              help="Drop the custom price and inherit from the category.")
def product_cost(sku: str, price: str | None, inherit: bool) -> None:
    """Set or clear a product's custom cost price."""
    if (price is not None) == inherit:
        raise click.ClickException("Give exactly one of --price or --inherit")

    handler = UpdateProductCostHandler(product_store=container().product_store)

    try:
        handler.handle(sku=sku, new_price=None if inherit else price)
    except (DomainException, StoreError) as exc:
        raise click.ClickException(str(exc))

    if inherit:
        click.echo(f"Product '{sku}' now inherits its category cost price")
    else:
        click.echo(f"Product '{sku}' cost price set to {price}")


@click.command("resolve")
@click.option("--sku", required=True, help="Product SKU.")
def product_resolve(sku: str) -> None:
    """Show the effective cost price of a product."""
    handler = ResolveProductCostHandler(resolution_service=container().resolution_service)

    try:
        dto = handler.handle(sku)
    except (DomainException, StoreError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{dto.sku}: {dto.value}  (source={dto.source}, category={dto.category_id or '-'})")


@click.command("list")
@click.option("--category", "category_id", default=None, help="Only this category.")
def product_list(category_id: str | None) -> None:
    """List products with their effective cost prices."""
    app = container()
    handler = ResolveCatalogCostsHandler(
        product_store=app.product_store,
        resolution_service=app.resolution_service,
    )

    try:
        rows = handler.handle(category_id=category_id)
    except (DomainException, StoreError) as exc:
        raise click.ClickException(str(exc))

    if not rows:
        click.echo("No products found.")
        return

    click.echo(f"{'SKU':<20} {'Category':<15} {'Cost':>10} {'Source':<10}")
    click.echo("-" * 58)
    for r in rows:
        click.echo(f"{r.sku:<20} {(r.category_id or '-'):<15} {r.value:>10} {r.source:<10}")
