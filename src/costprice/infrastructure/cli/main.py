import logging

import click

from costprice.domain.exceptions import ValidationError
from costprice.infrastructure.cli.category_commands import (
    category_add,
    category_inheriting,
    category_migrate,
    category_price,
    category_rollback,
    category_show,
)
from costprice.infrastructure.cli.product_commands import (
    product_add,
    product_cost,
    product_list,
    product_resolve,
)
from costprice.infrastructure.config import Settings


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Catalog cost prices: resolution, inheritance and migration."""
    try:
        settings = Settings.from_env()
    except ValidationError as exc:
        raise click.ClickException(str(exc))

    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def category() -> None:
    """Manage categories and their cost prices."""


@cli.group()
def product() -> None:
    """Manage products and their cost prices."""


# Register subcommands
category.add_command(category_add)
category.add_command(category_inheriting)
category.add_command(category_migrate)
category.add_command(category_price)
category.add_command(category_rollback)
category.add_command(category_show)
product.add_command(product_add)
product.add_command(product_cost)
product.add_command(product_list)
product.add_command(product_resolve)
