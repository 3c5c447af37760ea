"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import add_product_handler, product_repository
from storefront.infrastructure.config import Settings


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--tax-rate", default="0", show_default=True, help="Tax rate in percent (0-100).")
@click.option("--stock", default=0, type=int, show_default=True, help="Units in stock.")
@click.pass_obj
def product_add(settings: Settings, name: str, price: str, tax_rate: str, stock: int) -> None:
    """Add a new product to the catalog."""
    handler = add_product_handler(settings)

    try:
        product = handler.handle(name=name, price=price, tax_rate_percent=tax_rate, stock=stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' added at {product.base_price}")


@click.command("list")
@click.pass_obj
def product_list(settings: Settings) -> None:
    """List all products in the catalog."""
    products = product_repository(settings).list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<26} {'Name':<20} {'Price':>10} {'Tax':>6} {'Stock':>7}")
    click.echo("-" * 73)
    for p in products:
        click.echo(
            f"{p.id:<26} {p.name:<20} {str(p.base_price):>10} "
            f"{str(p.order_tax_rate):>6} {p.stock_amount:>7}"
        )
