"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO, OrderItemSpec
from storefront.domain.exceptions import DomainException, ValidationError
from storefront.infrastructure.bootstrap import create_order_handler, show_order_handler
from storefront.infrastructure.config import Settings


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'PRODUCT_ID:3,PRODUCT_ID:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_number}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_id}")
    click.echo(f"Payment:  {dto.payment_method}")
    click.echo(f"Created:  {dto.registered_at.strftime('%Y-%m-%d %H:%M UTC')}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Tax':>6} {'Subtotal':>10}")
    click.echo(f"  {'-'*55}")
    for item in dto.items:
        tax = f"{(item.tax_rate * 100).normalize():f}%"
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} "
            f"{tax:>6} {item.subtotal:>10}"
        )
    click.echo(f"  {'-'*55}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>28}")
    click.echo(f"  {'Tax':<27} {dto.tax_amount:>28}")
    click.echo(f"  {'Discount':<27} {dto.discount_amount:>28}")
    click.echo(f"  {'Order Total':<27} {dto.total_amount:>28}")


def _format_error(exc: DomainException) -> str:
    if isinstance(exc, ValidationError) and exc.violations:
        return "\n".join(f"{v['field']}: {v['message']}" for v in exc.violations)
    return str(exc)


@click.command("create")
@click.option("--customer", required=True, help="Customer ID.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--discount", default=None, help="Discount amount (e.g. 5.00).")
@click.option("--payment-method", default=None, help="Payment method (default: invoice).")
@click.pass_obj
def order_create(
    settings: Settings,
    customer: str,
    items: str,
    discount: str | None,
    payment_method: str | None,
) -> None:
    """Create a new order from catalog products."""
    specs = _parse_items(items)
    handler = create_order_handler(settings)

    try:
        dto = handler.handle_catalog(
            customer_id=customer,
            item_specs=specs,
            discount_amount=discount,
            payment_method=payment_method,
        )
    except DomainException as exc:
        raise click.ClickException(_format_error(exc))

    click.echo("Order created.")
    _display_order(dto)


@click.command("show")
@click.option("--number", "order_number", required=True, help="Order number to display.")
@click.pass_obj
def order_show(settings: Settings, order_number: str) -> None:
    """Show details of an existing order."""
    handler = show_order_handler(settings)

    try:
        dto = handler.handle(order_number)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)
