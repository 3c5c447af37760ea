import click

from storefront.infrastructure.cli.order_commands import order_create, order_show
from storefront.infrastructure.cli.product_commands import product_add, product_list
from storefront.infrastructure.config import Settings
from storefront.infrastructure.logging_config import setup_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Storefront: order creation and pricing"""
    if ctx.obj is None:
        ctx.obj = Settings.from_env()
    setup_logging(ctx.obj)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, type=int, show_default=True)
@click.pass_obj
def serve(settings: Settings, host: str, port: int) -> None:
    """Run the HTTP API."""
    import uvicorn

    from storefront.infrastructure.api.main import create_app

    uvicorn.run(create_app(settings), host=host, port=port, log_config=None)


# Register subcommands
order.add_command(order_create)
order.add_command(order_show)
product.add_command(product_add)
product.add_command(product_list)
