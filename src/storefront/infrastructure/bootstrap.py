"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from storefront.application.add_product import AddProductHandler
from storefront.application.create_order import CreateOrderHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def product_repository(settings: Settings) -> JsonProductRepository:
    return JsonProductRepository(settings.data_dir / "products.json")


def order_repository(settings: Settings) -> JsonOrderRepository:
    return JsonOrderRepository(settings.data_dir / "orders.json")


def create_order_handler(settings: Settings) -> CreateOrderHandler:
    return CreateOrderHandler(
        order_repo=order_repository(settings),
        product_repo=product_repository(settings),
        reserve_stock=settings.reserve_stock,
        default_payment_method=settings.default_payment_method,
    )


def show_order_handler(settings: Settings) -> ShowOrderHandler:
    return ShowOrderHandler(order_repo=order_repository(settings))


def add_product_handler(settings: Settings) -> AddProductHandler:
    return AddProductHandler(product_repo=product_repository(settings))
