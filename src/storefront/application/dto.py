"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI/HTTP adapters and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from storefront.domain.model.order import Order


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: a catalog product and how many units the customer wants."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderItemDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: Decimal
    tax_rate: Decimal
    subtotal: Decimal


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order, amounts rounded to cents."""

    id: str
    order_number: str
    customer_id: str
    items: list[OrderItemDTO]
    subtotal: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    status: str
    payment_method: str
    registered_at: datetime

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            order_number=order.order_number,
            customer_id=order.customer_id,
            items=[
                OrderItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.amount,
                    tax_rate=item.tax_rate.value,
                    subtotal=item.subtotal.amount,
                )
                for item in order.items
            ],
            subtotal=order.subtotal.amount,
            tax_amount=order.tax_amount.amount,
            discount_amount=order.discount_amount.amount,
            total_amount=order.total_amount.amount,
            status=order.status.value,
            payment_method=order.payment_method,
            registered_at=order.registered_at,
        )
