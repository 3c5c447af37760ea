"""Order aggregate: the record the assembler hands to storage.

An Order is built once, fully priced, and never mutated by this core
afterwards.  Status transitions (payment, delivery) belong to other
services.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, Quantity, TaxRate

DEFAULT_PAYMENT_METHOD = "invoice"


class OrderStatus(Enum):
    REGISTERED = "registered"
    PAID = "paid"
    DELIVERED = "delivered"


@dataclass(frozen=True)
class OrderItem:
    """A priced order line.

    ``unit_price`` and ``tax_rate`` are snapshots taken at creation time;
    ``subtotal`` is always ``round2(quantity * unit_price)``.
    """

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money
    tax_rate: TaxRate

    @property
    def subtotal(self) -> Money:
        return (self.unit_price * self.quantity.value).rounded()

    @property
    def tax(self) -> Money:
        """Unrounded tax contribution of this line."""
        return self.subtotal * self.tax_rate.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.register()`` for new orders.  The plain ``__init__`` lets
    repositories reconstitute stored documents without re-validating.
    """

    order_number: str
    customer_id: str
    items: list[OrderItem]
    subtotal: Money
    tax_amount: Money
    discount_amount: Money
    total_amount: Money
    status: OrderStatus = OrderStatus.REGISTERED
    payment_method: str = DEFAULT_PAYMENT_METHOD
    registered_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: str | None = None

    @staticmethod
    def register(
        order_number: str,
        customer_id: str,
        items: list[OrderItem],
        subtotal: Money,
        tax_amount: Money,
        discount_amount: Money,
        total_amount: Money,
        payment_method: str | None = None,
        registered_at: datetime | None = None,
    ) -> Order:
        """Create a new order in the ``registered`` state."""
        if not order_number:
            raise ValidationError("Order number is required")
        if not customer_id:
            raise ValidationError("Customer ID is required")
        if not items:
            raise ValidationError("At least one item is required")

        method = (payment_method or "").strip() or DEFAULT_PAYMENT_METHOD

        return Order(
            order_number=order_number,
            customer_id=customer_id,
            items=list(items),
            subtotal=subtotal,
            tax_amount=tax_amount,
            discount_amount=discount_amount,
            total_amount=total_amount,
            status=OrderStatus.REGISTERED,
            payment_method=method,
            registered_at=registered_at or datetime.now(timezone.utc),
        )
