"""Product aggregate.

Products live independently of orders.  The order core only touches them
to snapshot prices for new order lines and to reserve stock.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from storefront.domain.exceptions import InsufficientStockError, ValidationError
from storefront.domain.model.value_objects import Money, TaxRate


@dataclass
class Product:
    """A product in the catalog.

    ``tax_rate_percent`` is a percentage in [0, 100]; orders carry a
    fraction instead, see ``order_tax_rate``.
    """

    id: str
    name: str
    base_price: Money
    tax_rate_percent: Decimal = Decimal("0")
    stock_amount: int = 0

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Product name is required")
        if not Decimal("0") <= self.tax_rate_percent <= Decimal("100"):
            raise ValidationError(
                f"Tax rate must be between 0 and 100, got {self.tax_rate_percent}"
            )
        if self.stock_amount < 0:
            raise ValidationError("Stock amount must be non-negative")

    @property
    def order_tax_rate(self) -> TaxRate:
        return TaxRate.from_percent(self.tax_rate_percent)

    def remove_stock(self, quantity: int) -> None:
        """Take *quantity* units out of stock for an order."""
        if quantity <= 0:
            raise ValidationError("Stock quantity must be positive")
        if quantity > self.stock_amount:
            raise InsufficientStockError(
                f"Insufficient stock for {self.name} "
                f"(need {quantity}, have {self.stock_amount} available)"
            )
        self.stock_amount -= quantity

    def add_stock(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Stock quantity must be positive")
        self.stock_amount += quantity
