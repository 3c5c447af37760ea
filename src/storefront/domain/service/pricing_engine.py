"""Domain service: Pricing Engine.

Turns raw order lines into priced OrderItems and order totals.  Pure: no
I/O, no clock, no randomness.

Order of operations matters to the cent:
  1. each line subtotal is rounded before anything is summed;
  2. the order subtotal is the rounded sum of rounded line subtotals;
  3. tax is accumulated over rounded line subtotals at full precision and
     rounded once;
  4. the discount is rounded;
  5. the total is rounded from the three rounded figures.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import OrderItem
from storefront.domain.model.value_objects import (
    MAX_AMOUNT,
    MAX_QUANTITY,
    Money,
    Quantity,
    TaxRate,
    round2,
    to_decimal,
)

Number = str | float | int | Decimal


@dataclass(frozen=True)
class LineItemInput:
    """One requested order line, before validation and pricing."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: Number
    tax_rate: Number


@dataclass(frozen=True)
class PricedOrder:
    items: list[OrderItem]
    subtotal: Money
    tax_amount: Money
    discount_amount: Money
    total_amount: Money


def price_order(
    lines: Sequence[LineItemInput],
    discount_amount: Number | None = None,
) -> PricedOrder:
    """Validate every line, then compute the order totals.

    Raises ValidationError listing all problems found; nothing is computed
    unless the whole input is valid.
    """
    items, discount = _validate(lines, discount_amount)

    subtotal = round2(sum((item.subtotal.amount for item in items), Decimal("0")))
    tax_amount = round2(sum((item.tax.amount for item in items), Decimal("0")))
    total = round2(subtotal + tax_amount - discount)

    if total < 0:
        raise ValidationError(
            f"Discount amount {discount} exceeds order total {subtotal + tax_amount}",
            [{"field": "discountAmount", "message": "Discount amount exceeds order total"}],
        )

    return PricedOrder(
        items=items,
        subtotal=Money(subtotal),
        tax_amount=Money(tax_amount),
        discount_amount=Money(discount),
        total_amount=Money(total),
    )


def _validate(
    lines: Sequence[LineItemInput],
    discount_amount: Number | None,
) -> tuple[list[OrderItem], Decimal]:
    violations: list[dict] = []

    if not lines:
        violations.append({"field": "items", "message": "At least one item is required"})

    items: list[OrderItem] = []
    for index, line in enumerate(lines):
        item = _build_item(line, f"items.{index}", violations)
        if item is not None:
            items.append(item)

    discount = Decimal("0")
    if discount_amount is not None:
        try:
            requested = Money(to_decimal(discount_amount)).amount
        except ValidationError:
            violations.append(
                {"field": "discountAmount", "message": "Discount amount must be a non-negative number"}
            )
        else:
            if requested > MAX_AMOUNT:
                violations.append(
                    {"field": "discountAmount", "message": f"Discount amount must not exceed {MAX_AMOUNT}"}
                )
            else:
                discount = round2(requested)

    if violations:
        raise ValidationError(_summarize(violations), violations)
    return items, discount


def _build_item(line: LineItemInput, path: str, violations: list[dict]) -> OrderItem | None:
    found = len(violations)

    name = (line.product_name or "").strip()
    if not line.product_id:
        violations.append({"field": f"{path}.productId", "message": "Product ID is required"})
    if not name:
        violations.append({"field": f"{path}.productName", "message": "Product name is required"})

    quantity = unit_price = tax_rate = None
    try:
        quantity = Quantity(line.quantity)
    except ValidationError as exc:
        violations.append({"field": f"{path}.quantity", "message": str(exc)})
    else:
        if quantity.value > MAX_QUANTITY:
            violations.append({"field": f"{path}.quantity", "message": f"Quantity must not exceed {MAX_QUANTITY}"})
    try:
        unit_price = Money(to_decimal(line.unit_price))
    except ValidationError:
        violations.append({"field": f"{path}.unitPrice", "message": "Unit price must be a non-negative number"})
    else:
        if unit_price.amount > MAX_AMOUNT:
            violations.append({"field": f"{path}.unitPrice", "message": f"Unit price must not exceed {MAX_AMOUNT}"})
    try:
        tax_rate = TaxRate(to_decimal(line.tax_rate))
    except ValidationError:
        violations.append({"field": f"{path}.taxRate", "message": "Tax rate must be between 0 and 1"})

    if len(violations) > found:
        return None
    return OrderItem(
        product_id=line.product_id,
        product_name=name,
        quantity=quantity,
        unit_price=unit_price,
        tax_rate=tax_rate,
    )


def _summarize(violations: list[dict]) -> str:
    return "; ".join(f"{v['field']}: {v['message']}" for v in violations)
