"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from storefront.domain.exceptions import ValidationError

CENT = Decimal("0.01")

# Largest unit price or discount accepted on an order, and the most units
# on one line.  Together they keep every total well inside the default
# 28-digit decimal context.
MAX_AMOUNT = Decimal("999999999999.99")
MAX_QUANTITY = 1_000_000


def to_decimal(value: str | float | int | Decimal) -> Decimal:
    """Coerce a number to Decimal.

    Floats go through ``str()`` so ``0.33`` becomes ``Decimal("0.33")``
    rather than its binary expansion.
    """
    if isinstance(value, bool):
        raise ValidationError(f"Invalid numeric value: {value!r}")
    if isinstance(value, Decimal):
        return value
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid numeric value: {value!r}") from exc
    if not result.is_finite():
        raise ValidationError(f"Invalid numeric value: {value!r}")
    return result


def round2(value: str | float | int | Decimal) -> Decimal:
    """Round to cents, half away from zero."""
    amount = to_decimal(value)
    try:
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValidationError(f"Amount out of range: {amount}") from exc


@dataclass(frozen=True)
class Money:
    """Non-negative monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.  Amounts are kept at full
    precision; call ``rounded()`` to get cent precision.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __mul__(self, factor: int | Decimal) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise TypeError(
                f"Can only multiply Money by int or Decimal, got {type(factor).__name__}"
            )
        return Money(self.amount * factor, self.currency)

    def rounded(self) -> Money:
        return Money(round2(self.amount), self.currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${round2(self.amount)}"

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        return Money(to_decimal(amount))


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be at least 1")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TaxRate:
    """Tax rate as a fraction in [0, 1] (0.25 means 25%).

    The product catalog stores percentages; use ``from_percent`` to cross
    from one unit to the other.
    """

    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            raise ValidationError(
                f"Tax rate must be a Decimal, got {type(self.value).__name__}"
            )
        if not Decimal("0") <= self.value <= Decimal("1"):
            raise ValidationError(
                f"Tax rate must be between 0 and 1, got {self.value}"
            )

    @staticmethod
    def of(value: str | float | int | Decimal) -> TaxRate:
        return TaxRate(to_decimal(value))

    @staticmethod
    def from_percent(percent: str | float | int | Decimal) -> TaxRate:
        pct = to_decimal(percent)
        if not Decimal("0") <= pct <= Decimal("100"):
            raise ValidationError(f"Tax rate percent must be between 0 and 100, got {pct}")
        return TaxRate(pct / Decimal("100"))

    def __str__(self) -> str:
        return f"{(self.value * 100).normalize():f}%"
