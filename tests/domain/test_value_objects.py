"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import (
    Money,
    Quantity,
    TaxRate,
    round2,
    to_decimal,
)


# ── round2 ───────────────────────────────────────────────────────────────────


class TestRound2:

    def test_half_cent_rounds_away_from_zero(self):
        assert round2(Decimal("1.005")) == Decimal("1.01")
        assert round2(Decimal("0.125")) == Decimal("0.13")

    def test_float_boundary_uses_decimal_value(self):
        # 2.675 is 2.67499999... in binary; the decimal literal rounds up
        assert round2(2.675) == Decimal("2.68")
        assert round2(1.005) == Decimal("1.01")

    def test_negative_half_rounds_away_from_zero(self):
        assert round2(Decimal("-1.005")) == Decimal("-1.01")

    def test_already_rounded_is_unchanged(self):
        assert round2(Decimal("20.00")) == Decimal("20.00")
        assert str(round2(20)) == "20.00"

    def test_to_decimal_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid numeric value"):
            to_decimal("abc")
        with pytest.raises(ValidationError, match="Invalid numeric value"):
            to_decimal(float("nan"))
        with pytest.raises(ValidationError, match="Invalid numeric value"):
            to_decimal(True)

    def test_out_of_range_rejected(self):
        with pytest.raises(ValidationError, match="out of range"):
            round2(Decimal("1e30"))


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "USD"

    def test_of_factory_from_float_is_exact(self):
        assert Money.of(0.33).amount == Decimal("0.33")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(1.5)

    def test_multiplication_by_int_and_decimal(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")
        assert Money.of("20.00") * Decimal("0.1") == Money.of("2.000")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("1") * 0.5

    def test_rounded(self):
        assert Money.of("0.989999").rounded() == Money.of("0.99")

    def test_str_formatting(self):
        assert str(Money.of("15")) == "$15.00"
        assert str(Money.of("9.5")) == "$9.50"


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="at least 1"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="at least 1"):
            Quantity(-3)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(1.5)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(True)


# ── TaxRate ──────────────────────────────────────────────────────────────────


class TestTaxRate:

    def test_bounds_inclusive(self):
        assert TaxRate.of(0).value == Decimal("0")
        assert TaxRate.of(1).value == Decimal("1")

    def test_above_one_rejected(self):
        with pytest.raises(ValidationError, match="between 0 and 1"):
            TaxRate.of(1.5)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="between 0 and 1"):
            TaxRate.of("-0.1")

    def test_from_percent(self):
        assert TaxRate.from_percent(25).value == Decimal("0.25")

    def test_from_percent_out_of_range(self):
        with pytest.raises(ValidationError, match="between 0 and 100"):
            TaxRate.from_percent(150)

    def test_str(self):
        assert str(TaxRate.of("0.1")) == "10%"
        assert str(TaxRate.of("0.075")) == "7.5%"
