"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from shopcore.domain.exceptions import ValidationError
from shopcore.domain.model.value_objects import Money, require_positive_quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "USD"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_from_int(self):
        assert Money.of(10).amount == Decimal("10")

    def test_of_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("twelve")

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.5)

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_multiplication_is_exact(self):
        # 25.99 * 2 must not drift the way binary floats do
        assert (Money.of("25.99") * 2).amount == Decimal("51.98")

    def test_multiplication_by_non_int_rejected(self):
        with pytest.raises(TypeError):
            Money.of("1") * 1.5

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("10"), "USD") + Money(Decimal("5"), "EUR")

    def test_str_formatting(self):
        assert str(Money.of("15")) == "$15.00"
        assert str(Money.of("9.5")) == "$9.50"

    def test_comparison_operators(self):
        assert Money.of("5") < Money.of("10")
        assert Money.of("10") > Money.of("5")

    def test_zero(self):
        assert Money.zero().is_zero
        assert not Money.of("0.01").is_zero
        assert Money.of("0.01").is_positive

    def test_total(self):
        assert Money.total([Money.of("1.10"), Money.of("2.20")]) == Money.of("3.30")

    def test_total_of_nothing_is_zero(self):
        assert Money.total([], "EUR") == Money.zero("EUR")

    def test_bad_currency_rejected(self):
        with pytest.raises(ValidationError, match="3-letter code"):
            Money(Decimal("1"), "usd")


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestRequirePositiveQuantity:

    def test_positive_passes_through(self):
        assert require_positive_quantity(3) == 3

    @pytest.mark.parametrize("quantity", [0, -1, -100])
    def test_non_positive_rejected(self, quantity):
        with pytest.raises(ValidationError, match="Quantity must be greater than 0"):
            require_positive_quantity(quantity)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            require_positive_quantity(True)

    def test_string_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            require_positive_quantity("2")
