#!/usr/bin/env python3
"""Tests for Money primitive type."""

from decimal import Decimal

import pytest

from ledger.core.money import Money


class TestMoneyConstruction:
    """Test Money class construction."""

    @pytest.mark.currency
    def test_from_str(self):
        """Test parsing from decimal strings."""
        m = Money.from_str("12.3456")
        assert m.to_decimal() == Decimal("12.3456")

    @pytest.mark.currency
    def test_from_decimal(self):
        """Test creating from Decimal and int."""
        assert Money.from_decimal(Decimal("1.5")).amount == Decimal("1.5")
        assert Money.from_decimal(3).amount == Decimal(3)

    @pytest.mark.currency
    def test_zero(self):
        assert Money.zero().amount == 0

    @pytest.mark.currency
    @pytest.mark.parametrize("text", ["", "  ", "abc"])
    def test_from_str_rejects_invalid(self, text):
        """Test empty or non-numeric text raises ValueError."""
        with pytest.raises(ValueError):
            Money.from_str(text)


class TestMoneyArithmetic:
    """Test Money arithmetic operations."""

    @pytest.mark.currency
    def test_addition(self):
        result = Money.from_str("0.1") + Money.from_str("0.2")
        assert result == Money.from_str("0.3")

    @pytest.mark.currency
    def test_subtraction_can_go_negative(self):
        result = Money.from_str("1.0") - Money.from_str("2.5")
        assert result == Money.from_str("-1.5")
        assert result.is_negative()

    @pytest.mark.currency
    def test_negation(self):
        assert -Money.from_str("2") == Money.from_str("-2")

    @pytest.mark.currency
    def test_no_drift_over_many_operations(self):
        """Test repeated small deposits sum exactly."""
        total = Money.zero()
        for _ in range(10000):
            total = total + Money.from_str("0.0001")
        assert total == Money.from_str("1")


class TestMoneyComparison:
    """Test Money comparison operations."""

    @pytest.mark.currency
    def test_equality_ignores_trailing_zeros(self):
        assert Money.from_str("5.0") == Money.from_str("5")

    @pytest.mark.currency
    def test_ordering(self):
        small = Money.from_str("0.5")
        large = Money.from_str("1")

        assert small < large
        assert large > small
        assert small <= Money.from_str("0.50")
        assert large >= Money.from_str("1.0")

    @pytest.mark.currency
    def test_sign_checks(self):
        assert Money.from_str("0.0001").is_positive()
        assert not Money.zero().is_positive()
        assert not Money.zero().is_negative()


class TestMoneyDisplay:
    """Test Money display formatting."""

    @pytest.mark.currency
    def test_str_rounds_to_four_places(self):
        assert str(Money.from_str("1.23456")) == "1.2346"

    @pytest.mark.currency
    def test_quantize(self):
        assert Money.from_str("2.00005").quantize() == Money.from_str("2.0001")

    @pytest.mark.currency
    def test_repr(self):
        assert repr(Money.from_str("1.5")) == "Money(amount=Decimal('1.5'))"

    @pytest.mark.currency
    def test_frozen_dataclass(self):
        """Test Money is immutable."""
        m = Money.from_str("1")
        with pytest.raises(AttributeError):
            m.amount = Decimal(2)  # type: ignore
