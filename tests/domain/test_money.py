"""Tests for the shared Decimal helpers."""

from decimal import Decimal

import pytest

from campaign_economics.domain.errors import ValidationError
from campaign_economics.domain.money import quantize_money, quantize_ratio, to_decimal


class TestQuantize:
    """Tests for HALF_UP quantization of money and ratios."""

    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            ("2.345", "2.35"),
            ("2.344", "2.34"),
            ("0.005", "0.01"),
            ("0.004", "0.00"),
            ("100", "100.00"),
        ],
        ids=["half_up", "round_down", "half_cent", "below_half_cent", "whole"],
    )
    def test_quantize_money(self, amount, expected):
        result = quantize_money(Decimal(amount))
        assert result == Decimal(expected)
        assert str(result) == expected

    def test_quantize_ratio_four_places(self):
        assert quantize_ratio(Decimal("0.12345")) == Decimal("0.1235")
        assert str(quantize_ratio(Decimal("1") / Decimal("3"))) == "0.3333"

    @pytest.mark.parametrize(
        ("helper", "value"),
        [(quantize_money, "1e28"), (quantize_ratio, "1e26")],
        ids=["money", "ratio"],
    )
    def test_beyond_decimal_precision_is_validation_error(self, helper, value):
        with pytest.raises(ValidationError, match="too large") as exc_info:
            helper(Decimal(value), "budget_amount")
        assert exc_info.value.field == "budget_amount"


class TestToDecimal:
    """Tests for to_decimal coercion."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (Decimal("12.50"), Decimal("12.50")),
            (7, Decimal("7")),
            ("116.3", Decimal("116.3")),
            ("-3", Decimal("-3")),
        ],
        ids=["decimal", "int", "string", "negative_string"],
    )
    def test_accepts_exact_inputs(self, value, expected):
        assert to_decimal(value, "amount") == expected

    def test_rejects_float_by_default(self):
        with pytest.raises(ValidationError, match="not float") as exc_info:
            to_decimal(1.5, "base_amount")
        assert exc_info.value.field == "base_amount"

    def test_allowed_float_uses_shortest_repr(self):
        assert to_decimal(116.3, "achievement_pct", allow_float=True) == Decimal("116.3")

    @pytest.mark.parametrize(
        "value",
        ["abc", "", None, True, [1], "NaN", "Infinity"],
        ids=["word", "empty", "none", "bool", "list", "nan", "infinity"],
    )
    def test_rejects_non_numeric(self, value):
        with pytest.raises(ValidationError):
            to_decimal(value, "amount")
