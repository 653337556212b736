"""Tests for the domain exception hierarchy."""

from decimal import Decimal

from campaign_economics.domain.errors import (
    ApprovalRequiredError,
    DivisionByZeroError,
    EconomicsError,
    ValidationError,
)


class TestErrorHierarchy:
    """Each error is an EconomicsError and keeps its builtin counterpart."""

    def test_validation_error_is_value_error(self):
        error = ValidationError("budget_amount", Decimal("0"), "must be positive")
        assert isinstance(error, EconomicsError)
        assert isinstance(error, ValueError)
        assert error.field == "budget_amount"
        assert error.value == Decimal("0")
        assert str(error) == "budget_amount must be positive, got Decimal('0')"

    def test_division_by_zero_error_is_zero_division_error(self):
        error = DivisionByZeroError("verified_impact_score")
        assert isinstance(error, EconomicsError)
        assert isinstance(error, ZeroDivisionError)
        assert error.field == "verified_impact_score"
        assert "must be non-zero" in str(error)

    def test_approval_required_error_carries_delta(self):
        error = ApprovalRequiredError(Decimal("25"), Decimal("20"))
        assert isinstance(error, EconomicsError)
        assert not isinstance(error, ValueError)
        assert error.delta == Decimal("25")
        assert error.threshold == Decimal("20")
        assert "requires an approval reference" in str(error)
