"""Domain-specific exception classes for the campaign economics engine."""

from decimal import Decimal


class EconomicsError(Exception):
    """Base class for all calculation errors raised by the engine."""


class ValidationError(EconomicsError, ValueError):
    """Raised when an input is malformed or outside its allowed range.

    Attributes:
        field: Name of the offending input.
        value: The rejected value.
    """

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"{field} {reason}, got {value!r}")


class DivisionByZeroError(EconomicsError, ZeroDivisionError):
    """Raised when a ratio would divide by a zero denominator.

    Attributes:
        field: Name of the zero-valued denominator.
    """

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"{field} must be non-zero")


class ApprovalRequiredError(EconomicsError):
    """Raised when a reputation adjustment is too large to apply unapproved.

    Attributes:
        delta: The requested score change.
        threshold: The largest absolute change allowed without approval.
    """

    def __init__(self, delta: Decimal, threshold: Decimal) -> None:
        self.delta = delta
        self.threshold = threshold
        super().__init__(
            f"Adjustment of {delta} exceeds {threshold} points and requires an approval reference"
        )
