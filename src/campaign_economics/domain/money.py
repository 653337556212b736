"""Decimal helpers shared by every calculator.

All monetary calculations use Decimal arithmetic to avoid floating-point errors.
Money is quantized to two decimal places and ratios such as CVPI to four, both
with ROUND_HALF_UP rounding.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from campaign_economics.domain.errors import ValidationError

# Precision for monetary amounts
TWO_PLACES = Decimal("0.01")

# Precision for CVPI scores and achievement multipliers
FOUR_PLACES = Decimal("0.0001")

HUNDRED = Decimal("100")


def _quantize(value: Decimal, places: Decimal, field: str) -> Decimal:
    try:
        return value.quantize(places, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # The result needs more digits than the context precision (28).
        raise ValidationError(field, value, "is too large to calculate with") from None


def quantize_money(amount: Decimal, field: str = "amount") -> Decimal:
    """Round a monetary amount to 2 decimal places, half-up.

    Raises:
        ValidationError: If the amount is too large to carry two decimal
            places at the current Decimal precision.
    """
    return _quantize(amount, TWO_PLACES, field)


def quantize_ratio(value: Decimal, field: str = "ratio") -> Decimal:
    """Round a ratio to 4 decimal places, half-up."""
    return _quantize(value, FOUR_PLACES, field)


def to_decimal(value: object, field: str, *, allow_float: bool = False) -> Decimal:
    """Coerce a caller-supplied number into a finite Decimal.

    Floats are rejected for monetary inputs unless ``allow_float`` is set, in
    which case they are converted through their shortest string form so that
    ``116.3`` becomes ``Decimal("116.3")`` rather than its binary expansion.

    Args:
        value: The raw input (Decimal, int, numeric string, or float).
        field: Name of the input, used in the error message.
        allow_float: Accept float inputs.

    Returns:
        The value as a finite Decimal.

    Raises:
        ValidationError: If the value is not numeric, is a float when floats
            are not allowed, or is NaN/infinite.
    """
    if isinstance(value, bool):
        raise ValidationError(field, value, "must be numeric")

    if isinstance(value, float):
        if not allow_float:
            raise ValidationError(field, value, "must be a Decimal or string, not float")
        value = str(value)

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, str)):
        try:
            result = Decimal(value)
        except InvalidOperation:
            raise ValidationError(field, value, "must be numeric") from None
    else:
        raise ValidationError(field, value, "must be numeric")

    if not result.is_finite():
        raise ValidationError(field, value, "must be a finite number")
    return result
