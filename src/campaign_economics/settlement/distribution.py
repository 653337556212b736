"""Five-layer split of platform fee revenue.

Each layer's share is rounded to cents on its own, then the rounding
remainder (positive or negative) is folded into the remainder layer
(treasury by default), so the layers always sum to the platform fee exactly.
"""

from decimal import Decimal

from campaign_economics.domain.errors import ValidationError
from campaign_economics.domain.money import quantize_money
from campaign_economics.domain.types import DistributionLayer
from campaign_economics.tables import DEFAULT_TABLES, SettlementTable


def split_platform_fee(
    platform_fee: Decimal,
    table: SettlementTable = DEFAULT_TABLES.settlement,
) -> dict[DistributionLayer, Decimal]:
    """Split a platform fee across the allocation layers without leakage.

    Args:
        platform_fee: The fee to distribute, in cents precision.
        table: Settlement table holding the layer shares.

    Returns:
        A dict with one amount per layer, in ``DistributionLayer`` order,
        summing exactly to ``platform_fee``.

    Raises:
        ValidationError: If the fee is negative or has sub-cent precision.
    """
    if platform_fee < 0:
        raise ValidationError("platform_fee", platform_fee, "must not be negative")
    if quantize_money(platform_fee) != platform_fee:
        raise ValidationError("platform_fee", platform_fee, "must be a whole number of cents")

    split = {
        layer: quantize_money(platform_fee * table.distribution[layer])
        for layer in DistributionLayer
    }
    remainder = platform_fee - sum(split.values(), Decimal("0"))
    split[table.remainder_layer] += remainder
    return split
