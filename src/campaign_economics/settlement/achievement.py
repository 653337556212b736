"""KPI achievement aggregation for performance-based payment."""

from decimal import Decimal

from campaign_economics.domain.errors import ValidationError
from campaign_economics.domain.models import AchievementRecord
from campaign_economics.domain.money import HUNDRED


def overall_achievement_pct(record: AchievementRecord) -> Decimal:
    """Return the weighted achievement percentage of a deliverable.

    Formula: ``sum(weight * actual / target * 100)`` over all metrics. The
    result is unbounded above; capping happens at settlement.

    Args:
        record: Verified KPI outcomes from the oracle.

    Returns:
        The overall achievement as a percentage (e.g. ``Decimal("116.3")``).

    Raises:
        ValidationError: If any metric has a target that is not positive.
    """
    total = Decimal("0")
    for index, metric in enumerate(record.metrics):
        if metric.target_value <= 0:
            raise ValidationError(
                f"metrics[{index}].target_value", metric.target_value, "must be positive"
            )
        total += metric.weight * metric.actual_value / metric.target_value * HUNDRED
    return total
