"""Rate, multiplier and discount rules applied to a campaign's service fee."""

from decimal import Decimal

from campaign_economics.domain.money import quantize_ratio
from campaign_economics.domain.types import ComplexityTag
from campaign_economics.tables import (
    BudgetTier,
    ComplexityMultipliers,
    ReputationDiscountTable,
)


def base_rate_for_budget(budget_amount: Decimal, tiers: tuple[BudgetTier, ...]) -> Decimal:
    """Return the base service-fee rate for a budget.

    Tiers are non-overlapping with inclusive lower bounds, so a budget exactly
    on a tier boundary takes the lower rate of the tier above it.

    Args:
        budget_amount: The proposed campaign budget.
        tiers: Ascending budget tiers, the last one open-ended.

    Returns:
        The base rate as a fraction (e.g. ``Decimal("0.10")``).
    """
    for tier in tiers:
        if tier.upper_bound is None or budget_amount < tier.upper_bound:
            return tier.rate
    return tiers[-1].rate


def complexity_multiplier(
    complexity: ComplexityTag,
    number_of_participants: int,
    table: ComplexityMultipliers,
) -> Decimal:
    """Return the fee multiplier for a campaign's complexity and team size.

    Rules are evaluated in order and the first match wins:
    1. SIMPLE, or a single participant: ``table.simple``
    2. COMPLEX/ENTERPRISE, or more than ``large_team_threshold``: ``table.complex``
    3. At most ``small_team_max`` participants: ``table.small_team``
    4. Otherwise: ``table.mid_team``
    """
    if complexity is ComplexityTag.SIMPLE or number_of_participants == 1:
        return table.simple
    if (
        complexity in (ComplexityTag.COMPLEX, ComplexityTag.ENTERPRISE)
        or number_of_participants > table.large_team_threshold
    ):
        return table.complex
    if number_of_participants <= table.small_team_max:
        return table.small_team
    return table.mid_team


def loyalty_bonus(cumulative_spend: Decimal, table: ReputationDiscountTable) -> Decimal:
    """Return the step loyalty bonus earned by a project's cumulative spend."""
    for step in table.loyalty_bonuses:
        if cumulative_spend >= step.min_spend:
            return step.bonus
    return Decimal("0")


def reputation_discount_rate(
    cumulative_spend: Decimal, table: ReputationDiscountTable
) -> Decimal:
    """Return the reputation discount rate for a paying project.

    Formula: ``min(spend_component + loyalty_bonus, max_discount)`` where
    ``spend_component = min(spend / normalizer (4 dp) * weight, cap)``.
    Non-decreasing in ``cumulative_spend``.

    Args:
        cumulative_spend: The project's lifetime spend on the platform.
        table: The discount curve.

    Returns:
        The discount as a fraction, never above ``table.max_discount``.
    """
    spend_ratio = quantize_ratio(cumulative_spend / table.spend_normalizer)
    spend_component = min(spend_ratio * table.spend_weight, table.spend_cap)
    return min(spend_component + loyalty_bonus(cumulative_spend, table), table.max_discount)
