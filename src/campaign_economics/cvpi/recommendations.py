"""Campaign recommendations and CVPI projections for creators.

Match scores rank open campaigns for a creator and never feed into money.
Each of the five factors is scored in [0, 1] and combined with the
configured weights (historical CVPI 35%, audience 25%, budget 20%,
category 15%, reputation 5%). A factor the caller has no data for scores a
neutral 0.5.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

import structlog
from pydantic import BaseModel, Field, field_validator

from campaign_economics.domain.errors import DivisionByZeroError, ValidationError
from campaign_economics.domain.money import HUNDRED, quantize_money, quantize_ratio
from campaign_economics.tables import DEFAULT_TABLES, CVPITable, EconomicTables

logger = structlog.get_logger()

NEUTRAL_FACTOR = Decimal("0.5")
_ZERO = Decimal("0")
_ONE = Decimal("1")


def _clamp_unit(value: Decimal) -> Decimal:
    return max(_ZERO, min(_ONE, value))


class CampaignOpportunity(BaseModel, frozen=True):
    """An open campaign a creator could apply to.

    Attributes:
        campaign_id: Campaign identifier.
        category: Campaign category (e.g. "DeFi").
        budget: Total campaign budget.
        audience_match: Overlap between the creator's audience and the
            campaign's target audience in [0, 1], computed by the caller.
            None when unknown.
        required_reputation: Minimum creator reputation the project asks for.
    """

    campaign_id: str
    category: str
    budget: Decimal
    audience_match: Decimal | None = None
    required_reputation: Decimal | None = None

    @field_validator("budget", mode="before")
    @classmethod
    def reject_float_budget(cls, v: object) -> object:
        """Reject float inputs for budget to prevent precision errors."""
        if isinstance(v, float):
            raise ValueError("Use Decimal or string, not float, for budget")
        return v


class CreatorPerformance(BaseModel, frozen=True):
    """A creator's track record, as supplied by the analytics collaborator.

    Attributes:
        average_cvpi: Running average CVPI, or None without history.
        reputation_score: Creator reputation on the 0-1000 scale.
        completed_campaigns: Number of scored campaigns.
        campaigns_by_category: Completed campaigns per category.
        optimal_budget_min: Lower end of the budget range the creator performs best in.
        optimal_budget_max: Upper end of that range.
    """

    average_cvpi: Decimal | None = None
    reputation_score: Decimal = Decimal("0")
    completed_campaigns: int = 0
    campaigns_by_category: dict[str, int] = Field(default_factory=dict)
    optimal_budget_min: Decimal | None = None
    optimal_budget_max: Decimal | None = None


class MatchFactors(BaseModel, frozen=True):
    """The five factor scores behind a match score, each in [0, 1]."""

    historical_cvpi: Decimal
    audience: Decimal
    budget: Decimal
    category: Decimal
    reputation: Decimal


class RecommendationMatch(BaseModel, frozen=True):
    """A campaign scored for a creator."""

    campaign_id: str
    match_score: Decimal
    factors: MatchFactors
    estimated_cvpi: Decimal
    projected_impact: Decimal
    match_reasons: tuple[str, ...]


class CVPIProjection(BaseModel, frozen=True):
    """Projected cost and CVPI for a creator joining a campaign."""

    base_payment: Decimal
    platform_fee: Decimal
    oracle_fee: Decimal
    estimated_cost: Decimal
    projected_impact: Decimal
    projected_cvpi: Decimal
    confidence: Decimal
    platform_average_cvpi: Decimal
    percentage_better: Decimal


# ---------------------------------------------------------------------------
# Factor scores
# ---------------------------------------------------------------------------


def historical_cvpi_fit(average_cvpi: Decimal | None, table: CVPITable) -> Decimal:
    """Score a creator's CVPI against the platform average (1 = at or better)."""
    if average_cvpi is None or average_cvpi <= 0:
        return NEUTRAL_FACTOR
    return _clamp_unit(table.platform_average_cvpi / average_cvpi)


def budget_fit(
    budget: Decimal, optimal_min: Decimal | None, optimal_max: Decimal | None
) -> Decimal:
    """Score how close a budget sits to the creator's optimal range."""
    if optimal_min is None and optimal_max is None:
        return NEUTRAL_FACTOR
    if optimal_min is not None and budget < optimal_min:
        return _clamp_unit(budget / optimal_min) if optimal_min > 0 else _ONE
    if optimal_max is not None and budget > optimal_max:
        return _clamp_unit(optimal_max / budget)
    return _ONE


def category_expertise(
    category: str, campaigns_by_category: dict[str, int], table: CVPITable
) -> Decimal:
    """Score a creator's track record in a category, saturating at 1."""
    completed = campaigns_by_category.get(category, 0)
    return _clamp_unit(Decimal(completed) / Decimal(table.category_expertise_campaigns))


def reputation_fit(reputation_score: Decimal, required: Decimal | None) -> Decimal:
    """Score a creator's reputation against a campaign's requirement."""
    if required is None or required <= 0:
        return _ONE
    return _clamp_unit(reputation_score / required)


def _estimated_cvpi(average_cvpi: Decimal | None, table: CVPITable) -> Decimal:
    base = average_cvpi if average_cvpi and average_cvpi > 0 else table.platform_average_cvpi
    return quantize_ratio(base * table.projection_optimism)


def _match_reasons(
    campaign: CampaignOpportunity, factors: MatchFactors, estimated_cvpi: Decimal
) -> tuple[str, ...]:
    reasons: list[str] = []
    if factors.category >= NEUTRAL_FACTOR:
        reasons.append(f"Historical success in {campaign.category} category")
    if factors.budget == _ONE:
        reasons.append("Budget range aligns with your optimal performance")
    if factors.audience >= Decimal("0.75"):
        reasons.append("Strong audience overlap with campaign target")
    if factors.reputation < _ONE:
        reasons.append("Reputation below the campaign's requirement")
    reasons.append(f"Projected CVPI: {estimated_cvpi.quantize(Decimal('0.01'))}")
    return tuple(reasons)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def recommendation_match_score(
    campaign: CampaignOpportunity,
    creator: CreatorPerformance,
    *,
    tables: EconomicTables = DEFAULT_TABLES,
) -> RecommendationMatch:
    """Score how well a campaign suits a creator.

    Args:
        campaign: The open campaign.
        creator: The creator's track record.
        tables: Rate tables. Defaults to the published economic model.

    Returns:
        RecommendationMatch with a 0-1 ``match_score`` (4 decimal places),
        the factor breakdown, and human-readable reasons.
    """
    table = tables.cvpi
    weights = table.match_weights
    audience = (
        NEUTRAL_FACTOR if campaign.audience_match is None else _clamp_unit(campaign.audience_match)
    )
    factors = MatchFactors(
        historical_cvpi=historical_cvpi_fit(creator.average_cvpi, table),
        audience=audience,
        budget=budget_fit(campaign.budget, creator.optimal_budget_min, creator.optimal_budget_max),
        category=category_expertise(campaign.category, creator.campaigns_by_category, table),
        reputation=reputation_fit(creator.reputation_score, campaign.required_reputation),
    )
    match_score = quantize_ratio(
        factors.historical_cvpi * weights.historical_cvpi
        + factors.audience * weights.audience
        + factors.budget * weights.budget
        + factors.category * weights.category
        + factors.reputation * weights.reputation
    )

    estimated_cvpi = _estimated_cvpi(creator.average_cvpi, table)
    projected_impact = (campaign.budget / estimated_cvpi).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP
    )
    return RecommendationMatch(
        campaign_id=campaign.campaign_id,
        match_score=match_score,
        factors=factors,
        estimated_cvpi=estimated_cvpi,
        projected_impact=projected_impact,
        match_reasons=_match_reasons(campaign, factors, estimated_cvpi),
    )


def rank_recommendations(
    campaigns: Iterable[CampaignOpportunity],
    creator: CreatorPerformance,
    *,
    limit: int | None = None,
    tables: EconomicTables = DEFAULT_TABLES,
) -> list[RecommendationMatch]:
    """Score campaigns for a creator and return them best match first.

    Equal scores keep the order the campaigns were supplied in.
    """
    matches = [recommendation_match_score(c, creator, tables=tables) for c in campaigns]
    ranked = sorted(matches, key=lambda m: m.match_score, reverse=True)
    return ranked if limit is None else ranked[:limit]


def projection_confidence(completed_campaigns: int, table: CVPITable) -> Decimal:
    """Return projection confidence for a creator's scored-campaign count."""
    for step in table.confidence_steps:
        if completed_campaigns >= step.min_campaigns:
            return step.confidence
    return table.fallback_confidence


def projection(
    campaign_budget: Decimal,
    participant_count: int,
    creator_avg_cvpi: Decimal | None,
    completed_campaigns: int = 0,
    *,
    tables: EconomicTables = DEFAULT_TABLES,
) -> CVPIProjection:
    """Project a creator's cost and CVPI before they apply to a campaign.

    ``projected_cvpi`` is the creator's average scaled by the configured
    optimism factor (0.95), reflecting the benefit of matched placement.
    Creators without history are projected at the platform average.

    Args:
        campaign_budget: Total campaign budget.
        participant_count: Number of creators sharing the budget.
        creator_avg_cvpi: The creator's running average CVPI, or None.
        completed_campaigns: The creator's scored-campaign count.
        tables: Rate tables. Defaults to the published economic model.

    Returns:
        An immutable CVPIProjection.

    Raises:
        ValidationError: If the budget is not positive, there are no
            participants, or the average CVPI is negative.
        DivisionByZeroError: If the average CVPI is zero.
    """
    table = tables.cvpi
    if campaign_budget <= 0:
        raise ValidationError("campaign_budget", campaign_budget, "must be positive")
    if participant_count < 1:
        raise ValidationError("participant_count", participant_count, "must be at least 1")

    avg = table.platform_average_cvpi if creator_avg_cvpi is None else creator_avg_cvpi
    if avg == 0:
        raise DivisionByZeroError("creator_avg_cvpi")
    if avg < 0:
        raise ValidationError("creator_avg_cvpi", avg, "must be positive")

    base_payment = quantize_money(campaign_budget / participant_count)
    platform_fee = quantize_money(base_payment * table.projection_fee_rate)
    oracle_fee = table.projection_oracle_fee
    estimated_cost = base_payment + platform_fee + oracle_fee
    projected_impact = quantize_money(estimated_cost / avg)
    projected_cvpi = quantize_ratio(avg * table.projection_optimism)

    platform_avg = table.platform_average_cvpi
    percentage_better = quantize_ratio((platform_avg - projected_cvpi) / platform_avg) * HUNDRED

    result = CVPIProjection(
        base_payment=base_payment,
        platform_fee=platform_fee,
        oracle_fee=oracle_fee,
        estimated_cost=estimated_cost,
        projected_impact=projected_impact,
        projected_cvpi=projected_cvpi,
        confidence=projection_confidence(completed_campaigns, table),
        platform_average_cvpi=platform_avg,
        percentage_better=percentage_better,
    )
    logger.debug(
        "cvpi_projected",
        projected_cvpi=str(projected_cvpi),
        confidence=str(result.confidence),
    )
    return result
