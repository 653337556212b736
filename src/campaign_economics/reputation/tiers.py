"""Reputation tiers, tier benefits and next-tier progress.

Two scales exist: the creator scale (0-1000, tiers NEWCOMER/C/B/A/S) that
drives fee discounts, and the generic admin scale (0-100, NEWCOMER up to
DIAMOND). A tier is a pure function of the score with no hysteresis,
so crossing a band boundary changes tier immediately in either direction.
"""

from __future__ import annotations

from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel

from campaign_economics.domain.errors import ValidationError
from campaign_economics.domain.types import CreatorTier, ReputationTier
from campaign_economics.tables import (
    DEFAULT_TABLES,
    CreatorTierBand,
    EconomicTables,
    GenericTierBand,
)


class ReputationScale(StrEnum):
    """Which reputation scale a score is measured on."""

    CREATOR = "creator"
    GENERIC = "generic"


class TierBenefits(BaseModel, frozen=True):
    """What a creator tier unlocks.

    Attributes:
        tier: The creator tier.
        fee_discount_rate: Fraction taken off platform fees.
        priority_applications: Applications are reviewed first.
        higher_payout_potential: Eligible for above-base payouts.
        exclusive_campaign_access: Can see invite-only campaigns.
    """

    tier: CreatorTier
    fee_discount_rate: Decimal
    priority_applications: bool
    higher_payout_potential: bool
    exclusive_campaign_access: bool


class NextTierProjection(BaseModel, frozen=True):
    """Distance from a score to the next tier up."""

    target_tier: CreatorTier | ReputationTier
    required_score: Decimal
    points_needed: Decimal
    estimated_campaigns: int


class ReputationBreakdown(BaseModel, frozen=True):
    """A creator score apportioned across its reputation components."""

    campaign_completion: int
    quality_score: int
    cvpi_performance: int
    client_satisfaction: int
    community_engagement: int


def tier_bands(
    scale: ReputationScale, tables: EconomicTables = DEFAULT_TABLES
) -> tuple[CreatorTierBand, ...] | tuple[GenericTierBand, ...]:
    """Return the bands of a scale, highest tier first."""
    if scale is ReputationScale.GENERIC:
        return tables.reputation.generic_bands
    return tables.reputation.creator_bands


def max_score(scale: ReputationScale, tables: EconomicTables = DEFAULT_TABLES) -> Decimal:
    """Return the top of a scale's score range."""
    if scale is ReputationScale.GENERIC:
        return tables.reputation.generic_max_score
    return tables.reputation.creator_max_score


def tier_for(
    score: Decimal,
    scale: ReputationScale = ReputationScale.CREATOR,
    *,
    tables: EconomicTables = DEFAULT_TABLES,
) -> CreatorTier | ReputationTier:
    """Map a score to its tier.

    Args:
        score: The reputation score.
        scale: The scale the score is measured on.
        tables: Rate tables. Defaults to the published economic model.

    Returns:
        The highest tier whose lower bound the score reaches. Scores below
        zero map to the lowest tier.
    """
    bands = tier_bands(scale, tables)
    for band in bands:
        if score >= band.min_score:
            return band.tier
    return bands[-1].tier


def _coerce_tier(
    tier: CreatorTier | ReputationTier | str, scale: ReputationScale
) -> CreatorTier | ReputationTier:
    """Return ``tier`` as a member of the scale's tier enum.

    Plain strings are looked up by value. A member of the other scale's enum is
    rejected even when its value matches (both scales have a "newcomer" tier).
    """
    tier_type = ReputationTier if scale is ReputationScale.GENERIC else CreatorTier
    if isinstance(tier, tier_type):
        return tier
    if isinstance(tier, StrEnum):
        raise ValidationError("tier", tier, f"is not a {scale} tier")
    try:
        return tier_type(tier)
    except ValueError:
        raise ValidationError("tier", tier, f"is not a {scale} tier") from None


def _creator_band(tier: CreatorTier | str, tables: EconomicTables) -> CreatorTierBand:
    current = _coerce_tier(tier, ReputationScale.CREATOR)
    for band in tables.reputation.creator_bands:
        if band.tier is current:
            return band
    raise ValidationError("tier", tier, "has no configured band")


def benefits_for(
    tier: CreatorTier | str, *, tables: EconomicTables = DEFAULT_TABLES
) -> TierBenefits:
    """Return the benefit set of a creator tier."""
    band = _creator_band(tier, tables)
    return TierBenefits(
        tier=band.tier,
        fee_discount_rate=band.fee_discount_rate,
        priority_applications=band.priority_applications,
        higher_payout_potential=band.higher_payout_potential,
        exclusive_campaign_access=band.exclusive_campaign_access,
    )


def next_tier_projection(
    score: Decimal,
    tier: CreatorTier | ReputationTier | None = None,
    scale: ReputationScale = ReputationScale.CREATOR,
    *,
    tables: EconomicTables = DEFAULT_TABLES,
) -> NextTierProjection | None:
    """Project the points and campaigns needed to reach the next tier.

    ``estimated_campaigns`` assumes a flat ``points_per_campaign`` (15) gained
    per completed campaign; it is a configured assumption, not a measurement.

    Args:
        score: The current score.
        tier: The current tier. Derived from ``score`` when omitted; when
            given it must be the tier ``score`` maps to.
        scale: The scale the score is measured on.
        tables: Rate tables. Defaults to the published economic model.

    Returns:
        The projection, or None when already in the top tier.

    Raises:
        ValidationError: If ``tier`` belongs to another scale or does not
            match ``score``.
    """
    current = tier_for(score, scale, tables=tables)
    if tier is not None and _coerce_tier(tier, scale) is not current:
        raise ValidationError("tier", tier, f"does not match score {score} ({current})")
    bands = tier_bands(scale, tables)
    index = next(i for i, band in enumerate(bands) if band.tier is current)
    if index == 0:
        return None

    target = bands[index - 1]
    points_needed = target.min_score - score
    return NextTierProjection(
        target_tier=target.tier,
        required_score=target.min_score,
        points_needed=points_needed,
        estimated_campaigns=int(points_needed // tables.reputation.points_per_campaign),
    )


def percentile_for(score: Decimal, *, tables: EconomicTables = DEFAULT_TABLES) -> Decimal:
    """Return the approximate percentile of a creator score."""
    for step in tables.reputation.percentile_steps:
        if score >= step.min_score:
            return step.percentile
    return tables.reputation.fallback_percentile


def score_breakdown(
    score: Decimal, *, tables: EconomicTables = DEFAULT_TABLES
) -> ReputationBreakdown:
    """Apportion a creator score across its components, each capped."""
    total = int(score)
    scale_max = int(tables.reputation.creator_max_score)
    caps = tables.reputation.breakdown_caps
    return ReputationBreakdown(
        **{name: min(cap, total * cap // scale_max) for name, cap in caps.items()}
    )
