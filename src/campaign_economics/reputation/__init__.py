"""Reputation tiers, benefits, progress projections and adjustments."""

from campaign_economics.reputation.adjustment import (
    ReputationAdjustment,
    apply_adjustment,
    clamp_score,
)
from campaign_economics.reputation.tiers import (
    NextTierProjection,
    ReputationBreakdown,
    ReputationScale,
    TierBenefits,
    benefits_for,
    max_score,
    next_tier_projection,
    percentile_for,
    score_breakdown,
    tier_bands,
    tier_for,
)

__all__ = [
    "NextTierProjection",
    "ReputationAdjustment",
    "ReputationBreakdown",
    "ReputationScale",
    "TierBenefits",
    "apply_adjustment",
    "benefits_for",
    "clamp_score",
    "max_score",
    "next_tier_projection",
    "percentile_for",
    "score_breakdown",
    "tier_bands",
    "tier_for",
]
