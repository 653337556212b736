"""CVPI scoring, history aggregates, projections and recommendations."""

from campaign_economics.cvpi.history import (
    CVPIHistorySummary,
    running_average,
    scores_in_period,
    summarize_history,
)
from campaign_economics.cvpi.recommendations import (
    CampaignOpportunity,
    CreatorPerformance,
    CVPIProjection,
    MatchFactors,
    RecommendationMatch,
    projection,
    projection_confidence,
    rank_recommendations,
    recommendation_match_score,
)
from campaign_economics.cvpi.scorer import (
    CVPIScore,
    calculate_cvpi,
    percentile_rank,
    score,
    trend,
)

__all__ = [
    "CVPIHistorySummary",
    "CVPIProjection",
    "CVPIScore",
    "CampaignOpportunity",
    "CreatorPerformance",
    "MatchFactors",
    "RecommendationMatch",
    "calculate_cvpi",
    "percentile_rank",
    "projection",
    "projection_confidence",
    "rank_recommendations",
    "recommendation_match_score",
    "running_average",
    "score",
    "scores_in_period",
    "summarize_history",
    "trend",
]
