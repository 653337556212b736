"""Domain types, input records, errors and Decimal helpers."""

from campaign_economics.domain.errors import (
    ApprovalRequiredError,
    DivisionByZeroError,
    EconomicsError,
    ValidationError,
)
from campaign_economics.domain.models import (
    AchievementRecord,
    CampaignBudgetInput,
    KpiAchievement,
    KpiMetric,
    PartyEconomicProfile,
)
from campaign_economics.domain.types import (
    ComplexityTag,
    CreatorTier,
    CVPITrend,
    DataSource,
    DistributionLayer,
    HistoryPeriod,
    ReputationTier,
)

__all__ = [
    "AchievementRecord",
    "ApprovalRequiredError",
    "CVPITrend",
    "CampaignBudgetInput",
    "ComplexityTag",
    "CreatorTier",
    "DataSource",
    "DistributionLayer",
    "DivisionByZeroError",
    "EconomicsError",
    "HistoryPeriod",
    "KpiAchievement",
    "KpiMetric",
    "PartyEconomicProfile",
    "ReputationTier",
    "ValidationError",
]
