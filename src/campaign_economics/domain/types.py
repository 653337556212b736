"""Domain enumerations for the campaign economics engine."""

from enum import StrEnum


class ComplexityTag(StrEnum):
    """Project-declared complexity of a campaign."""

    SIMPLE = "simple"
    STANDARD = "standard"
    COMPLEX = "complex"
    ENTERPRISE = "enterprise"


class DataSource(StrEnum):
    """Off-chain or on-chain source a KPI metric is verified against."""

    TWITTER = "twitter"
    DISCORD = "discord"
    TELEGRAM = "telegram"
    ONCHAIN = "onchain"
    MEDIA_PUBLICATION = "media_publication"
    OTHER = "other"


class CVPITrend(StrEnum):
    """Direction of a creator's CVPI over their two most recent campaigns."""

    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class HistoryPeriod(StrEnum):
    """Look-back windows for CVPI history queries."""

    WEEK = "7d"
    MONTH = "30d"
    QUARTER = "90d"
    YEAR = "1y"


class CreatorTier(StrEnum):
    """Creator reputation tiers on the 0-1000 scale, lowest first."""

    NEWCOMER = "newcomer"
    C = "C"
    B = "B"
    A = "A"
    S = "S"


class ReputationTier(StrEnum):
    """Generic reputation tiers on the 0-100 scale used by admin tooling."""

    NEWCOMER = "newcomer"
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"
    DIAMOND = "diamond"


class DistributionLayer(StrEnum):
    """Allocation layers that platform fee revenue is split across."""

    TREASURY = "treasury"
    VALIDATOR_INCENTIVES = "validator_incentives"
    AI_ECOSYSTEM = "ai_ecosystem"
    DAO_TREASURY = "dao_treasury"
    BUYBACK_BURN = "buyback_burn"
