"""Performance-based payment settlement and platform revenue distribution."""

from campaign_economics.settlement.achievement import overall_achievement_pct
from campaign_economics.settlement.calculator import (
    EscrowRelease,
    PaymentSettlement,
    achievement_multiplier,
    effective_fee_rate,
    release_from_escrow,
    settle,
    settle_achievement,
)
from campaign_economics.settlement.distribution import split_platform_fee

__all__ = [
    "EscrowRelease",
    "PaymentSettlement",
    "achievement_multiplier",
    "effective_fee_rate",
    "overall_achievement_pct",
    "release_from_escrow",
    "settle",
    "settle_achievement",
    "split_platform_fee",
]
