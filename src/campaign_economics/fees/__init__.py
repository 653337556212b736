"""Fee estimation for proposed campaigns.

Re-exports key functions and types for convenient access:
    from campaign_economics.fees import estimate, FeeEstimate
"""

from campaign_economics.fees.discounts import (
    base_rate_for_budget,
    complexity_multiplier,
    loyalty_bonus,
    reputation_discount_rate,
)
from campaign_economics.fees.estimator import FeeEstimate, estimate
from campaign_economics.fees.oracle import (
    OracleFeeBreakdown,
    calculate_oracle_fee,
    oracle_fee_breakdown,
)
from campaign_economics.fees.token import (
    TokenPaymentEstimate,
    estimate_token_payment,
    token_discount_eligible,
)

__all__ = [
    "FeeEstimate",
    "OracleFeeBreakdown",
    "TokenPaymentEstimate",
    "base_rate_for_budget",
    "calculate_oracle_fee",
    "complexity_multiplier",
    "estimate",
    "estimate_token_payment",
    "loyalty_bonus",
    "oracle_fee_breakdown",
    "reputation_discount_rate",
    "token_discount_eligible",
]
