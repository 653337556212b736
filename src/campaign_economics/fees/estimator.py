"""Campaign fee estimation: service fee, oracle fee and escrow requirement.

Every monetary step is quantized to 2 decimal places with ROUND_HALF_UP;
rates and multipliers are carried unrounded. Discounts apply to the
complexity-adjusted fee, never to the campaign budget itself.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta
from decimal import Decimal

import structlog
from pydantic import BaseModel

from campaign_economics.domain.errors import ValidationError
from campaign_economics.domain.models import (
    CampaignBudgetInput,
    PartyEconomicProfile,
    calculation_time,
)
from campaign_economics.domain.money import quantize_money
from campaign_economics.fees.discounts import (
    base_rate_for_budget,
    complexity_multiplier,
    reputation_discount_rate,
)
from campaign_economics.fees.oracle import calculate_oracle_fee
from campaign_economics.tables import DEFAULT_TABLES, EconomicTables

logger = structlog.get_logger()


class FeeEstimate(BaseModel, frozen=True):
    """Full fee and escrow breakdown for a proposed campaign.

    The estimate is only honoured until ``valid_until``. The engine does not
    enforce expiry: whoever accepts an estimate (campaign funding, settlement)
    must reject it once ``is_expired`` returns True.

    Invariants:
        ``final_service_fee >= 0``
        ``total_escrow_required == campaign_budget + total_fees + escrow_buffer``
    """

    estimate_id: str
    campaign_budget: Decimal
    base_rate: Decimal
    base_fee: Decimal
    complexity_multiplier: Decimal
    complexity_adjusted_fee: Decimal
    reputation_discount_rate: Decimal
    discount_amount: Decimal
    service_fee_before_token: Decimal
    token_discount_rate: Decimal
    token_discount_amount: Decimal
    final_service_fee: Decimal
    oracle_fee: Decimal
    total_fees: Decimal
    escrow_buffer: Decimal
    total_escrow_required: Decimal
    calculated_at: datetime
    valid_until: datetime

    def is_expired(self, at: datetime | None = None) -> bool:
        """Return True if the estimate is stale at ``at`` (default: now, UTC)."""
        return calculation_time(at) >= self.valid_until


def _new_estimate_id() -> str:
    return f"est-{uuid.uuid4().hex[:8]}"


def estimate(
    budget_input: CampaignBudgetInput,
    payer_profile: PartyEconomicProfile,
    *,
    tables: EconomicTables = DEFAULT_TABLES,
    now: datetime | None = None,
) -> FeeEstimate:
    """Estimate all fees and the escrow deposit for a proposed campaign.

    Steps:
    1. Base rate from the budget tier.
    2. ``base_fee = budget * base_rate``.
    3. Complexity multiplier from declared complexity and team size.
    4. ``complexity_adjusted_fee = base_fee * multiplier``.
    5. Reputation discount from the payer's cumulative spend.
    6. Token discount on the post-reputation fee when paying in tokens.
    7. Oracle fee for the KPI metrics and participants.
    8. ``total_fees = final_service_fee + oracle_fee``.
    9. 10% escrow buffer over ``budget + total_fees``.
    10. ``valid_until = now + 15 minutes``.

    Args:
        budget_input: The proposed campaign.
        payer_profile: Spend history of the paying project.
        tables: Rate tables. Defaults to the published economic model.
        now: Calculation time. Defaults to the current UTC time.

    Returns:
        An immutable FeeEstimate.

    Raises:
        ValidationError: If the budget is not positive, there are no
            participants, or ``now`` is a naive datetime.
    """
    budget = budget_input.budget_amount
    participants = budget_input.number_of_participants
    if budget <= 0:
        raise ValidationError("budget_amount", budget, "must be positive")
    if participants < 1:
        raise ValidationError("number_of_participants", participants, "must be at least 1")

    fee_table = tables.fees

    base_rate = base_rate_for_budget(budget, fee_table.budget_tiers)
    base_fee = quantize_money(budget * base_rate)

    multiplier = complexity_multiplier(
        budget_input.complexity, participants, fee_table.complexity
    )
    complexity_adjusted_fee = quantize_money(base_fee * multiplier)

    discount_rate = reputation_discount_rate(
        payer_profile.cumulative_spend, fee_table.reputation_discount
    )
    discount_amount = quantize_money(complexity_adjusted_fee * discount_rate)
    fee_before_token = quantize_money(complexity_adjusted_fee - discount_amount)

    token_rate = (
        fee_table.token.discount_rate if budget_input.pay_with_platform_token else Decimal("0")
    )
    token_amount = quantize_money(fee_before_token * token_rate)
    final_service_fee = max(quantize_money(fee_before_token - token_amount), Decimal("0.00"))

    oracle_fee = calculate_oracle_fee(budget_input.kpi_metrics, participants, fee_table.oracle)
    total_fees = final_service_fee + oracle_fee

    escrow_buffer = quantize_money((budget + total_fees) * fee_table.escrow_buffer_rate)
    total_escrow_required = budget + total_fees + escrow_buffer

    calculated_at = calculation_time(now)
    result = FeeEstimate(
        estimate_id=_new_estimate_id(),
        campaign_budget=budget,
        base_rate=base_rate,
        base_fee=base_fee,
        complexity_multiplier=multiplier,
        complexity_adjusted_fee=complexity_adjusted_fee,
        reputation_discount_rate=discount_rate,
        discount_amount=discount_amount,
        service_fee_before_token=fee_before_token,
        token_discount_rate=token_rate,
        token_discount_amount=token_amount,
        final_service_fee=final_service_fee,
        oracle_fee=oracle_fee,
        total_fees=total_fees,
        escrow_buffer=escrow_buffer,
        total_escrow_required=total_escrow_required,
        calculated_at=calculated_at,
        valid_until=calculated_at + timedelta(minutes=fee_table.estimate_validity_minutes),
    )

    logger.info(
        "fee_estimate_calculated",
        estimate_id=result.estimate_id,
        budget=str(budget),
        base_rate=str(base_rate),
        total_fees=str(total_fees),
        total_escrow_required=str(total_escrow_required),
    )
    return result
