"""Performance-adjusted payment settlement.

Payment = base amount * achievement multiplier, where the multiplier is the
KPI achievement rate clamped to [0, 1.5]. The cap stops gamed metrics from
producing runaway payouts. The platform fee is deducted before the creator
is paid and then split across the revenue layers.
"""

from __future__ import annotations

from decimal import Decimal

import structlog
from pydantic import BaseModel

from campaign_economics.domain.errors import ValidationError
from campaign_economics.domain.models import AchievementRecord
from campaign_economics.domain.money import HUNDRED, quantize_money, quantize_ratio, to_decimal
from campaign_economics.domain.types import CreatorTier, DistributionLayer
from campaign_economics.reputation.tiers import benefits_for
from campaign_economics.settlement.achievement import overall_achievement_pct
from campaign_economics.settlement.distribution import split_platform_fee
from campaign_economics.tables import DEFAULT_TABLES, EconomicTables

logger = structlog.get_logger()


class PaymentSettlement(BaseModel, frozen=True):
    """Settled payment for one verified deliverable.

    Invariants:
        ``calculated_payment == base_amount * achievement_multiplier`` (to cents)
        ``net_to_creator == calculated_payment - platform_fee``
        ``sum(distribution.values()) == platform_fee``
    """

    base_amount: Decimal
    achievement_pct: Decimal
    achievement_multiplier: Decimal
    calculated_payment: Decimal
    fee_rate: Decimal
    platform_fee: Decimal
    net_to_creator: Decimal
    distribution: dict[DistributionLayer, Decimal]


class EscrowRelease(BaseModel, frozen=True):
    """Escrow balance movement caused by releasing a settlement."""

    previous_balance: Decimal
    released: Decimal
    remaining_balance: Decimal


def achievement_multiplier(
    achievement_pct: Decimal, max_multiplier: Decimal = Decimal("1.5")
) -> Decimal:
    """Convert an achievement percentage into a clamped payment multiplier."""
    multiplier = quantize_ratio(achievement_pct / HUNDRED)
    return max(Decimal("0"), min(multiplier, max_multiplier))


def effective_fee_rate(
    fee_rate: Decimal,
    tier: CreatorTier,
    *,
    tables: EconomicTables = DEFAULT_TABLES,
) -> Decimal:
    """Apply a creator tier's platform-fee discount to a fee rate."""
    discount = benefits_for(tier, tables=tables).fee_discount_rate
    return fee_rate * (Decimal("1") - discount)


def settle(
    base_amount: Decimal | int | str,
    achievement_pct: Decimal | int | float | str,
    fee_rate: Decimal | int | float | str | None = None,
    *,
    tables: EconomicTables = DEFAULT_TABLES,
) -> PaymentSettlement:
    """Settle a deliverable's payment from its verified achievement rate.

    Args:
        base_amount: Agreed payment at 100% achievement.
        achievement_pct: Verified KPI achievement as a percentage.
        fee_rate: Platform fee as a fraction of the payment. Defaults to the
            configured rate (4%).
        tables: Rate tables. Defaults to the published economic model.

    Returns:
        An immutable PaymentSettlement.

    Raises:
        ValidationError: If the base amount or achievement is negative or
            non-numeric, or the fee rate lies outside [0, 1].
    """
    table = tables.settlement
    base = to_decimal(base_amount, "base_amount")
    pct = to_decimal(achievement_pct, "achievement_pct", allow_float=True)
    rate = (
        table.default_fee_rate
        if fee_rate is None
        else to_decimal(fee_rate, "fee_rate", allow_float=True)
    )

    if base < 0:
        raise ValidationError("base_amount", base, "must not be negative")
    if pct < 0:
        raise ValidationError("achievement_pct", pct, "must not be negative")
    if not Decimal("0") <= rate <= Decimal("1"):
        raise ValidationError("fee_rate", rate, "must be between 0 and 1")

    multiplier = achievement_multiplier(pct, table.max_achievement_multiplier)
    calculated_payment = quantize_money(base * multiplier)
    platform_fee = quantize_money(calculated_payment * rate)
    net_to_creator = calculated_payment - platform_fee

    result = PaymentSettlement(
        base_amount=base,
        achievement_pct=pct,
        achievement_multiplier=multiplier,
        calculated_payment=calculated_payment,
        fee_rate=rate,
        platform_fee=platform_fee,
        net_to_creator=net_to_creator,
        distribution=split_platform_fee(platform_fee, table),
    )
    logger.info(
        "payment_settled",
        base_amount=str(base),
        achievement_pct=str(pct),
        multiplier=str(multiplier),
        platform_fee=str(platform_fee),
        net_to_creator=str(net_to_creator),
    )
    return result


def settle_achievement(
    base_amount: Decimal | int | str,
    record: AchievementRecord,
    fee_rate: Decimal | int | float | str | None = None,
    *,
    tables: EconomicTables = DEFAULT_TABLES,
) -> PaymentSettlement:
    """Settle a deliverable directly from the oracle's KPI outcomes."""
    return settle(base_amount, overall_achievement_pct(record), fee_rate, tables=tables)


def release_from_escrow(
    escrow_balance: Decimal, settlement: PaymentSettlement
) -> EscrowRelease:
    """Compute the escrow balance after paying out a settlement.

    The full calculated payment leaves escrow: the creator's net amount plus
    the platform fee.

    Raises:
        ValidationError: If the escrow balance cannot cover the payment.
    """
    if escrow_balance < settlement.calculated_payment:
        raise ValidationError(
            "escrow_balance",
            escrow_balance,
            f"does not cover the calculated payment of {settlement.calculated_payment}",
        )
    return EscrowRelease(
        previous_balance=escrow_balance,
        released=settlement.calculated_payment,
        remaining_balance=escrow_balance - settlement.calculated_payment,
    )
