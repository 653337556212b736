"""Manual reputation adjustments.

Adjustments larger than the approval threshold (20 points) must carry an
approval reference. The resulting score is clamped to the scale's range and
the tier recomputed from it.
"""

from __future__ import annotations

from decimal import Decimal

import structlog
from pydantic import BaseModel

from campaign_economics.domain.errors import ApprovalRequiredError
from campaign_economics.domain.money import to_decimal
from campaign_economics.domain.types import CreatorTier, ReputationTier
from campaign_economics.reputation.tiers import ReputationScale, max_score, tier_for
from campaign_economics.tables import DEFAULT_TABLES, EconomicTables

logger = structlog.get_logger()


class ReputationAdjustment(BaseModel, frozen=True):
    """Outcome of applying a score adjustment."""

    previous_score: Decimal
    delta: Decimal
    new_score: Decimal
    previous_tier: CreatorTier | ReputationTier
    new_tier: CreatorTier | ReputationTier
    approval_reference: str | None = None

    @property
    def tier_changed(self) -> bool:
        """True if the adjustment moved the score into another tier."""
        return self.previous_tier != self.new_tier


def clamp_score(
    score: Decimal,
    scale: ReputationScale = ReputationScale.CREATOR,
    *,
    tables: EconomicTables = DEFAULT_TABLES,
) -> Decimal:
    """Clamp a score into ``[0, max_score(scale)]``."""
    return max(Decimal("0"), min(score, max_score(scale, tables)))


def apply_adjustment(
    current_score: Decimal | int | str,
    delta: Decimal | int | str,
    approval_reference: str | None = None,
    *,
    scale: ReputationScale = ReputationScale.CREATOR,
    tables: EconomicTables = DEFAULT_TABLES,
) -> ReputationAdjustment:
    """Apply a manual adjustment to a reputation score.

    Args:
        current_score: The score before the adjustment.
        delta: Points to add (negative to deduct).
        approval_reference: Identifier of the approval authorising a large
            adjustment. Blank strings count as missing.
        scale: The scale the score is measured on.
        tables: Rate tables. Defaults to the published economic model.

    Returns:
        ReputationAdjustment with the clamped new score and both tiers.

    Raises:
        ApprovalRequiredError: If ``|delta|`` exceeds the approval threshold
            and no approval reference was supplied.
        ValidationError: If the score or delta is not numeric.
    """
    previous = to_decimal(current_score, "current_score")
    change = to_decimal(delta, "delta")
    threshold = tables.reputation.approval_threshold
    reference = approval_reference.strip() if approval_reference else None

    if abs(change) > threshold and not reference:
        logger.warning(
            "reputation_adjustment_requires_approval",
            delta=str(change),
            threshold=str(threshold),
        )
        raise ApprovalRequiredError(change, threshold)

    new_score = clamp_score(previous + change, scale, tables=tables)
    result = ReputationAdjustment(
        previous_score=previous,
        delta=change,
        new_score=new_score,
        previous_tier=tier_for(previous, scale, tables=tables),
        new_tier=tier_for(new_score, scale, tables=tables),
        approval_reference=reference,
    )
    logger.info(
        "reputation_adjusted",
        scale=scale,
        previous_score=str(previous),
        new_score=str(new_score),
        previous_tier=result.previous_tier,
        new_tier=result.new_tier,
    )
    return result
