"""CVPI (Cost-Value-Performance-Index) scoring for completed deliverables.

CVPI = total campaign cost / verified impact score, rounded to 4 decimal
places with ROUND_HALF_UP. Lower is better: a lower CVPI means each unit of
verified impact cost less.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal

import structlog
from pydantic import BaseModel

from campaign_economics.domain.errors import DivisionByZeroError, ValidationError
from campaign_economics.domain.models import calculation_time
from campaign_economics.domain.money import quantize_ratio, to_decimal
from campaign_economics.domain.types import CVPITrend
from campaign_economics.tables import DEFAULT_TABLES, CVPITable, EconomicTables

logger = structlog.get_logger()


class CVPIScore(BaseModel, frozen=True):
    """CVPI of one completed deliverable.

    Attributes:
        total_cost: Budget plus service and oracle fees spent on the deliverable.
        verified_impact_score: Impact verified by the KPI oracle.
        cvpi: ``total_cost / verified_impact_score`` at 4 decimal places.
        percentile_rank: Approximate rank from the breakpoint table (0-100).
        trend: Direction against the creator's previous score.
        calculated_at: When the score was calculated.
    """

    total_cost: Decimal
    verified_impact_score: Decimal
    cvpi: Decimal
    percentile_rank: Decimal
    trend: CVPITrend = CVPITrend.STABLE
    calculated_at: datetime


def calculate_cvpi(total_cost: Decimal, verified_impact_score: Decimal) -> Decimal:
    """Return ``total_cost / verified_impact_score`` at 4 decimal places.

    Raises:
        DivisionByZeroError: If the impact score is zero.
        ValidationError: If the impact score or cost is negative.
    """
    if verified_impact_score == 0:
        raise DivisionByZeroError("verified_impact_score")
    if verified_impact_score < 0:
        raise ValidationError("verified_impact_score", verified_impact_score, "must be positive")
    if total_cost < 0:
        raise ValidationError("total_cost", total_cost, "must not be negative")
    return quantize_ratio(total_cost / verified_impact_score)


def percentile_rank(cvpi: Decimal, table: CVPITable = DEFAULT_TABLES.cvpi) -> Decimal:
    """Return the approximate percentile rank of a CVPI score.

    This is a coarse bucket lookup against ``table.percentile_breakpoints``,
    not an empirical percentile over the creator population.
    """
    for step in table.percentile_breakpoints:
        if cvpi <= step.max_cvpi:
            return step.percentile
    return table.fallback_percentile


def _trend_of(cvpis: Sequence[Decimal]) -> CVPITrend:
    if len(cvpis) < 2:
        return CVPITrend.STABLE
    recent, previous = cvpis[0], cvpis[1]
    if recent < previous:
        return CVPITrend.IMPROVING
    if recent > previous:
        return CVPITrend.DECLINING
    return CVPITrend.STABLE


def trend(history: Sequence[CVPIScore]) -> CVPITrend:
    """Classify the direction of a creator's CVPI.

    Args:
        history: Scores ordered most recent first.

    Returns:
        IMPROVING if the latest CVPI is lower than the one before it,
        DECLINING if higher, STABLE if equal or fewer than two scores exist.
    """
    return _trend_of([s.cvpi for s in history])


def score(
    total_cost: Decimal | int | str,
    verified_impact_score: Decimal | int | str,
    history: Sequence[CVPIScore] = (),
    *,
    tables: EconomicTables = DEFAULT_TABLES,
    now: datetime | None = None,
) -> CVPIScore:
    """Score a completed deliverable.

    Args:
        total_cost: Total campaign cost attributed to the deliverable.
        verified_impact_score: Impact verified by the KPI oracle.
        history: The creator's previous scores, most recent first. The new
            score's trend compares it against ``history[0]``.
        tables: Rate tables. Defaults to the published economic model.
        now: Calculation time. Defaults to the current UTC time.

    Returns:
        An immutable CVPIScore.

    Raises:
        DivisionByZeroError: If the impact score is zero.
        ValidationError: If an input is non-numeric or negative, or ``now``
            is a naive datetime.
    """
    cost = to_decimal(total_cost, "total_cost")
    impact = to_decimal(verified_impact_score, "verified_impact_score")
    cvpi = calculate_cvpi(cost, impact)

    result = CVPIScore(
        total_cost=cost,
        verified_impact_score=impact,
        cvpi=cvpi,
        percentile_rank=percentile_rank(cvpi, tables.cvpi),
        trend=_trend_of([cvpi, *(s.cvpi for s in history)]),
        calculated_at=calculation_time(now),
    )
    logger.debug(
        "cvpi_scored",
        cvpi=str(cvpi),
        percentile_rank=str(result.percentile_rank),
        trend=result.trend,
    )
    return result
