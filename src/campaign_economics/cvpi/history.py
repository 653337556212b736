"""Aggregates over a creator's CVPI history."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

from campaign_economics.cvpi.scorer import CVPIScore
from campaign_economics.domain.models import calculation_time
from campaign_economics.domain.money import quantize_ratio
from campaign_economics.domain.types import HistoryPeriod

PERIOD_LENGTHS: dict[HistoryPeriod, timedelta] = {
    HistoryPeriod.WEEK: timedelta(days=7),
    HistoryPeriod.MONTH: timedelta(days=30),
    HistoryPeriod.QUARTER: timedelta(days=90),
    HistoryPeriod.YEAR: timedelta(days=365),
}


@dataclass(frozen=True)
class CVPIHistorySummary:
    """Summary of a run of CVPI scores.

    Attributes:
        average_cvpi: Mean CVPI at 4 decimal places, or None without scores.
        best_cvpi: Lowest (best) CVPI, or None without scores.
        worst_cvpi: Highest (worst) CVPI, or None without scores.
        total_campaigns: Number of scores summarized.
    """

    average_cvpi: Decimal | None
    best_cvpi: Decimal | None
    worst_cvpi: Decimal | None
    total_campaigns: int


def running_average(history: Sequence[CVPIScore]) -> Decimal | None:
    """Return a creator's average CVPI at 4 decimal places, or None."""
    if not history:
        return None
    total = sum((s.cvpi for s in history), Decimal("0"))
    return quantize_ratio(total / len(history))


def summarize_history(history: Sequence[CVPIScore]) -> CVPIHistorySummary:
    """Summarize a creator's CVPI scores."""
    if not history:
        return CVPIHistorySummary(None, None, None, 0)
    cvpis = [s.cvpi for s in history]
    return CVPIHistorySummary(
        average_cvpi=running_average(history),
        best_cvpi=min(cvpis),
        worst_cvpi=max(cvpis),
        total_campaigns=len(cvpis),
    )


def scores_in_period(
    history: Sequence[CVPIScore],
    period: HistoryPeriod = HistoryPeriod.MONTH,
    now: datetime | None = None,
) -> list[CVPIScore]:
    """Return the scores calculated within ``period`` before ``now``, order kept."""
    start = calculation_time(now) - PERIOD_LENGTHS[period]
    return [s for s in history if s.calculated_at >= start]
