"""Oracle verification fee for a campaign's KPI metrics."""

from dataclasses import dataclass
from decimal import Decimal

from campaign_economics.domain.models import KpiMetric
from campaign_economics.domain.money import quantize_money
from campaign_economics.tables import OracleTable


@dataclass(frozen=True)
class OracleFeeBreakdown:
    """Components of an oracle fee, for display next to an estimate.

    Attributes:
        base_cost: Fixed verification cost per participant.
        data_source_cost: Sum of per-source costs per participant.
        metric_factor: Complexity factor for the number of KPI metrics.
        per_participant_fee: ``(base_cost + data_source_cost) * metric_factor``.
        participants: Number of participants verified.
        total: The oracle fee charged, rounded to cents.
        flat_fee_applied: True when no metrics were supplied.
    """

    base_cost: Decimal
    data_source_cost: Decimal
    metric_factor: Decimal
    per_participant_fee: Decimal
    participants: int
    total: Decimal
    flat_fee_applied: bool = False


def oracle_fee_breakdown(
    kpi_metrics: tuple[KpiMetric, ...],
    number_of_participants: int,
    table: OracleTable,
) -> OracleFeeBreakdown:
    """Break down the oracle verification fee for a campaign.

    Without metrics the campaign is charged ``table.flat_fee_without_metrics``
    regardless of participant count.

    Args:
        kpi_metrics: The KPI metrics the oracle must verify.
        number_of_participants: Number of creators whose KPIs are verified.
        table: Oracle cost table.

    Returns:
        OracleFeeBreakdown with the per-participant components and total.
    """
    if not kpi_metrics:
        flat = table.flat_fee_without_metrics
        return OracleFeeBreakdown(
            base_cost=flat,
            data_source_cost=Decimal("0"),
            metric_factor=Decimal("1"),
            per_participant_fee=flat,
            participants=number_of_participants,
            total=quantize_money(flat),
            flat_fee_applied=True,
        )

    data_source_cost = sum(
        (table.cost_for(metric.source) for metric in kpi_metrics), Decimal("0")
    )
    factor = table.factor_for(len(kpi_metrics))
    per_participant = (table.base_cost + data_source_cost) * factor
    return OracleFeeBreakdown(
        base_cost=table.base_cost,
        data_source_cost=data_source_cost,
        metric_factor=factor,
        per_participant_fee=per_participant,
        participants=number_of_participants,
        total=quantize_money(per_participant * number_of_participants),
    )


def calculate_oracle_fee(
    kpi_metrics: tuple[KpiMetric, ...],
    number_of_participants: int,
    table: OracleTable,
) -> Decimal:
    """Return the oracle verification fee, rounded to cents."""
    return oracle_fee_breakdown(kpi_metrics, number_of_participants, table).total
