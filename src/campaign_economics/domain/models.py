"""Pydantic v2 input records consumed by the calculators.

Records are frozen and use Decimal for every monetary value; float inputs
are rejected. Range checks that are part of a calculator's own contract (such
as a positive budget) are left to that calculator so it can raise the domain
``ValidationError``.
"""

from datetime import UTC, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_validator

from campaign_economics.domain.errors import ValidationError
from campaign_economics.domain.types import ComplexityTag, DataSource


def _reject_float(v: object) -> object:
    if isinstance(v, float):
        raise ValueError("Use Decimal or string, not float, for monetary values")
    return v


class KpiMetric(BaseModel):
    """A KPI the oracle must verify for each participant.

    Unknown source names are accepted and priced as ``DataSource.OTHER``.
    """

    model_config = ConfigDict(frozen=True)

    source: DataSource
    weight: Decimal = Decimal("1")

    @field_validator("source", mode="before")
    @classmethod
    def normalize_source(cls, v: object) -> object:
        """Map source names case-insensitively, falling back to OTHER."""
        if isinstance(v, DataSource):
            return v
        if isinstance(v, str):
            try:
                return DataSource(v.strip().lower())
            except ValueError:
                return DataSource.OTHER
        return v

    @field_validator("weight", mode="before")
    @classmethod
    def reject_float_weight(cls, v: object) -> object:
        """Reject float weights to keep KPI weighting exact."""
        return _reject_float(v)


class CampaignBudgetInput(BaseModel):
    """A proposed campaign, as submitted for a fee estimate."""

    model_config = ConfigDict(frozen=True)

    budget_amount: Decimal
    number_of_participants: int
    complexity: ComplexityTag = ComplexityTag.STANDARD
    kpi_metrics: tuple[KpiMetric, ...] = ()
    pay_with_platform_token: bool = False

    @field_validator("budget_amount", mode="before")
    @classmethod
    def reject_float_budget(cls, v: object) -> object:
        """Reject float inputs for budget to prevent precision errors."""
        return _reject_float(v)


class PartyEconomicProfile(BaseModel):
    """Spend and reputation history of the paying project."""

    model_config = ConfigDict(frozen=True)

    cumulative_spend: Decimal = Decimal("0")
    reputation_score: Decimal = Decimal("0")

    @field_validator("cumulative_spend", "reputation_score", mode="before")
    @classmethod
    def reject_float_inputs(cls, v: object) -> object:
        """Reject float inputs for monetary fields to prevent precision errors."""
        return _reject_float(v)

    @field_validator("cumulative_spend")
    @classmethod
    def spend_must_not_be_negative(cls, v: Decimal) -> Decimal:
        """Ensure cumulative spend is zero or more."""
        if v < 0:
            raise ValueError("cumulative_spend must not be negative")
        return v

    @field_validator("reputation_score")
    @classmethod
    def score_must_be_in_range(cls, v: Decimal) -> Decimal:
        """Ensure the reputation score lies on the 0-1000 scale."""
        if not Decimal("0") <= v <= Decimal("1000"):
            raise ValueError("reputation_score must be between 0 and 1000")
        return v


class KpiAchievement(BaseModel):
    """Verified outcome of one KPI metric, as reported by the oracle."""

    model_config = ConfigDict(frozen=True)

    target_value: Decimal
    actual_value: Decimal
    weight: Decimal = Decimal("1")

    @field_validator("target_value", "actual_value", "weight", mode="before")
    @classmethod
    def reject_float_inputs(cls, v: object) -> object:
        """Reject float inputs so achievement percentages stay exact."""
        return _reject_float(v)

    @field_validator("weight")
    @classmethod
    def weight_must_not_be_negative(cls, v: Decimal) -> Decimal:
        """Ensure the metric weight is zero or more."""
        if v < 0:
            raise ValueError("weight must not be negative")
        return v


class AchievementRecord(BaseModel):
    """All verified KPI outcomes for one deliverable."""

    model_config = ConfigDict(frozen=True)

    metrics: tuple[KpiAchievement, ...]

    @field_validator("metrics")
    @classmethod
    def metrics_must_not_be_empty(
        cls, v: tuple[KpiAchievement, ...]
    ) -> tuple[KpiAchievement, ...]:
        """Ensure at least one KPI outcome is provided."""
        if len(v) == 0:
            raise ValueError("metrics must not be empty")
        return v


def calculation_time(now: datetime | None) -> datetime:
    """Return ``now``, or the current UTC time when it is None.

    Raises:
        ValidationError: If ``now`` is naive. Validity windows are compared
            against aware UTC times, so a naive timestamp cannot be ordered.
    """
    if now is None:
        return datetime.now(UTC)
    if now.tzinfo is None or now.utcoffset() is None:
        raise ValidationError("now", now, "must be timezone-aware")
    return now
