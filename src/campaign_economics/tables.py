"""Static rate, tier and breakpoint tables for every calculator.

Each table is an immutable pydantic model whose defaults are the platform's
published economic model. Deployments override any subset of them through a
YAML file (see ``config/economic_tables.yaml``); calculators take the tables
as an argument and default to ``DEFAULT_TABLES`` so they stay free of I/O.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

import structlog
import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, Field, field_validator, model_validator

from campaign_economics.config import get_settings
from campaign_economics.domain.types import (
    CreatorTier,
    DataSource,
    DistributionLayer,
    ReputationTier,
)

logger = structlog.get_logger()


def _d(value: str) -> Decimal:
    return Decimal(value)


# ---------------------------------------------------------------------------
# Fee estimation
# ---------------------------------------------------------------------------


class BudgetTier(BaseModel, frozen=True):
    """Base service-fee rate for budgets below ``upper_bound``.

    The last tier has no upper bound. Lower bounds are inclusive: a budget
    equal to a tier's ``upper_bound`` falls into the next tier.
    """

    upper_bound: Decimal | None
    rate: Decimal


class ComplexityMultipliers(BaseModel, frozen=True):
    """Fee multipliers keyed on declared complexity and team size."""

    simple: Decimal = _d("0.8")
    small_team: Decimal = _d("1.0")
    mid_team: Decimal = _d("1.2")
    complex: Decimal = _d("1.5")
    small_team_max: int = 5
    large_team_threshold: int = 20


class SpendBonus(BaseModel, frozen=True):
    """Loyalty bonus granted once cumulative spend reaches ``min_spend``."""

    min_spend: Decimal
    bonus: Decimal


class ReputationDiscountTable(BaseModel, frozen=True):
    """Spend-driven discount curve for paying projects."""

    spend_normalizer: Decimal = _d("100000")
    spend_weight: Decimal = _d("0.20")
    spend_cap: Decimal = _d("0.20")
    loyalty_bonuses: tuple[SpendBonus, ...] = (
        SpendBonus(min_spend=_d("100000"), bonus=_d("0.20")),
        SpendBonus(min_spend=_d("50000"), bonus=_d("0.10")),
        SpendBonus(min_spend=_d("10000"), bonus=_d("0.05")),
    )
    max_discount: Decimal = _d("0.40")

    @field_validator("loyalty_bonuses")
    @classmethod
    def bonuses_must_descend(cls, v: tuple[SpendBonus, ...]) -> tuple[SpendBonus, ...]:
        """Ensure bonus steps are listed from the highest spend down."""
        spends = [b.min_spend for b in v]
        if spends != sorted(spends, reverse=True):
            raise ValueError("loyalty_bonuses must be ordered by descending min_spend")
        return v


class TokenTable(BaseModel, frozen=True):
    """Discount and pricing for fees paid in the platform token."""

    discount_rate: Decimal = _d("0.20")
    token_price: Decimal = _d("0.20")
    creator_minimum_balance: Decimal = _d("1000")
    project_minimum_balance: Decimal = _d("5000")


class MetricCountFactor(BaseModel, frozen=True):
    """Oracle complexity factor for campaigns with up to ``max_metrics`` KPIs."""

    max_metrics: int
    factor: Decimal


class OracleTable(BaseModel, frozen=True):
    """Per-participant KPI verification costs."""

    base_cost: Decimal = _d("5.00")
    source_costs: dict[DataSource, Decimal] = Field(
        default_factory=lambda: {
            DataSource.TWITTER: _d("2.00"),
            DataSource.DISCORD: _d("1.50"),
            DataSource.TELEGRAM: _d("1.50"),
            DataSource.ONCHAIN: _d("3.00"),
            DataSource.MEDIA_PUBLICATION: _d("4.00"),
        }
    )
    default_source_cost: Decimal = _d("2.00")
    metric_count_factors: tuple[MetricCountFactor, ...] = (
        MetricCountFactor(max_metrics=1, factor=_d("1.0")),
        MetricCountFactor(max_metrics=3, factor=_d("1.3")),
    )
    overflow_factor: Decimal = _d("1.8")
    flat_fee_without_metrics: Decimal = _d("50.00")

    def cost_for(self, source: DataSource) -> Decimal:
        """Return the verification cost of one metric from ``source``."""
        return self.source_costs.get(source, self.default_source_cost)

    def factor_for(self, metric_count: int) -> Decimal:
        """Return the complexity factor for a campaign with ``metric_count`` KPIs."""
        for step in self.metric_count_factors:
            if metric_count <= step.max_metrics:
                return step.factor
        return self.overflow_factor


class FeeTable(BaseModel, frozen=True):
    """Everything the fee estimator needs."""

    budget_tiers: tuple[BudgetTier, ...] = (
        BudgetTier(upper_bound=_d("5000"), rate=_d("0.10")),
        BudgetTier(upper_bound=_d("20000"), rate=_d("0.08")),
        BudgetTier(upper_bound=_d("50000"), rate=_d("0.06")),
        BudgetTier(upper_bound=None, rate=_d("0.04")),
    )
    complexity: ComplexityMultipliers = ComplexityMultipliers()
    reputation_discount: ReputationDiscountTable = ReputationDiscountTable()
    token: TokenTable = TokenTable()
    oracle: OracleTable = OracleTable()
    escrow_buffer_rate: Decimal = _d("0.10")
    estimate_validity_minutes: int = 15

    @field_validator("budget_tiers")
    @classmethod
    def tiers_must_ascend_and_be_open_ended(
        cls, v: tuple[BudgetTier, ...]
    ) -> tuple[BudgetTier, ...]:
        """Ensure tiers are ascending with exactly one open-ended last tier."""
        if not v or v[-1].upper_bound is not None:
            raise ValueError("the last budget tier must have no upper_bound")
        bounds = [t.upper_bound for t in v[:-1]]
        if any(b is None for b in bounds):
            raise ValueError("only the last budget tier may omit upper_bound")
        if bounds != sorted(bounds) or len(set(bounds)) != len(bounds):  # type: ignore[type-var]
            raise ValueError("budget tier upper bounds must be strictly ascending")
        return v


# ---------------------------------------------------------------------------
# CVPI scoring
# ---------------------------------------------------------------------------


class PercentileBreakpoint(BaseModel, frozen=True):
    """CVPI scores at or below ``max_cvpi`` rank at ``percentile``."""

    max_cvpi: Decimal
    percentile: Decimal


class ConfidenceStep(BaseModel, frozen=True):
    """Projection confidence once a creator has ``min_campaigns`` scored."""

    min_campaigns: int
    confidence: Decimal


class MatchWeights(BaseModel, frozen=True):
    """Weights of the five recommendation factors; they must sum to 1."""

    historical_cvpi: Decimal = _d("0.35")
    audience: Decimal = _d("0.25")
    budget: Decimal = _d("0.20")
    category: Decimal = _d("0.15")
    reputation: Decimal = _d("0.05")

    @model_validator(mode="after")
    def weights_must_sum_to_one(self) -> MatchWeights:
        """Ensure the factor weights form a convex combination."""
        total = (
            self.historical_cvpi + self.audience + self.budget + self.category + self.reputation
        )
        if total != Decimal("1"):
            raise ValueError(f"match weights must sum to 1, got {total}")
        return self


class CVPITable(BaseModel, frozen=True):
    """Breakpoints and constants used by the CVPI scorer.

    The percentile and confidence lookups are coarse placeholders for real
    population distributions and are meant to be replaced here, not in code.
    """

    percentile_breakpoints: tuple[PercentileBreakpoint, ...] = (
        PercentileBreakpoint(max_cvpi=_d("0.30"), percentile=_d("90")),
        PercentileBreakpoint(max_cvpi=_d("0.45"), percentile=_d("70")),
        PercentileBreakpoint(max_cvpi=_d("0.60"), percentile=_d("50")),
    )
    fallback_percentile: Decimal = _d("30")
    platform_average_cvpi: Decimal = _d("0.52")
    projection_fee_rate: Decimal = _d("0.04")
    projection_oracle_fee: Decimal = _d("50.00")
    projection_optimism: Decimal = _d("0.95")
    confidence_steps: tuple[ConfidenceStep, ...] = (
        ConfidenceStep(min_campaigns=20, confidence=_d("0.95")),
        ConfidenceStep(min_campaigns=10, confidence=_d("0.85")),
        ConfidenceStep(min_campaigns=5, confidence=_d("0.75")),
    )
    fallback_confidence: Decimal = _d("0.65")
    match_weights: MatchWeights = MatchWeights()
    category_expertise_campaigns: int = 10

    @field_validator("percentile_breakpoints")
    @classmethod
    def breakpoints_must_ascend(
        cls, v: tuple[PercentileBreakpoint, ...]
    ) -> tuple[PercentileBreakpoint, ...]:
        """Ensure breakpoints are ordered from best (lowest) CVPI up."""
        cvpis = [b.max_cvpi for b in v]
        if cvpis != sorted(cvpis):
            raise ValueError("percentile_breakpoints must be ordered by ascending max_cvpi")
        return v


# ---------------------------------------------------------------------------
# Payment settlement
# ---------------------------------------------------------------------------


class SettlementTable(BaseModel, frozen=True):
    """Achievement cap, default fee rate and the platform revenue split."""

    default_fee_rate: Decimal = _d("0.04")
    max_achievement_multiplier: Decimal = _d("1.5")
    distribution: dict[DistributionLayer, Decimal] = Field(
        default_factory=lambda: {
            DistributionLayer.TREASURY: _d("0.50"),
            DistributionLayer.VALIDATOR_INCENTIVES: _d("0.20"),
            DistributionLayer.AI_ECOSYSTEM: _d("0.15"),
            DistributionLayer.DAO_TREASURY: _d("0.10"),
            DistributionLayer.BUYBACK_BURN: _d("0.05"),
        }
    )
    remainder_layer: DistributionLayer = DistributionLayer.TREASURY

    @model_validator(mode="after")
    def distribution_must_be_complete(self) -> SettlementTable:
        """Ensure the shares cover every layer and sum to 1, remainder on the largest."""
        missing = set(DistributionLayer) - set(self.distribution)
        if missing:
            raise ValueError(f"distribution is missing layers: {sorted(missing)}")
        total = sum(self.distribution.values(), Decimal("0"))
        if total != Decimal("1"):
            raise ValueError(f"distribution shares must sum to 1, got {total}")
        if self.distribution[self.remainder_layer] != max(self.distribution.values()):
            raise ValueError(
                f"remainder_layer {self.remainder_layer} must hold the largest share"
            )
        return self


# ---------------------------------------------------------------------------
# Reputation tiers
# ---------------------------------------------------------------------------


class CreatorTierBand(BaseModel, frozen=True):
    """A creator tier, its lower-bound score and the benefits it unlocks."""

    tier: CreatorTier
    min_score: Decimal
    fee_discount_rate: Decimal
    priority_applications: bool = False
    higher_payout_potential: bool = False
    exclusive_campaign_access: bool = False


class GenericTierBand(BaseModel, frozen=True):
    """A tier on the 0-100 admin reputation scale."""

    tier: ReputationTier
    min_score: Decimal


class PercentileStep(BaseModel, frozen=True):
    """Creators scoring at least ``min_score`` sit at ``percentile``."""

    min_score: Decimal
    percentile: Decimal


def _must_descend_to_zero(bands: tuple[CreatorTierBand, ...] | tuple[GenericTierBand, ...]) -> None:
    scores = [b.min_score for b in bands]
    if scores != sorted(scores, reverse=True) or len(set(scores)) != len(scores):
        raise ValueError("tier bands must be ordered by strictly descending min_score")
    if not scores or scores[-1] != Decimal("0"):
        raise ValueError("the lowest tier band must start at 0")


class ReputationTable(BaseModel, frozen=True):
    """Tier bands for both reputation scales plus adjustment rules."""

    creator_bands: tuple[CreatorTierBand, ...] = (
        CreatorTierBand(
            tier=CreatorTier.S,
            min_score=_d("900"),
            fee_discount_rate=_d("0.40"),
            priority_applications=True,
            higher_payout_potential=True,
            exclusive_campaign_access=True,
        ),
        CreatorTierBand(
            tier=CreatorTier.A,
            min_score=_d("800"),
            fee_discount_rate=_d("0.30"),
            priority_applications=True,
            higher_payout_potential=True,
            exclusive_campaign_access=True,
        ),
        CreatorTierBand(
            tier=CreatorTier.B,
            min_score=_d("700"),
            fee_discount_rate=_d("0.20"),
            priority_applications=True,
            higher_payout_potential=True,
        ),
        CreatorTierBand(tier=CreatorTier.C, min_score=_d("600"), fee_discount_rate=_d("0.10")),
        CreatorTierBand(tier=CreatorTier.NEWCOMER, min_score=_d("0"), fee_discount_rate=_d("0")),
    )
    creator_max_score: Decimal = _d("1000")
    generic_bands: tuple[GenericTierBand, ...] = (
        GenericTierBand(tier=ReputationTier.DIAMOND, min_score=_d("90")),
        GenericTierBand(tier=ReputationTier.PLATINUM, min_score=_d("75")),
        GenericTierBand(tier=ReputationTier.GOLD, min_score=_d("60")),
        GenericTierBand(tier=ReputationTier.SILVER, min_score=_d("40")),
        GenericTierBand(tier=ReputationTier.BRONZE, min_score=_d("20")),
        GenericTierBand(tier=ReputationTier.NEWCOMER, min_score=_d("0")),
    )
    generic_max_score: Decimal = _d("100")
    approval_threshold: Decimal = _d("20")
    points_per_campaign: Decimal = _d("15")
    percentile_steps: tuple[PercentileStep, ...] = (
        PercentileStep(min_score=_d("900"), percentile=_d("99")),
        PercentileStep(min_score=_d("800"), percentile=_d("95")),
        PercentileStep(min_score=_d("700"), percentile=_d("85")),
        PercentileStep(min_score=_d("600"), percentile=_d("70")),
    )
    fallback_percentile: Decimal = _d("50")
    breakdown_caps: dict[str, int] = Field(
        default_factory=lambda: {
            "campaign_completion": 200,
            "quality_score": 250,
            "cvpi_performance": 250,
            "client_satisfaction": 200,
            "community_engagement": 100,
        }
    )

    @field_validator("creator_bands")
    @classmethod
    def creator_bands_must_descend(
        cls, v: tuple[CreatorTierBand, ...]
    ) -> tuple[CreatorTierBand, ...]:
        """Ensure creator bands run from the top tier down to 0."""
        _must_descend_to_zero(v)
        return v

    @field_validator("generic_bands")
    @classmethod
    def generic_bands_must_descend(
        cls, v: tuple[GenericTierBand, ...]
    ) -> tuple[GenericTierBand, ...]:
        """Ensure generic bands run from the top tier down to 0."""
        _must_descend_to_zero(v)
        return v


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


class EconomicTables(BaseModel, frozen=True):
    """All configuration tables consumed by the engine."""

    fees: FeeTable = FeeTable()
    cvpi: CVPITable = CVPITable()
    settlement: SettlementTable = SettlementTable()
    reputation: ReputationTable = ReputationTable()


DEFAULT_TABLES = EconomicTables()


def load_tables(path: Path) -> EconomicTables:
    """Load and validate economic tables from a YAML file.

    Sections and keys absent from the file keep their defaults.

    Args:
        path: Path to the YAML override file.

    Returns:
        Validated tables. Falls back to ``DEFAULT_TABLES`` if the file is
        missing or empty.

    Raises:
        yaml.YAMLError: If the file is not valid YAML.
        pydantic.ValidationError: If the overrides break a table invariant.
    """
    if not path.exists():
        logger.info("economic_tables_defaults", path=str(path))
        return DEFAULT_TABLES

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError:
        logger.error("economic_tables_invalid_yaml", path=str(path))
        raise

    if raw is None:
        return DEFAULT_TABLES

    tables = EconomicTables.model_validate(raw)
    logger.info("economic_tables_loaded", path=str(path))
    return tables


@lru_cache
def get_tables() -> EconomicTables:
    """Return the tables for the configured ``economic_tables_path``, cached.

    Call ``get_tables.cache_clear()`` in tests to reset.
    """
    return load_tables(get_settings().economic_tables_path)
