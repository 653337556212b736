"""Tests for campaign recommendations and CVPI projections."""

from decimal import Decimal

import pytest

from campaign_economics.cvpi.recommendations import (
    CampaignOpportunity,
    CreatorPerformance,
    budget_fit,
    projection,
    projection_confidence,
    rank_recommendations,
    recommendation_match_score,
)
from campaign_economics.domain.errors import DivisionByZeroError, ValidationError
from campaign_economics.tables import DEFAULT_TABLES, CVPITable, EconomicTables, MatchWeights


@pytest.fixture
def defi_creator() -> CreatorPerformance:
    """An established DeFi creator beating the platform average."""
    return CreatorPerformance(
        average_cvpi=Decimal("0.40"),
        reputation_score=Decimal("750"),
        completed_campaigns=12,
        campaigns_by_category={"DeFi": 5, "NFT": 1},
        optimal_budget_min=Decimal("5000"),
        optimal_budget_max=Decimal("20000"),
    )


@pytest.fixture
def defi_campaign() -> CampaignOpportunity:
    return CampaignOpportunity(
        campaign_id="camp-defi",
        category="DeFi",
        budget=Decimal("10000"),
        audience_match=Decimal("0.8"),
        required_reputation=Decimal("700"),
    )


class TestRecommendationMatchScore:
    """Weighted five-factor match score."""

    def test_strong_match(self, defi_campaign, defi_creator):
        match = recommendation_match_score(defi_campaign, defi_creator)

        assert match.factors.historical_cvpi == Decimal("1")
        assert match.factors.audience == Decimal("0.8")
        assert match.factors.budget == Decimal("1")
        assert match.factors.category == Decimal("0.5")
        assert match.factors.reputation == Decimal("1")
        assert match.match_score == Decimal("0.8750")
        assert match.estimated_cvpi == Decimal("0.3800")
        assert match.projected_impact == Decimal("26316")
        assert match.match_reasons == (
            "Historical success in DeFi category",
            "Budget range aligns with your optimal performance",
            "Strong audience overlap with campaign target",
            "Projected CVPI: 0.38",
        )

    def test_unknown_factors_score_neutral(self):
        campaign = CampaignOpportunity(campaign_id="camp-nft", category="NFT", budget="8000")
        match = recommendation_match_score(campaign, CreatorPerformance())

        assert match.factors.historical_cvpi == Decimal("0.5")
        assert match.factors.audience == Decimal("0.5")
        assert match.factors.budget == Decimal("0.5")
        assert match.factors.category == Decimal("0")
        assert match.factors.reputation == Decimal("1")
        assert match.match_score == Decimal("0.4500")
        assert match.estimated_cvpi == Decimal("0.4940")

    def test_reputation_shortfall_reason(self, defi_creator):
        campaign = CampaignOpportunity(
            campaign_id="camp-gated",
            category="DeFi",
            budget="10000",
            required_reputation="900",
        )
        match = recommendation_match_score(campaign, defi_creator)
        assert match.factors.reputation == Decimal("750") / Decimal("900")
        assert "Reputation below the campaign's requirement" in match.match_reasons

    def test_score_is_within_unit_interval(self, defi_creator):
        campaign = CampaignOpportunity(
            campaign_id="camp-x", category="DeFi", budget="1", audience_match="7"
        )
        match = recommendation_match_score(campaign, defi_creator)
        assert Decimal("0") <= match.match_score <= Decimal("1")
        assert match.factors.audience == Decimal("1")

    def test_deterministic(self, defi_campaign, defi_creator):
        first = recommendation_match_score(defi_campaign, defi_creator)
        second = recommendation_match_score(defi_campaign, defi_creator)
        assert first == second

    def test_rejects_float_budget(self):
        with pytest.raises(ValueError, match="not float"):
            CampaignOpportunity(campaign_id="c", category="DeFi", budget=100.0)

    def test_weights_must_sum_to_one(self):
        with pytest.raises(ValueError, match="match weights must sum to 1"):
            MatchWeights(reputation=Decimal("0.10"))


class TestBudgetFit:
    @pytest.mark.parametrize(
        ("budget", "low", "high", "expected"),
        [
            ("10000", "5000", "20000", "1"),
            ("2500", "5000", "20000", "0.5"),
            ("40000", "5000", "20000", "0.5"),
            ("100", None, "200", "1"),
            ("100", None, None, "0.5"),
        ],
        ids=["inside", "below_min", "above_max", "only_max", "unknown"],
    )
    def test_fit(self, budget, low, high, expected):
        low_d = Decimal(low) if low else None
        high_d = Decimal(high) if high else None
        assert budget_fit(Decimal(budget), low_d, high_d) == Decimal(expected)


class TestRankRecommendations:
    """Best match first; ties keep input order."""

    def test_ranking_and_ties(self, defi_campaign, defi_creator):
        weak = CampaignOpportunity(
            campaign_id="camp-weak",
            category="Gaming",
            budget="50000",
            audience_match="0.2",
        )
        twin = defi_campaign.model_copy(update={"campaign_id": "camp-defi-2"})

        ranked = rank_recommendations([defi_campaign, weak, twin], defi_creator)

        assert [m.campaign_id for m in ranked] == ["camp-defi", "camp-defi-2", "camp-weak"]
        assert ranked[2].match_score == Decimal("0.5300")

    def test_limit(self, defi_campaign, defi_creator):
        ranked = rank_recommendations([defi_campaign] * 5, defi_creator, limit=2)
        assert len(ranked) == 2

    def test_empty(self, defi_creator):
        assert rank_recommendations([], defi_creator) == []


class TestProjectionConfidence:
    @pytest.mark.parametrize(
        ("campaigns", "expected"),
        [(0, "0.65"), (4, "0.65"), (5, "0.75"), (9, "0.75"), (10, "0.85"), (20, "0.95")],
    )
    def test_steps(self, campaigns, expected):
        assert projection_confidence(campaigns, DEFAULT_TABLES.cvpi) == Decimal(expected)


class TestProjection:
    """Projected cost and CVPI for a prospective campaign."""

    def test_projection_for_established_creator(self):
        result = projection(Decimal("10000"), 5, Decimal("0.40"), 12)

        assert result.base_payment == Decimal("2000.00")
        assert result.platform_fee == Decimal("80.00")
        assert result.oracle_fee == Decimal("50.00")
        assert result.estimated_cost == Decimal("2130.00")
        assert result.projected_impact == Decimal("5325.00")
        assert result.projected_cvpi == Decimal("0.3800")
        assert result.confidence == Decimal("0.85")
        assert result.platform_average_cvpi == Decimal("0.52")
        assert result.percentage_better == Decimal("26.92")

    def test_new_creator_projected_at_platform_average(self):
        result = projection(Decimal("10000"), 5, None)
        assert result.projected_cvpi == Decimal("0.4940")
        assert result.confidence == Decimal("0.65")
        assert result.percentage_better == Decimal("5")

    def test_zero_average_raises_division_by_zero(self):
        with pytest.raises(DivisionByZeroError):
            projection(Decimal("10000"), 5, Decimal("0"))

    @pytest.mark.parametrize(
        ("budget", "participants", "average"),
        [("0", 5, "0.4"), ("1000", 0, "0.4"), ("1000", 5, "-0.4")],
        ids=["zero_budget", "no_participants", "negative_average"],
    )
    def test_invalid_inputs(self, budget, participants, average):
        with pytest.raises(ValidationError):
            projection(Decimal(budget), participants, Decimal(average))

    def test_uses_injected_tables(self):
        tables = EconomicTables(cvpi=CVPITable(projection_optimism=Decimal("1")))
        result = projection(Decimal("10000"), 5, Decimal("0.40"), tables=tables)
        assert result.projected_cvpi == Decimal("0.4000")
