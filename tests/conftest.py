"""Shared pytest fixtures for the campaign economics test suite."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from campaign_economics.config import get_settings
from campaign_economics.domain.models import CampaignBudgetInput, KpiMetric, PartyEconomicProfile
from campaign_economics.domain.types import ComplexityTag
from campaign_economics.tables import get_tables


@pytest.fixture(autouse=True)
def _clear_cached_config() -> None:
    """Clear the settings and tables lru_caches before each test."""
    get_settings.cache_clear()
    get_tables.cache_clear()


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed UTC calculation time."""
    return datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def simple_budget_input() -> CampaignBudgetInput:
    """A single-creator SIMPLE campaign with no KPI metrics."""
    return CampaignBudgetInput(
        budget_amount=Decimal("4000"),
        number_of_participants=1,
        complexity=ComplexityTag.SIMPLE,
    )


@pytest.fixture
def team_budget_input() -> CampaignBudgetInput:
    """A mid-size STANDARD campaign verified on Twitter and on-chain."""
    return CampaignBudgetInput(
        budget_amount=Decimal("25000"),
        number_of_participants=8,
        kpi_metrics=(KpiMetric(source="twitter"), KpiMetric(source="onchain")),
    )


@pytest.fixture
def new_payer() -> PartyEconomicProfile:
    """A paying project with no platform history."""
    return PartyEconomicProfile()


@pytest.fixture
def loyal_payer() -> PartyEconomicProfile:
    """A paying project at the top of the discount curve."""
    return PartyEconomicProfile(
        cumulative_spend=Decimal("150000"), reputation_score=Decimal("820")
    )
