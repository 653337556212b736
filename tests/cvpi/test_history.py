"""Tests for CVPI history aggregates."""

from datetime import timedelta
from decimal import Decimal

import pytest

from campaign_economics.cvpi.history import running_average, scores_in_period, summarize_history
from campaign_economics.cvpi.scorer import CVPIScore
from campaign_economics.domain.types import HistoryPeriod


def _score_at(cvpi: str, calculated_at) -> CVPIScore:
    return CVPIScore(
        total_cost=Decimal("1000"),
        verified_impact_score=Decimal("1000") / Decimal(cvpi),
        cvpi=Decimal(cvpi),
        percentile_rank=Decimal("50"),
        calculated_at=calculated_at,
    )


class TestRunningAverage:
    def test_average_at_four_places(self, fixed_now):
        history = [_score_at(c, fixed_now) for c in ("0.30", "0.40", "0.35")]
        assert running_average(history) == Decimal("0.3500")

    def test_average_rounds_half_up(self, fixed_now):
        history = [_score_at(c, fixed_now) for c in ("0.1000", "0.1001")]
        assert running_average(history) == Decimal("0.1001")

    def test_empty_history(self):
        assert running_average([]) is None


class TestSummarizeHistory:
    def test_summary(self, fixed_now):
        history = [_score_at(c, fixed_now) for c in ("0.30", "0.40", "0.35")]
        summary = summarize_history(history)
        assert summary.average_cvpi == Decimal("0.3500")
        assert summary.best_cvpi == Decimal("0.30")
        assert summary.worst_cvpi == Decimal("0.40")
        assert summary.total_campaigns == 3

    def test_empty_summary(self):
        summary = summarize_history([])
        assert summary.average_cvpi is None
        assert summary.best_cvpi is None
        assert summary.worst_cvpi is None
        assert summary.total_campaigns == 0


class TestScoresInPeriod:
    @pytest.mark.parametrize(
        ("period", "expected_count"),
        [
            (HistoryPeriod.WEEK, 1),
            (HistoryPeriod.MONTH, 2),
            (HistoryPeriod.QUARTER, 2),
            (HistoryPeriod.YEAR, 3),
        ],
        ids=["7d", "30d", "90d", "1y"],
    )
    def test_window(self, fixed_now, period, expected_count):
        history = [
            _score_at("0.30", fixed_now - timedelta(days=1)),
            _score_at("0.40", fixed_now - timedelta(days=10)),
            _score_at("0.50", fixed_now - timedelta(days=100)),
        ]
        result = scores_in_period(history, period, now=fixed_now)
        assert len(result) == expected_count
        assert result == history[:expected_count]

    def test_default_period_is_thirty_days(self, fixed_now):
        history = [_score_at("0.30", fixed_now - timedelta(days=29))]
        assert scores_in_period(history, now=fixed_now) == history
