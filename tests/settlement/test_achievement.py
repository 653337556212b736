"""Tests for weighted KPI achievement."""

from decimal import Decimal

import pytest

from campaign_economics.domain.errors import ValidationError
from campaign_economics.domain.models import AchievementRecord, KpiAchievement
from campaign_economics.settlement.achievement import overall_achievement_pct


def _record(*metrics: tuple[str, str, str]) -> AchievementRecord:
    return AchievementRecord(
        metrics=tuple(
            KpiAchievement(target_value=t, actual_value=a, weight=w) for t, a, w in metrics
        )
    )


class TestOverallAchievementPct:
    @pytest.mark.parametrize(
        ("metrics", "expected"),
        [
            ((("1000", "1163", "1"),), "116.3"),
            ((("1000", "0", "1"),), "0"),
            ((("1000", "1200", "0.5"), ("100", "90", "0.5")), "105"),
            ((("10", "30", "0.25"), ("10", "5", "0.75")), "112.5"),
            ((("500", "5000", "1"),), "1000"),
        ],
        ids=["single_over", "nothing_delivered", "two_even", "two_weighted", "unbounded"],
    )
    def test_weighted_sum(self, metrics, expected):
        assert overall_achievement_pct(_record(*metrics)) == Decimal(expected)

    @pytest.mark.parametrize("target", ["0", "-10"], ids=["zero", "negative"])
    def test_rejects_non_positive_target(self, target):
        record = _record(("1000", "900", "0.5"), (target, "5", "0.5"))
        with pytest.raises(ValidationError) as exc_info:
            overall_achievement_pct(record)
        assert exc_info.value.field == "metrics[1].target_value"
