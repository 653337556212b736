"""Tests for the five-layer platform fee split."""

import random
from decimal import Decimal

import pydantic
import pytest

from campaign_economics.domain.errors import ValidationError
from campaign_economics.domain.types import DistributionLayer
from campaign_economics.settlement.distribution import split_platform_fee
from campaign_economics.tables import SettlementTable


class TestSplitPlatformFee:
    """The layers always add back up to the platform fee."""

    def test_even_split(self):
        split = split_platform_fee(Decimal("100.00"))
        assert split == {
            DistributionLayer.TREASURY: Decimal("50.00"),
            DistributionLayer.VALIDATOR_INCENTIVES: Decimal("20.00"),
            DistributionLayer.AI_ECOSYSTEM: Decimal("15.00"),
            DistributionLayer.DAO_TREASURY: Decimal("10.00"),
            DistributionLayer.BUYBACK_BURN: Decimal("5.00"),
        }

    def test_rounding_excess_taken_from_treasury(self):
        """Independent rounding gives 0.12 for a 0.11 fee; treasury absorbs the cent."""
        split = split_platform_fee(Decimal("0.11"))
        assert split[DistributionLayer.TREASURY] == Decimal("0.05")
        assert split[DistributionLayer.VALIDATOR_INCENTIVES] == Decimal("0.02")
        assert split[DistributionLayer.AI_ECOSYSTEM] == Decimal("0.02")
        assert split[DistributionLayer.DAO_TREASURY] == Decimal("0.01")
        assert split[DistributionLayer.BUYBACK_BURN] == Decimal("0.01")
        assert sum(split.values()) == Decimal("0.11")

    @pytest.mark.parametrize("fee", ["0.00", "0.01", "0.02", "0.99", "232.60"])
    def test_small_fees(self, fee):
        split = split_platform_fee(Decimal(fee))
        assert sum(split.values()) == Decimal(fee)
        assert all(amount >= 0 for amount in split.values())

    def test_no_leakage_over_random_fees(self):
        rng = random.Random(20260301)
        for _ in range(10_000):
            fee = Decimal(rng.randint(0, 100_000_000)).scaleb(-2)
            split = split_platform_fee(fee)
            assert sum(split.values()) == fee, f"leak for platform_fee={fee}"
            assert all(amount >= 0 for amount in split.values())
            assert list(split) == list(DistributionLayer)

    def test_custom_remainder_layer(self):
        table = SettlementTable(
            distribution={
                DistributionLayer.TREASURY: Decimal("0.10"),
                DistributionLayer.VALIDATOR_INCENTIVES: Decimal("0.20"),
                DistributionLayer.AI_ECOSYSTEM: Decimal("0.15"),
                DistributionLayer.DAO_TREASURY: Decimal("0.50"),
                DistributionLayer.BUYBACK_BURN: Decimal("0.05"),
            },
            remainder_layer=DistributionLayer.DAO_TREASURY,
        )
        split = split_platform_fee(Decimal("0.11"), table)
        assert split[DistributionLayer.DAO_TREASURY] == Decimal("0.05")
        assert split[DistributionLayer.TREASURY] == Decimal("0.01")
        assert sum(split.values()) == Decimal("0.11")

    @pytest.mark.parametrize(
        "layer",
        [DistributionLayer.BUYBACK_BURN, DistributionLayer.VALIDATOR_INCENTIVES],
        ids=["smallest_share", "second_largest_share"],
    )
    def test_remainder_layer_must_hold_largest_share(self, layer):
        with pytest.raises(pydantic.ValidationError, match="must hold the largest share"):
            SettlementTable(remainder_layer=layer)

    @pytest.mark.parametrize("fee", ["-0.01", "1.005"], ids=["negative", "sub_cent"])
    def test_rejects_invalid_fee(self, fee):
        with pytest.raises(ValidationError):
            split_platform_fee(Decimal(fee))


class TestSettlementTableValidation:
    def test_shares_must_sum_to_one(self):
        shares = {layer: Decimal("0.1") for layer in DistributionLayer}
        with pytest.raises(ValueError, match="distribution shares must sum to 1"):
            SettlementTable(distribution=shares)

    def test_every_layer_needs_a_share(self):
        with pytest.raises(ValueError, match="distribution is missing layers"):
            SettlementTable(distribution={DistributionLayer.TREASURY: Decimal("1")})
