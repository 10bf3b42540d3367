"""Tests for LightsatsConfig defaults."""

import dataclasses

import pytest

from lightsats.config import LightsatsConfig
from lightsats.constants import FEE_PERCENT, MAX_TIP_SATS, MAX_TIPS_WITHDRAWABLE, MINIMUM_FEE_SATS


class TestLightsatsConfig:
    def test_defaults_match_constants(self) -> None:
        config = LightsatsConfig()
        assert config.minimum_fee_sats == MINIMUM_FEE_SATS
        assert config.fee_percent == FEE_PERCENT
        assert config.max_tip_sats == MAX_TIP_SATS
        assert config.max_tips_withdrawable == MAX_TIPS_WITHDRAWABLE
        assert config.app_url is None
        assert config.default_currency == "USD"

    def test_frozen(self) -> None:
        config = LightsatsConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.fee_percent = 5  # type: ignore[misc]
