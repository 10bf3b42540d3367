"""Lightsats configuration — plain frozen dataclass, no pydantic.

The host application constructs this from its own settings (env vars,
pydantic-settings, etc.) and passes it to the fee, tip and BTCPay helpers.
"""

from dataclasses import dataclass

from lightsats.constants import (
    FEE_PERCENT,
    MAX_TIP_SATS,
    MAX_TIPS_WITHDRAWABLE,
    MINIMUM_FEE_SATS,
)


@dataclass(frozen=True)
class LightsatsConfig:
    minimum_fee_sats: int = MINIMUM_FEE_SATS
    fee_percent: float = FEE_PERCENT
    max_tip_sats: int = MAX_TIP_SATS
    max_tips_withdrawable: int = MAX_TIPS_WITHDRAWABLE
    app_url: str | None = None
    btcpay_host: str | None = None
    btcpay_store_id: str | None = None
    btcpay_api_key: str | None = None
    default_currency: str = "USD"
