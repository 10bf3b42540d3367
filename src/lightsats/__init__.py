"""Lightsats — Bitcoin Lightning tips and gift cards.

Fee, tip-limiting and conversion helpers plus a BTCPay funding layer.
"""

__version__ = "0.1.0"

from lightsats.config import LightsatsConfig
from lightsats.constants import SATS_PER_BTC, TipStatus
from lightsats.fees import calculate_fee, fee_breakdown
from lightsats.tips import Tip, TipGroup, limit_tips, total_amount, has_tip_expired, is_old_tip, is_tip_group_active
from lightsats.currency import get_sats_amount, get_fiat_amount, round_fiat, format_amount
from lightsats.btcpay_client import BTCPayClient, BTCPayError, BTCPayAuthError

__all__ = [
    "LightsatsConfig",
    "SATS_PER_BTC",
    "TipStatus",
    "calculate_fee",
    "fee_breakdown",
    "Tip",
    "TipGroup",
    "limit_tips",
    "total_amount",
    "has_tip_expired",
    "is_old_tip",
    "is_tip_group_active",
    "get_sats_amount",
    "get_fiat_amount",
    "round_fiat",
    "format_amount",
    "BTCPayClient",
    "BTCPayError",
    "BTCPayAuthError",
]
