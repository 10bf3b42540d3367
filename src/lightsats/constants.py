"""Constants for Lightsats tip funding and withdrawal."""

from enum import Enum


SATS_PER_BTC = 100_000_000

MINIMUM_FEE_SATS = 10  # floor for any funding fee
FEE_PERCENT = 1  # routing reserve kept on top of every tip
MAX_TIP_SATS = 100_000  # aggregate cap per withdrawal
MAX_TIPS_WITHDRAWABLE = 50  # count cap per withdrawal


class TipStatus(str, Enum):
    """Lifecycle states of a tip."""

    UNFUNDED = "UNFUNDED"
    UNSEEN = "UNSEEN"
    SEEN = "SEEN"
    CLAIMED = "CLAIMED"
    WITHDRAWING = "WITHDRAWING"
    WITHDRAWN = "WITHDRAWN"
    REFUNDED = "REFUNDED"
    RECLAIMED = "RECLAIMED"


# Funded but not yet claimed: can lapse past their expiry.
EXPIRABLE_TIP_STATUSES: frozenset[TipStatus] = frozenset({TipStatus.UNSEEN, TipStatus.SEEN})

# The tipper may still take these back.
REFUNDABLE_TIP_STATUSES: frozenset[TipStatus] = frozenset({TipStatus.UNSEEN, TipStatus.SEEN})

WITHDRAWABLE_TIP_STATUSES: frozenset[TipStatus] = frozenset({TipStatus.CLAIMED})


class PageRoutes:
    TIPS = "/tips"
    USERS = "/users"
    REDEEM = "/tip"
