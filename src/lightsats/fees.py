"""Funding fee calculation.

Fees are always rounded UP to the next whole sat so the reserve kept for
Lightning routing is never short. Arithmetic runs in ``Decimal`` to keep
float percentages (``0.01 * 700``) from adding a phantom sat.
"""

from __future__ import annotations

from decimal import ROUND_CEILING, Decimal

from lightsats.config import LightsatsConfig


def _percent_of(amount: int, fee_percent: float) -> int:
    """Ceiling of ``amount * fee_percent / 100`` in whole sats."""
    share = Decimal(amount) * Decimal(str(fee_percent)) / 100
    return int(share.to_integral_value(rounding=ROUND_CEILING))


def calculate_fee(amount: int, config: LightsatsConfig) -> int:
    """Return the fee (sats) to collect on top of a tip of ``amount`` sats.

    The percentage applies to ``amount + fee``, not just ``amount``: the fee
    travels with the tip, so ``amount`` must stay withdrawable while still
    leaving ``fee_percent`` of the whole in reserve. A first estimate is taken
    on the bare amount, then the fee is recomputed against the inflated total
    until it stops growing (one pass is almost always enough).

    Where a single recompute still leaves the reserve short, the result is
    above a plain two-pass estimate: 10,000 sats at 1% costs 102,
    not 101, because 101 sats is less than 1% of 10,101.

    Raises ValueError on negative amounts or a percent outside [0, 100).
    """
    if amount < 0:
        raise ValueError(f"amount must be non-negative, got {amount}")
    if not 0 <= config.fee_percent < 100:
        raise ValueError(f"fee_percent must be in [0, 100), got {config.fee_percent}")

    minimum = config.minimum_fee_sats
    fee = max(minimum, _percent_of(amount, config.fee_percent))
    while True:
        next_fee = max(minimum, _percent_of(amount + fee, config.fee_percent))
        if next_fee <= fee:
            return fee
        fee = next_fee


def fee_breakdown(amount: int, config: LightsatsConfig) -> dict[str, int]:
    """Amount, fee and total (amount + fee) for funding a tip."""
    fee = calculate_fee(amount, config)
    return {
        "amount_sats": amount,
        "fee_sats": fee,
        "total_sats": amount + fee,
    }
