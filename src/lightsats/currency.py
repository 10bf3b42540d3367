"""Sats <-> fiat conversion and amount display helpers."""

from __future__ import annotations

from decimal import ROUND_CEILING, Decimal

from lightsats.constants import SATS_PER_BTC

_AMOUNT_SUFFIXES = ("", " k", " M", " G")


def get_sats_amount(fiat: float, exchange_rate: float) -> int:
    """Sats needed to cover ``fiat`` at ``exchange_rate`` (fiat per BTC), rounded up.

    Raises ValueError on a non-positive exchange rate.
    """
    if exchange_rate <= 0:
        raise ValueError(f"exchange_rate must be positive, got {exchange_rate}")
    sats = Decimal(str(fiat)) / Decimal(str(exchange_rate)) * SATS_PER_BTC
    return int(sats.to_integral_value(rounding=ROUND_CEILING))


def get_fiat_amount(sats: int, exchange_rate: float) -> float:
    return exchange_rate * (sats / SATS_PER_BTC)


def round_fiat(fiat: float) -> str:
    return f"{fiat:.2f}"


def format_amount(amount: float, decimals: int = 2) -> str:
    """Compact display: ``950`` -> ``"950"``, ``21_000`` -> ``"21.00 k"``."""
    scale = 0
    while amount >= 1000 and scale < len(_AMOUNT_SUFFIXES) - 1:
        amount /= 1000
        scale += 1
    places = decimals if scale > 0 else 0
    return f"{amount:.{places}f}{_AMOUNT_SUFFIXES[scale]}"
