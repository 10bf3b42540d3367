"""Tip records and the withdrawal limiter.

Pure data model — no I/O. All amounts are integer satoshis.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol, TypeVar

from lightsats.config import LightsatsConfig
from lightsats.constants import (
    EXPIRABLE_TIP_STATUSES,
    REFUNDABLE_TIP_STATUSES,
    TipStatus,
)

logger = logging.getLogger(__name__)


class HasAmount(Protocol):
    """Anything carrying an ``amount`` in sats can be limited."""

    @property
    def amount(self) -> int: ...


T = TypeVar("T", bound=HasAmount)


# ---------------------------------------------------------------------------
# Tip
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Tip:
    """A funded (or pending) gift of ``amount`` sats."""

    id: str
    amount: int
    status: TipStatus = TipStatus.UNFUNDED
    expiry: datetime | None = None
    tippee_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "amount": self.amount,
            "status": self.status.value,
            "expiry": self.expiry.isoformat() if self.expiry else None,
            "tippee_id": self.tippee_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Tip:
        raw_expiry = data.get("expiry")
        return cls(
            id=str(data.get("id", "")),
            amount=int(data.get("amount", 0)),
            status=TipStatus(data.get("status", TipStatus.UNFUNDED.value)),
            expiry=datetime.fromisoformat(raw_expiry) if raw_expiry else None,
            tippee_id=data.get("tippee_id"),
        )


@dataclass
class TipGroup:
    """A batch of tips created together (bulk gift cards)."""

    id: str
    tips: list[Tip] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Expiry / activity
# ---------------------------------------------------------------------------


def _as_utc(moment: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def is_old_tip(tip: Tip, now: datetime | None = None) -> bool:
    """True once the tip's expiry lies in the past. Tips without expiry never age."""
    if tip.expiry is None:
        return False
    if now is None:
        now = datetime.now(timezone.utc)
    return _as_utc(now) > _as_utc(tip.expiry)


def has_tip_expired(tip: Tip, now: datetime | None = None) -> bool:
    return tip.status in EXPIRABLE_TIP_STATUSES and is_old_tip(tip, now)


def is_tip_group_active(group: TipGroup) -> bool:
    """A group stays active while any of its tips can still be refunded."""
    return any(tip.status in REFUNDABLE_TIP_STATUSES for tip in group.tips)


def total_amount(tips: Iterable[HasAmount]) -> int:
    return sum(tip.amount for tip in tips)


# ---------------------------------------------------------------------------
# Limiter
# ---------------------------------------------------------------------------


def limit_tips(tips: Sequence[T], config: LightsatsConfig) -> list[T]:
    """Pick the tips to pay out in one withdrawal.

    Largest tips go first, at most ``max_tips_withdrawable`` of them; the
    smallest picked tips are then dropped until the total fits under
    ``max_tip_sats``. Equal amounts keep their input order. An empty result
    is valid (e.g. a single tip larger than the cap).
    """
    # sorted() is stable, and stays stable with reverse=True
    limited = sorted(tips, key=lambda tip: tip.amount, reverse=True)
    limited = limited[: config.max_tips_withdrawable]

    while total_amount(limited) > config.max_tip_sats:
        limited.pop()

    logger.debug("Limited tips: %d / %d selected.", len(limited), len(tips))
    return limited
