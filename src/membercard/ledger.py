"""Per-token subscription records.

Pure data model — no I/O. Heights are ledger-height units supplied by the
caller; the ledger never reads a clock itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from membercard.constants import UNSUBSCRIBED_TIER

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# SubscriptionRecord
# ---------------------------------------------------------------------------


@dataclass
class SubscriptionRecord:
    """Current tier and expiration height of a single token."""

    tier: int = UNSUBSCRIBED_TIER
    expiration_height: int = 0
    charges: int = 0  # Number of mint/recharge calls applied

    def is_active(self, height: int) -> bool:
        return self.tier != UNSUBSCRIBED_TIER and height < self.expiration_height

    def to_dict(self) -> dict[str, int]:
        return {
            "tier": self.tier,
            "expiration_height": self.expiration_height,
            "charges": self.charges,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SubscriptionRecord:
        return cls(
            tier=int(data.get("tier", UNSUBSCRIBED_TIER)),
            expiration_height=int(data.get("expiration_height", 0)),
            charges=int(data.get("charges", 0)),
        )


# ---------------------------------------------------------------------------
# SubscriptionLedger
# ---------------------------------------------------------------------------


@dataclass
class SubscriptionLedger:
    """Token id → subscription record.

    Unknown tokens read as tier 0 with expiration 0. ``charge()`` resets
    the horizon to ``current_height + period``; unused time is not carried
    over.
    """

    records: dict[int, SubscriptionRecord] = field(default_factory=dict)

    def get(self, token_id: int) -> SubscriptionRecord:
        return self.records.get(token_id) or SubscriptionRecord()

    def tier_of(self, token_id: int) -> int:
        return self.get(token_id).tier

    def expiration_of(self, token_id: int) -> int:
        return self.get(token_id).expiration_height

    def charge(
        self, token_id: int, tier: int, current_height: int, period: int,
    ) -> int:
        """Set the token's tier and expiration. Returns the new expiration."""
        record = self.records.setdefault(token_id, SubscriptionRecord())
        record.tier = tier
        record.expiration_height = current_height + period
        record.charges += 1
        logger.debug(
            "Charged token %d: tier %d until height %d.",
            token_id, tier, record.expiration_height,
        )
        return record.expiration_height

    # -- serialization --------------------------------------------------------

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {str(tid): rec.to_dict() for tid, rec in self.records.items()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SubscriptionLedger:
        return cls(records={
            int(tid): SubscriptionRecord.from_dict(rec)
            for tid, rec in data.items()
            if isinstance(rec, dict)
        })
