"""Tier fee schedule — a gap-free, strictly increasing tier → fee ladder.

Pure data model. Fees are integer amounts of the native value currency.
A fee of 0 means the tier is disabled.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from membercard.constants import FIRST_TIER, UNSUBSCRIBED_TIER
from membercard.errors import FeeNotIncreasing, InvalidFee, InvalidTier, TierGap

logger = logging.getLogger(__name__)


@dataclass
class TierFeeSchedule:
    """Mapping of tier to fee.

    ``set_fee()`` enforces the ladder rules; ``fee()`` is a plain lookup
    returning 0 for any tier never set.
    """

    fees: dict[int, int] = field(default_factory=dict)

    def fee(self, tier: int) -> int:
        return self.fees.get(tier, 0)

    def set_fee(self, tier: int, fee: int) -> None:
        """Record ``fee`` for ``tier``, overwriting any prior value.

        Raises InvalidTier for tier 0, InvalidFee for a negative fee,
        FeeNotIncreasing when the fee does not exceed the previous tier's,
        and TierGap when the previous tier was never enabled.
        """
        if tier <= UNSUBSCRIBED_TIER:
            raise InvalidTier(tier)
        if fee < 0:
            raise InvalidFee(fee)

        previous_fee = self.fee(tier - 1)
        if fee <= previous_fee:
            raise FeeNotIncreasing(tier, fee, previous_fee)
        if tier > FIRST_TIER and previous_fee == 0:
            raise TierGap(tier)

        self.fees[tier] = fee
        logger.info("Tier %d fee set to %d.", tier, fee)

    def is_enabled(self, tier: int) -> bool:
        return self.fee(tier) > 0

    @property
    def highest_tier(self) -> int:
        """Highest enabled tier, or 0 when nothing is priced."""
        tier = UNSUBSCRIBED_TIER
        while self.is_enabled(tier + 1):
            tier += 1
        return tier

    # -- serialization --------------------------------------------------------

    def to_dict(self) -> dict[str, int]:
        return {str(tier): fee for tier, fee in self.fees.items()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TierFeeSchedule:
        return cls(fees={int(tier): int(fee) for tier, fee in data.items()})
