"""Fee computation and the transfer batch for a mint or recharge.

``settle()`` is pure: it validates the payment and describes the value
movements. The card executes them through its ValueTransport only after
all state changes have been made.
"""

from __future__ import annotations

from dataclasses import dataclass

from membercard.errors import InsufficientFee, InvalidMultiplier, TierDisabled
from membercard.fee_schedule import TierFeeSchedule
from membercard.transport import Transfer


@dataclass(frozen=True)
class Settlement:
    collected: int
    refund: int
    transfers: tuple[Transfer, ...] = ()


def settle(
    caller: str,
    tier: int,
    multiplier: int,
    fee_required: bool,
    value_sent: int,
    receiver: str,
    schedule: TierFeeSchedule,
) -> Settlement:
    """Compute what is collected and refunded for a payment of ``value_sent``.

    Without a fee requirement everything sent is refunded. Otherwise the
    due amount is ``schedule.fee(tier) * multiplier``; a zero due amount
    means the tier is disabled. Zero-amount movements are left out of
    ``transfers``, so at most two are produced.

    Raises:
        InvalidMultiplier: multiplier below 1.
        TierDisabled: nothing is due because the tier has no fee.
        InsufficientFee: ``value_sent`` is below the due amount.
    """
    if multiplier < 1:
        raise InvalidMultiplier(multiplier)
    if value_sent < 0:
        raise ValueError(f"value_sent must be non-negative, got {value_sent}")

    if not fee_required:
        collected, refund = 0, value_sent
    else:
        due = schedule.fee(tier) * multiplier
        if due == 0:
            raise TierDisabled(tier)
        if value_sent < due:
            raise InsufficientFee(due, value_sent)
        collected, refund = due, value_sent - due

    transfers: list[Transfer] = []
    if collected:
        transfers.append(Transfer(receiver, collected, "fee"))
    if refund:
        transfers.append(Transfer(caller, refund, "refund"))
    return Settlement(collected=collected, refund=refund, transfers=tuple(transfers))
