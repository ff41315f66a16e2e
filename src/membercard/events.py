"""Notifications appended to ``MembershipCard.events``."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class Event:
    def to_dict(self) -> dict[str, Any]:
        return {"event": type(self).__name__, **asdict(self)}


@dataclass(frozen=True)
class MintingPaused(Event):
    account: str


@dataclass(frozen=True)
class MintingUnpaused(Event):
    account: str


@dataclass(frozen=True)
class RoleGranted(Event):
    role: str
    account: str
    sender: str


@dataclass(frozen=True)
class RoleRevoked(Event):
    role: str
    account: str
    sender: str


@dataclass(frozen=True)
class FeeReceiverChanged(Event):
    fee_receiver: str
    sender: str


@dataclass(frozen=True)
class TierFeeChanged(Event):
    tier: int
    fee: int
    sender: str


@dataclass(frozen=True)
class SubscriptionPeriodChanged(Event):
    period: int
    sender: str


@dataclass(frozen=True)
class MembershipCharged(Event):
    token_id: int
    tier: int
    expiration_height: int
