"""membercard — tiered membership tokens with fee collection and admin gating.

Subscriptions are measured in ledger-height units; fees are paid in a
native value currency and forwarded to a configurable receiver.
"""

__version__ = "0.1.0"

from membercard.access import AccessGate
from membercard.card import MembershipCard
from membercard.config import MembershipCardConfig
from membercard.constants import ADMIN_ROLE, DEFAULT_SUBSCRIPTION_PERIOD, UNSUBSCRIBED_TIER
from membercard.errors import (
    FeeNotIncreasing,
    InsufficientFee,
    InvalidFee,
    InvalidMultiplier,
    InvalidPeriod,
    InvalidTier,
    MembershipError,
    MintingPaused,
    ReentrantCall,
    TierDisabled,
    TierDowngrade,
    TierGap,
    TokenNotFound,
    TransferFailure,
    Unauthorized,
)
from membercard.fee_schedule import TierFeeSchedule
from membercard.gate import GateState, MintingGate
from membercard.height import LedgerHeight
from membercard.issuer import InMemoryTokenIssuer, TokenIssuer
from membercard.ledger import SubscriptionLedger, SubscriptionRecord
from membercard.payout_client import PayoutClient, PayoutError
from membercard.settlement import Settlement, settle
from membercard.transport import InMemoryValueTransport, Transfer, ValueTransport

__all__ = [
    "AccessGate",
    "MembershipCard",
    "MembershipCardConfig",
    "ADMIN_ROLE",
    "DEFAULT_SUBSCRIPTION_PERIOD",
    "UNSUBSCRIBED_TIER",
    "FeeNotIncreasing",
    "InsufficientFee",
    "InvalidFee",
    "InvalidMultiplier",
    "InvalidPeriod",
    "InvalidTier",
    "MembershipError",
    "MintingPaused",
    "ReentrantCall",
    "TierDisabled",
    "TierDowngrade",
    "TierGap",
    "TokenNotFound",
    "TransferFailure",
    "Unauthorized",
    "TierFeeSchedule",
    "GateState",
    "MintingGate",
    "LedgerHeight",
    "InMemoryTokenIssuer",
    "TokenIssuer",
    "SubscriptionLedger",
    "SubscriptionRecord",
    "PayoutClient",
    "PayoutError",
    "Settlement",
    "settle",
    "InMemoryValueTransport",
    "Transfer",
    "ValueTransport",
]
