"""Membership card configuration — plain frozen dataclass, no pydantic.

The host application constructs this from its own settings (env vars,
pydantic-settings, etc.) and passes it to ``MembershipCard``.
"""

from dataclasses import dataclass

from membercard.constants import DEFAULT_SUBSCRIPTION_PERIOD


@dataclass(frozen=True)
class MembershipCardConfig:
    name: str
    symbol: str
    fee_receiver: str
    tier1_fee: int
    subscription_period: int = DEFAULT_SUBSCRIPTION_PERIOD
    payout_host: str | None = None
    payout_store_id: str | None = None
    payout_api_key: str | None = None
    payout_method: str = "BTC-LN"
