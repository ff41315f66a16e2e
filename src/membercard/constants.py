"""Constants for membership tiers, roles, and payout safety limits."""

UNSUBSCRIBED_TIER = 0  # reserved: no active subscription, never priced
FIRST_TIER = 1
FIRST_TOKEN_ID = 1

DEFAULT_SUBSCRIPTION_PERIOD = 216_000  # height units (~30 days at 12s blocks)

ADMIN_ROLE = "DEFAULT_ADMIN_ROLE"

# Default ceiling for a single outbound payout: 1 BTC in sats.
MAX_PAYOUT_SATS = 100_000_000
