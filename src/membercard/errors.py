"""Exception hierarchy for membership card operations.

Every error is terminal for the call that raised it: the card restores
its pre-call state before the exception reaches the caller.
"""

from __future__ import annotations


class MembershipError(Exception):
    """Base exception for membership card operations."""


# ---------------------------------------------------------------------------
# Access control
# ---------------------------------------------------------------------------


class Unauthorized(MembershipError):
    """Caller lacks the role required for the operation."""

    def __init__(self, account: str, role: str) -> None:
        super().__init__(f"Account {account!r} is missing role {role!r}")
        self.account = account
        self.role = role


class MintingPaused(MembershipError):
    """Minting is paused and the caller is not privileged."""

    def __init__(self) -> None:
        super().__init__("Minting is paused")


class ReentrantCall(MembershipError):
    """A mint or recharge was attempted while another one is in progress."""

    def __init__(self) -> None:
        super().__init__("Reentrant call")


# ---------------------------------------------------------------------------
# Fee schedule
# ---------------------------------------------------------------------------


class InvalidTier(MembershipError):
    """Tier 0 (unsubscribed) or a negative tier was given a fee."""

    def __init__(self, tier: int) -> None:
        super().__init__(f"Cannot set fee for tier {tier} (unsubscribed)")
        self.tier = tier


class InvalidFee(MembershipError):
    """Fee amount is negative."""

    def __init__(self, fee: int) -> None:
        super().__init__(f"Fee must be non-negative, got {fee}")
        self.fee = fee


class FeeNotIncreasing(MembershipError):
    """Fee is not strictly greater than the previous tier's fee."""

    def __init__(self, tier: int, fee: int, previous_fee: int) -> None:
        super().__init__(
            f"Cannot set a higher tier to a lower fee: tier {tier} fee {fee} "
            f"<= tier {tier - 1} fee {previous_fee}"
        )
        self.tier = tier
        self.fee = fee
        self.previous_fee = previous_fee


class TierGap(MembershipError):
    """The previous tier was never enabled."""

    def __init__(self, tier: int) -> None:
        super().__init__(
            f"Cannot skip a membership tier: tier {tier - 1} is not enabled"
        )
        self.tier = tier


# ---------------------------------------------------------------------------
# Payment
# ---------------------------------------------------------------------------


class TierDisabled(MembershipError):
    """The requested tier has no fee and cannot be bought."""

    def __init__(self, tier: int) -> None:
        super().__init__(f"Membership tier {tier} is disabled")
        self.tier = tier


class InvalidMultiplier(MembershipError):
    """Recharge multiplier is below 1."""

    def __init__(self, multiplier: int) -> None:
        super().__init__(f"Multiplier must be at least 1, got {multiplier}")
        self.multiplier = multiplier


class InsufficientFee(MembershipError):
    """Value sent is below the fee due."""

    def __init__(self, required: int, provided: int) -> None:
        super().__init__(f"Fee too small: required {required}, provided {provided}")
        self.required = required
        self.provided = provided


class TransferFailure(MembershipError):
    """An outbound value movement was rejected."""

    def __init__(self, recipient: str, amount: int, reason: str = "") -> None:
        message = f"Transfer of {amount} to {recipient!r} failed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.recipient = recipient
        self.amount = amount
        self.reason = reason


# ---------------------------------------------------------------------------
# Subscriptions
# ---------------------------------------------------------------------------


class InvalidPeriod(MembershipError):
    """Subscription period is negative."""

    def __init__(self, period: int) -> None:
        super().__init__(f"Subscription period must be non-negative, got {period}")
        self.period = period


class TokenNotFound(MembershipError):
    """No membership token with this id has been minted."""

    def __init__(self, token_id: int) -> None:
        super().__init__(f"Token {token_id} does not exist")
        self.token_id = token_id


class TierDowngrade(MembershipError):
    """Recharge targets a tier below the token's current tier."""

    def __init__(self, token_id: int, current_tier: int, tier: int) -> None:
        super().__init__(
            f"Cannot recharge token {token_id} at tier {tier}: "
            f"current tier is {current_tier}"
        )
        self.token_id = token_id
        self.current_tier = current_tier
        self.tier = tier
