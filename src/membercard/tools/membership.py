"""Membership tools: mint, recharge, check_membership, set_tier_fee, membership_status."""

from __future__ import annotations

import importlib.metadata
import logging
import platform
from typing import Any

from membercard.card import MembershipCard
from membercard.errors import MembershipError
from membercard.payout_client import PayoutClient, PayoutAuthError, PayoutError

logger = logging.getLogger(__name__)


def _failure(e: MembershipError) -> dict[str, Any]:
    return {"success": False, "error": str(e), "error_type": type(e).__name__}


def _amount_due(card: MembershipCard, caller: str, tier: int, multiplier: int) -> int:
    if card.is_privileged(caller):
        return 0
    return card.tier_fee(tier) * multiplier


def mint_tool(
    card: MembershipCard,
    caller: str,
    tier: int,
    to: str | None = None,
    value: int = 0,
) -> dict[str, Any]:
    """Mint a membership token at ``tier`` for ``to`` (default: the caller).

    The tier fee is forwarded to the fee receiver and anything sent above
    it is refunded. Admins mint for free, even while minting is paused.

    Returns dict with:
        success: True if the token was minted.
        token_id/owner/tier/expiration_height: The new membership.
        fee_paid/refunded: Value collected and returned.
        message: Human-readable summary.

    Errors: Returns success=False with ``error_type`` naming the failure
    (MintingPaused, TierDisabled, InsufficientFee, TransferFailure, ...).
    """
    due = _amount_due(card, caller, tier, 1)
    try:
        token_id = card.mint(caller, tier, to=to, value=value)
    except MembershipError as e:
        return _failure(e)

    expiration = card.expiration_height(token_id)
    return {
        "success": True,
        "token_id": token_id,
        "owner": card.owner_of(token_id),
        "tier": tier,
        "expiration_height": expiration,
        "fee_paid": due,
        "refunded": value - due,
        "message": (
            f"Minted membership #{token_id} at tier {tier}, "
            f"active until height {expiration:,}."
        ),
    }


def recharge_tool(
    card: MembershipCard,
    caller: str,
    token_id: int,
    tier: int,
    multiplier: int = 1,
    value: int = 0,
) -> dict[str, Any]:
    """Recharge an existing membership at ``tier`` for one subscription period.

    The new expiration is always the current height plus the period;
    unused time is not carried over. The tier may not drop below the
    token's current tier.
    """
    due = _amount_due(card, caller, tier, multiplier)
    previous_tier = card.token_tier(token_id)
    try:
        expiration = card.recharge(
            caller, token_id, tier, multiplier=multiplier, value=value,
        )
    except MembershipError as e:
        return _failure(e)

    result: dict[str, Any] = {
        "success": True,
        "token_id": token_id,
        "tier": tier,
        "previous_tier": previous_tier,
        "expiration_height": expiration,
        "fee_paid": due,
        "refunded": value - due,
        "message": f"Membership #{token_id} recharged until height {expiration:,}.",
    }
    if tier > previous_tier:
        result["upgraded"] = True
    return result


def check_membership_tool(card: MembershipCard, token_id: int) -> dict[str, Any]:
    """Return owner, tier and expiration for a token. Read-only."""
    try:
        owner = card.owner_of(token_id)
    except MembershipError as e:
        return _failure(e)

    height = card.current_height
    expiration = card.expiration_height(token_id)
    tier = card.token_tier(token_id)
    return {
        "success": True,
        "token_id": token_id,
        "owner": owner,
        "tier": tier,
        "tier_fee": card.tier_fee(tier),
        "expiration_height": expiration,
        "current_height": height,
        "blocks_remaining": max(0, expiration - height),
        "active": card.is_active(token_id),
    }


def set_tier_fee_tool(
    card: MembershipCard, caller: str, tier: int, fee: int,
) -> dict[str, Any]:
    """Admin tool: price ``tier`` at ``fee`` (must exceed the tier below)."""
    try:
        card.set_tier_fee(caller, tier, fee)
    except MembershipError as e:
        return _failure(e)
    return {
        "success": True,
        "tier": tier,
        "fee": fee,
        "message": f"Tier {tier} fee set to {fee:,}.",
    }


def membership_status_tool(
    card: MembershipCard,
    payout: PayoutClient | None = None,
) -> dict[str, Any]:
    """Report card configuration, the tier ladder and payout connectivity.

    Admin/operator diagnostics. ``server_reachable`` is None when no payout
    client is configured.
    """
    highest = card.highest_tier
    result: dict[str, Any] = {
        "name": card.name,
        "symbol": card.symbol,
        "minting_paused": card.is_minting_paused,
        "fee_receiver": card.fee_receiver,
        "subscription_period": card.subscription_period,
        "current_height": card.current_height,
        "tiers": {tier: card.tier_fee(tier) for tier in range(1, highest + 1)},
        "recent_events": [e.to_dict() for e in card.events[-10:]],
    }

    versions: dict[str, str] = {"python": platform.python_version()}
    for pkg in ("membercard", "httpx"):
        try:
            versions[pkg] = importlib.metadata.version(pkg)
        except importlib.metadata.PackageNotFoundError:
            versions[pkg] = "unknown"
    result["versions"] = versions

    config = card.config
    result["payout_config"] = {
        "host": config.payout_host,
        "store_id": config.payout_store_id,
        "api_key_status": "present" if config.payout_api_key else "missing",
        "payout_method": config.payout_method,
    }

    if payout is None:
        result["server_reachable"] = None
        return result

    try:
        payout.health_check()
        result["server_reachable"] = True
    except PayoutAuthError:
        result["server_reachable"] = "unauthorized"
    except PayoutError as e:
        logger.warning("Payout server health check failed: %s", e)
        result["server_reachable"] = False

    return result
