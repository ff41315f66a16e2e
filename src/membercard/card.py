"""MembershipCard — tier schedule, minting gate, settlement and subscriptions.

Admin operations validate before they mutate. Mint and recharge snapshot
state, make every change, and only then hand value to the transport; if
anything raises the snapshot is restored, so a failed call leaves no
trace. Both are also guarded against reentry from a transfer recipient.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from membercard import events
from membercard.access import AccessGate
from membercard.config import MembershipCardConfig
from membercard.constants import ADMIN_ROLE, FIRST_TIER
from membercard.errors import (
    InvalidFee,
    InvalidPeriod,
    InvalidTier,
    MintingPaused,
    ReentrantCall,
    TierDowngrade,
    TokenNotFound,
    Unauthorized,
)
from membercard.fee_schedule import TierFeeSchedule
from membercard.gate import GateState, MintingGate
from membercard.height import LedgerHeight
from membercard.issuer import InMemoryTokenIssuer, TokenIssuer
from membercard.ledger import SubscriptionLedger
from membercard.settlement import settle
from membercard.transport import InMemoryValueTransport, ValueTransport

logger = logging.getLogger(__name__)


class MembershipCard:
    """Tiered membership tokens with fee collection and admin gating.

    ``deployer`` receives ``ADMIN_ROLE``. Minting starts paused, tier 1 is
    priced at ``config.tier1_fee`` (0 leaves it disabled) and the first
    token id is 1. Collaborators default to in-memory implementations.
    """

    def __init__(
        self,
        config: MembershipCardConfig,
        deployer: str,
        issuer: TokenIssuer | None = None,
        transport: ValueTransport | None = None,
        height: Callable[[], int] | None = None,
    ) -> None:
        if config.subscription_period < 0:
            raise InvalidPeriod(config.subscription_period)
        if config.tier1_fee < 0:
            raise InvalidFee(config.tier1_fee)

        self.config = config
        self.events: list[events.Event] = []
        self._issuer = issuer if issuer is not None else InMemoryTokenIssuer(
            config.name, config.symbol,
        )
        self._transport = transport if transport is not None else InMemoryValueTransport()
        self._height = height if height is not None else LedgerHeight()

        self._access = AccessGate()
        self._gate = MintingGate()
        self._schedule = TierFeeSchedule()
        self._ledger = SubscriptionLedger()
        self._fee_receiver = config.fee_receiver
        self._subscription_period = config.subscription_period
        self._entered = False

        self._access.grant(ADMIN_ROLE, deployer)
        self.events.append(events.RoleGranted(ADMIN_ROLE, deployer, deployer))
        self._schedule.fees[FIRST_TIER] = config.tier1_fee

    # -- atomicity ------------------------------------------------------------

    def _snapshot(self) -> dict[str, Any]:
        return {
            "access": self._access.to_dict(),
            "gate": self._gate.state,
            "schedule": self._schedule.to_dict(),
            "ledger": self._ledger.to_dict(),
            "fee_receiver": self._fee_receiver,
            "subscription_period": self._subscription_period,
            "events": len(self.events),
        }

    def _restore(self, snapshot: dict[str, Any]) -> None:
        self._access = AccessGate.from_dict(snapshot["access"])
        self._gate = MintingGate(snapshot["gate"])
        self._schedule = TierFeeSchedule.from_dict(snapshot["schedule"])
        self._ledger = SubscriptionLedger.from_dict(snapshot["ledger"])
        self._fee_receiver = snapshot["fee_receiver"]
        self._subscription_period = snapshot["subscription_period"]
        del self.events[snapshot["events"]:]

    @contextmanager
    def _atomic(self) -> Iterator[None]:
        snapshot = self._snapshot()
        try:
            yield
        except Exception:
            self._restore(snapshot)
            logger.warning("Call reverted; state restored.")
            raise

    @contextmanager
    def _non_reentrant(self) -> Iterator[None]:
        if self._entered:
            raise ReentrantCall()
        self._entered = True
        try:
            yield
        finally:
            self._entered = False

    # -- administration -------------------------------------------------------

    def set_fee_receiver(self, caller: str, address: str) -> None:
        self._access.require_admin(caller)
        self._fee_receiver = address
        self.events.append(events.FeeReceiverChanged(address, caller))
        logger.info("Fee receiver set to %s by %s.", address, caller)

    def set_tier_fee(self, caller: str, tier: int, fee: int) -> None:
        """Price ``tier`` at ``fee``. See TierFeeSchedule.set_fee for the rules."""
        self._access.require_admin(caller)
        self._schedule.set_fee(tier, fee)
        self.events.append(events.TierFeeChanged(tier, fee, caller))

    def set_subscription_period(self, caller: str, period: int) -> None:
        self._access.require_admin(caller)
        if period < 0:
            raise InvalidPeriod(period)
        self._subscription_period = period
        self.events.append(events.SubscriptionPeriodChanged(period, caller))
        logger.info("Subscription period set to %d by %s.", period, caller)

    def pause(self, caller: str) -> None:
        self._access.require_admin(caller)
        self._gate.pause()
        self.events.append(events.MintingPaused(caller))

    def unpause(self, caller: str) -> None:
        self._access.require_admin(caller)
        self._gate.unpause()
        self.events.append(events.MintingUnpaused(caller))

    def grant_role(self, caller: str, role: str, account: str) -> None:
        self._access.require_admin(caller)
        if self._access.grant(role, account):
            self.events.append(events.RoleGranted(role, account, caller))

    def revoke_role(self, caller: str, role: str, account: str) -> None:
        self._access.require_admin(caller)
        if self._access.revoke(role, account):
            self.events.append(events.RoleRevoked(role, account, caller))

    def renounce_role(self, caller: str, role: str, account: str) -> None:
        """Drop one of the caller's own roles. ``account`` must be the caller."""
        if account != caller:
            raise Unauthorized(caller, role)
        if self._access.revoke(role, account):
            self.events.append(events.RoleRevoked(role, account, caller))

    # -- minting and recharging -----------------------------------------------

    def mint(
        self, caller: str, tier: int, to: str | None = None, value: int = 0,
    ) -> int:
        """Mint a token for ``to`` (default: the caller) at ``tier``.

        ``value`` is the amount attached to the call; the tier fee is
        forwarded to the fee receiver and the rest refunded to the caller.
        Admins pay nothing, get everything refunded, and are not blocked
        by the pause. Returns the new token id.
        """
        with self._non_reentrant():
            if tier < 0:
                raise InvalidTier(tier)
            fee_required = not self._access.is_privileged(caller)
            if fee_required and self._gate.is_paused:
                raise MintingPaused()

            settlement = settle(
                caller, tier, 1, fee_required, value,
                self._fee_receiver, self._schedule,
            )
            owner = to if to is not None else caller

            with self._atomic():
                token_id = self._issuer.allocate_id()
                try:
                    expiration = self._charge(token_id, tier)
                    self._issuer.assign_owner(token_id, owner)
                    self._transport.send(settlement.transfers)
                except Exception:
                    self._issuer.release(token_id)
                    raise

        logger.info(
            "Minted token %d (tier %d, expires at %d) for %s; collected %d, refunded %d.",
            token_id, tier, expiration, owner, settlement.collected, settlement.refund,
        )
        return token_id

    def recharge(
        self,
        caller: str,
        token_id: int,
        tier: int,
        multiplier: int = 1,
        value: int = 0,
    ) -> int:
        """Reset ``token_id``'s subscription to ``tier`` for one period from now.

        Anyone may recharge any token. The fee is ``fee(tier) * multiplier``
        and the expiration becomes ``height + period`` whatever time was
        left. Recharging below the current tier raises TierDowngrade.
        Not subject to the minting pause. Returns the new expiration height.
        """
        with self._non_reentrant():
            if self._issuer.owner_of(token_id) is None:
                raise TokenNotFound(token_id)
            current_tier = self._ledger.tier_of(token_id)
            if tier < current_tier:
                raise TierDowngrade(token_id, current_tier, tier)

            fee_required = not self._access.is_privileged(caller)
            settlement = settle(
                caller, tier, multiplier, fee_required, value,
                self._fee_receiver, self._schedule,
            )

            with self._atomic():
                expiration = self._charge(token_id, tier)
                self._transport.send(settlement.transfers)

        logger.info(
            "Recharged token %d (tier %d, expires at %d); collected %d, refunded %d.",
            token_id, tier, expiration, settlement.collected, settlement.refund,
        )
        return expiration

    def _charge(self, token_id: int, tier: int) -> int:
        expiration = self._ledger.charge(
            token_id, tier, self._height(), self._subscription_period,
        )
        self.events.append(events.MembershipCharged(token_id, tier, expiration))
        return expiration

    # -- queries --------------------------------------------------------------

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def symbol(self) -> str:
        return self.config.symbol

    @property
    def fee_receiver(self) -> str:
        return self._fee_receiver

    @property
    def subscription_period(self) -> int:
        return self._subscription_period

    @property
    def is_minting_paused(self) -> bool:
        return self._gate.state is GateState.PAUSED

    @property
    def current_height(self) -> int:
        return self._height()

    @property
    def highest_tier(self) -> int:
        return self._schedule.highest_tier

    def tier_fee(self, tier: int) -> int:
        return self._schedule.fee(tier)

    def token_tier(self, token_id: int) -> int:
        return self._ledger.tier_of(token_id)

    def expiration_height(self, token_id: int) -> int:
        return self._ledger.expiration_of(token_id)

    def is_active(self, token_id: int) -> bool:
        return self._ledger.get(token_id).is_active(self._height())

    def owner_of(self, token_id: int) -> str:
        owner = self._issuer.owner_of(token_id)
        if owner is None:
            raise TokenNotFound(token_id)
        return owner

    def has_role(self, role: str, account: str) -> bool:
        return self._access.has_role(role, account)

    def is_privileged(self, account: str) -> bool:
        return self._access.is_privileged(account)
