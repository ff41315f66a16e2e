"""Outbound value movement — the ValueTransport Protocol and an in-memory book.

A transport receives the whole batch produced by one settlement and must
move all of it or none of it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from membercard.errors import TransferFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transfer:
    """A single outbound movement of native value."""

    recipient: str
    amount: int
    purpose: str = "fee"  # fee | refund


@runtime_checkable
class ValueTransport(Protocol):
    """All-or-nothing sender for a batch of transfers.

    Raises TransferFailure, having moved nothing, if any recipient
    rejects its transfer.
    """

    def send(self, transfers: Sequence[Transfer]) -> None: ...


ReceiveHook = Callable[[Transfer], None]


class InMemoryValueTransport:
    """Balances per address, with optional per-recipient receive hooks.

    A hook runs after its recipient is credited. If it raises, the
    recipient has rejected the funds: every credit in the batch is undone
    and TransferFailure is raised. Hooks may call back into the card,
    which is how reentrancy is exercised.
    """

    def __init__(self) -> None:
        self.balances: dict[str, int] = {}
        self.sent: list[Transfer] = []
        self._hooks: dict[str, ReceiveHook] = {}

    def balance_of(self, address: str) -> int:
        return self.balances.get(address, 0)

    def on_receive(self, address: str, hook: ReceiveHook | None) -> None:
        """Install (or with None, remove) the receive hook for ``address``."""
        if hook is None:
            self._hooks.pop(address, None)
        else:
            self._hooks[address] = hook

    def send(self, transfers: Sequence[Transfer]) -> None:
        for transfer in transfers:
            if transfer.amount < 0:
                raise ValueError(f"amount must be non-negative, got {transfer.amount}")

        balances = dict(self.balances)
        sent = list(self.sent)
        for transfer in transfers:
            self.balances[transfer.recipient] = (
                self.balances.get(transfer.recipient, 0) + transfer.amount
            )
            self.sent.append(transfer)
            hook = self._hooks.get(transfer.recipient)
            if hook is None:
                continue
            try:
                hook(transfer)
            except Exception as e:
                self.balances = balances
                self.sent = sent
                logger.warning(
                    "Recipient %s rejected %d (%s): %s",
                    transfer.recipient, transfer.amount, transfer.purpose, e,
                )
                raise TransferFailure(transfer.recipient, transfer.amount, str(e)) from e
