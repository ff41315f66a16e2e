"""Token issuer interface — sequential ids and ownership bookkeeping.

Defines the TokenIssuer Protocol that MembershipCard depends on, plus an
in-memory implementation. Transfer and approval semantics belong to the
issuer and are not modelled here.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from membercard.constants import FIRST_TOKEN_ID

logger = logging.getLogger(__name__)


@runtime_checkable
class TokenIssuer(Protocol):
    """Synchronous token-ownership ledger.

    ``release()`` discards an allocation whose mint did not commit, so a
    failed mint never consumes a token id.
    """

    def allocate_id(self) -> int: ...

    def assign_owner(self, token_id: int, owner: str) -> None: ...

    def owner_of(self, token_id: int) -> str | None: ...

    def release(self, token_id: int) -> None: ...


class InMemoryTokenIssuer:
    """Process-local TokenIssuer with ids counting up from 1."""

    def __init__(self, name: str = "", symbol: str = "") -> None:
        self.name = name
        self.symbol = symbol
        self._next_id = FIRST_TOKEN_ID
        self._owners: dict[int, str] = {}

    @property
    def next_id(self) -> int:
        return self._next_id

    def allocate_id(self) -> int:
        token_id = self._next_id
        self._next_id += 1
        return token_id

    def assign_owner(self, token_id: int, owner: str) -> None:
        if token_id >= self._next_id:
            raise ValueError(f"token {token_id} was never allocated")
        self._owners[token_id] = owner

    def owner_of(self, token_id: int) -> str | None:
        return self._owners.get(token_id)

    def balance_of(self, owner: str) -> int:
        return sum(1 for o in self._owners.values() if o == owner)

    def release(self, token_id: int) -> None:
        self._owners.pop(token_id, None)
        # Only the most recent allocation can be handed back to the counter.
        if token_id == self._next_id - 1:
            self._next_id = token_id
        else:
            logger.warning(
                "Released token %d out of order; id stays consumed.", token_id,
            )
