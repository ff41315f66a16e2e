"""Role membership and the guard consulted at the top of gated operations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from membercard.constants import ADMIN_ROLE
from membercard.errors import Unauthorized

logger = logging.getLogger(__name__)


@dataclass
class AccessGate:
    """Role → set of accounts.

    Only ``ADMIN_ROLE`` confers privileges; other role names can be
    granted and queried but gate nothing.
    """

    members: dict[str, set[str]] = field(default_factory=dict)

    def has_role(self, role: str, account: str) -> bool:
        return account in self.members.get(role, set())

    def is_privileged(self, account: str) -> bool:
        return self.has_role(ADMIN_ROLE, account)

    def require_role(self, role: str, account: str) -> None:
        if not self.has_role(role, account):
            logger.warning("Rejected %s: missing role %s.", account, role)
            raise Unauthorized(account, role)

    def require_admin(self, account: str) -> None:
        self.require_role(ADMIN_ROLE, account)

    def grant(self, role: str, account: str) -> bool:
        """Add ``account`` to ``role``. Returns False if already a member."""
        holders = self.members.setdefault(role, set())
        if account in holders:
            return False
        holders.add(account)
        logger.info("Granted %s to %s.", role, account)
        return True

    def revoke(self, role: str, account: str) -> bool:
        """Remove ``account`` from ``role``. Returns False if not a member."""
        holders = self.members.get(role)
        if not holders or account not in holders:
            return False
        holders.discard(account)
        logger.info("Revoked %s from %s.", role, account)
        return True

    # -- serialization --------------------------------------------------------

    def to_dict(self) -> dict[str, list[str]]:
        return {role: sorted(accounts) for role, accounts in self.members.items()}

    @classmethod
    def from_dict(cls, data: dict[str, list[str]]) -> AccessGate:
        return cls(members={role: set(accounts) for role, accounts in data.items()})
