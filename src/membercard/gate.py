"""Two-state pause switch for non-privileged minting."""

from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class GateState(str, Enum):
    PAUSED = "paused"
    ACTIVE = "active"


class MintingGate:
    """Pause switch, initially paused.

    The gate only records state; callers decide who it applies to.
    """

    def __init__(self, state: GateState = GateState.PAUSED) -> None:
        self.state = state

    @property
    def is_paused(self) -> bool:
        return self.state is GateState.PAUSED

    def pause(self) -> None:
        self.state = GateState.PAUSED
        logger.info("Minting paused.")

    def unpause(self) -> None:
        self.state = GateState.ACTIVE
        logger.info("Minting unpaused.")
