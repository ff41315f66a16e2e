"""Ledger-height counter for hosts without a chain of their own."""

from __future__ import annotations


class LedgerHeight:
    """Monotonic height, advanced by the host. Call it to read the height."""

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError(f"height must be non-negative, got {start}")
        self._height = start

    def __call__(self) -> int:
        return self._height

    def advance(self, blocks: int = 1) -> int:
        if blocks < 0:
            raise ValueError("height cannot move backwards")
        self._height += blocks
        return self._height

    def advance_to(self, height: int) -> int:
        if height < self._height:
            raise ValueError(f"height {height} is below current {self._height}")
        self._height = height
        return self._height
