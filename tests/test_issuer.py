"""Tests for InMemoryTokenIssuer and LedgerHeight."""

import pytest

from membercard.height import LedgerHeight
from membercard.issuer import InMemoryTokenIssuer, TokenIssuer


class TestInMemoryTokenIssuer:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(InMemoryTokenIssuer(), TokenIssuer)

    def test_ids_start_at_one(self) -> None:
        issuer = InMemoryTokenIssuer()
        assert issuer.next_id == 1
        assert issuer.allocate_id() == 1
        assert issuer.allocate_id() == 2

    def test_assign_and_lookup_owner(self) -> None:
        issuer = InMemoryTokenIssuer()
        token_id = issuer.allocate_id()
        issuer.assign_owner(token_id, "bob")
        assert issuer.owner_of(token_id) == "bob"
        assert issuer.balance_of("bob") == 1

    def test_unknown_owner_is_none(self) -> None:
        assert InMemoryTokenIssuer().owner_of(1) is None

    def test_assign_unallocated_rejected(self) -> None:
        with pytest.raises(ValueError, match="never allocated"):
            InMemoryTokenIssuer().assign_owner(1, "bob")

    def test_release_last_allocation_rewinds_counter(self) -> None:
        issuer = InMemoryTokenIssuer()
        token_id = issuer.allocate_id()
        issuer.assign_owner(token_id, "bob")
        issuer.release(token_id)
        assert issuer.next_id == 1
        assert issuer.owner_of(token_id) is None

    def test_release_out_of_order_keeps_counter(self) -> None:
        issuer = InMemoryTokenIssuer()
        first = issuer.allocate_id()
        issuer.allocate_id()
        issuer.release(first)
        assert issuer.next_id == 3


class TestLedgerHeight:
    def test_defaults_to_zero(self) -> None:
        assert LedgerHeight()() == 0

    def test_advance(self) -> None:
        height = LedgerHeight(10)
        assert height.advance(5) == 15
        assert height() == 15

    def test_advance_to(self) -> None:
        height = LedgerHeight()
        height.advance_to(216_000)
        assert height() == 216_000

    def test_cannot_go_backwards(self) -> None:
        height = LedgerHeight(10)
        with pytest.raises(ValueError):
            height.advance(-1)
        with pytest.raises(ValueError):
            height.advance_to(5)

    def test_negative_start_rejected(self) -> None:
        with pytest.raises(ValueError):
            LedgerHeight(-1)
