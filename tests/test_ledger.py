"""Tests for SubscriptionLedger charging and serialization."""

from membercard.ledger import SubscriptionLedger, SubscriptionRecord


# ---------------------------------------------------------------------------
# SubscriptionRecord
# ---------------------------------------------------------------------------


class TestSubscriptionRecord:
    def test_defaults(self) -> None:
        rec = SubscriptionRecord()
        assert rec.tier == 0
        assert rec.expiration_height == 0
        assert rec.charges == 0

    def test_active_before_expiration(self) -> None:
        rec = SubscriptionRecord(tier=1, expiration_height=100)
        assert rec.is_active(99) is True

    def test_inactive_at_expiration(self) -> None:
        rec = SubscriptionRecord(tier=1, expiration_height=100)
        assert rec.is_active(100) is False

    def test_tier_zero_never_active(self) -> None:
        rec = SubscriptionRecord(tier=0, expiration_height=100)
        assert rec.is_active(0) is False

    def test_from_dict_missing_fields(self) -> None:
        rec = SubscriptionRecord.from_dict({})
        assert rec.tier == 0
        assert rec.expiration_height == 0


# ---------------------------------------------------------------------------
# SubscriptionLedger
# ---------------------------------------------------------------------------


class TestSubscriptionLedger:
    def test_unknown_token_reads_as_unsubscribed(self) -> None:
        ledger = SubscriptionLedger()
        assert ledger.tier_of(1) == 0
        assert ledger.expiration_of(1) == 0

    def test_unknown_token_lookup_does_not_create_record(self) -> None:
        ledger = SubscriptionLedger()
        ledger.get(5)
        assert 5 not in ledger.records

    def test_charge_sets_tier_and_expiration(self) -> None:
        ledger = SubscriptionLedger()
        assert ledger.charge(1, 2, current_height=50, period=100) == 150
        assert ledger.tier_of(1) == 2
        assert ledger.expiration_of(1) == 150

    def test_charge_resets_rather_than_extends(self) -> None:
        ledger = SubscriptionLedger()
        ledger.charge(1, 1, current_height=0, period=100)
        assert ledger.charge(1, 1, current_height=30, period=100) == 130

    def test_charge_after_expiry(self) -> None:
        ledger = SubscriptionLedger()
        ledger.charge(1, 1, current_height=0, period=100)
        assert ledger.charge(1, 1, current_height=500, period=100) == 600

    def test_charge_counts(self) -> None:
        ledger = SubscriptionLedger()
        ledger.charge(1, 1, 0, 10)
        ledger.charge(1, 2, 5, 10)
        assert ledger.get(1).charges == 2

    def test_tokens_are_independent(self) -> None:
        ledger = SubscriptionLedger()
        ledger.charge(1, 1, 0, 100)
        ledger.charge(2, 3, 10, 100)
        assert ledger.tier_of(1) == 1
        assert ledger.expiration_of(2) == 110


class TestLedgerSerialization:
    def test_roundtrip(self) -> None:
        ledger = SubscriptionLedger()
        ledger.charge(1, 2, 10, 100)
        restored = SubscriptionLedger.from_dict(ledger.to_dict())
        assert restored.tier_of(1) == 2
        assert restored.expiration_of(1) == 110
        assert restored.get(1).charges == 1

    def test_from_dict_skips_non_dict_records(self) -> None:
        restored = SubscriptionLedger.from_dict({"1": "garbage", "2": {"tier": 1}})
        assert 1 not in restored.records
        assert restored.tier_of(2) == 1
