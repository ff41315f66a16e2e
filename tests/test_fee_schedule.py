"""Tests for TierFeeSchedule ladder rules and serialization."""

import pytest

from membercard.errors import FeeNotIncreasing, InvalidFee, InvalidTier, TierGap
from membercard.fee_schedule import TierFeeSchedule


def _ladder(*fees: int) -> TierFeeSchedule:
    """Build a schedule with tiers 1..n priced in order."""
    schedule = TierFeeSchedule()
    for tier, fee in enumerate(fees, start=1):
        schedule.set_fee(tier, fee)
    return schedule


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


class TestFeeLookup:
    def test_unset_tier_is_zero(self) -> None:
        assert TierFeeSchedule().fee(7) == 0

    def test_tier_zero_is_zero(self) -> None:
        assert _ladder(10).fee(0) == 0

    def test_set_fee_is_returned(self) -> None:
        schedule = _ladder(10, 20, 35)
        assert schedule.fee(1) == 10
        assert schedule.fee(2) == 20
        assert schedule.fee(3) == 35

    def test_is_enabled(self) -> None:
        schedule = _ladder(10)
        assert schedule.is_enabled(1) is True
        assert schedule.is_enabled(2) is False

    def test_highest_tier(self) -> None:
        assert TierFeeSchedule().highest_tier == 0
        assert _ladder(10, 20, 30).highest_tier == 3


# ---------------------------------------------------------------------------
# Ladder rules
# ---------------------------------------------------------------------------


class TestSetFee:
    def test_tier_zero_rejected(self) -> None:
        with pytest.raises(InvalidTier) as exc_info:
            _ladder(10).set_fee(0, 5)
        assert exc_info.value.tier == 0

    def test_negative_tier_rejected(self) -> None:
        with pytest.raises(InvalidTier):
            TierFeeSchedule().set_fee(-1, 5)

    def test_negative_fee_rejected(self) -> None:
        with pytest.raises(InvalidFee):
            TierFeeSchedule().set_fee(1, -5)

    def test_tier_one_needs_positive_fee(self) -> None:
        with pytest.raises(FeeNotIncreasing):
            TierFeeSchedule().set_fee(1, 0)

    def test_higher_tier_cannot_be_cheaper(self) -> None:
        schedule = _ladder(10)
        with pytest.raises(FeeNotIncreasing) as exc_info:
            schedule.set_fee(2, 5)
        assert exc_info.value.previous_fee == 10
        assert schedule.fee(2) == 0

    def test_equal_fee_rejected(self) -> None:
        with pytest.raises(FeeNotIncreasing):
            _ladder(10).set_fee(2, 10)

    def test_skipped_tier_rejected(self) -> None:
        schedule = _ladder(10)
        with pytest.raises(TierGap) as exc_info:
            schedule.set_fee(3, 30)
        assert exc_info.value.tier == 3
        assert schedule.fee(3) == 0

    def test_gap_on_empty_schedule(self) -> None:
        with pytest.raises(TierGap):
            TierFeeSchedule().set_fee(2, 10)

    def test_overwrite_own_fee(self) -> None:
        schedule = _ladder(10, 20)
        schedule.set_fee(2, 25)
        assert schedule.fee(2) == 25

    def test_overwrite_checks_only_predecessor(self) -> None:
        """Raising a lower tier above the next one is allowed at call time."""
        schedule = _ladder(10, 20)
        schedule.set_fee(1, 50)
        assert schedule.fee(1) == 50
        assert schedule.fee(2) == 20

    def test_failed_set_leaves_schedule_unchanged(self) -> None:
        schedule = _ladder(10, 20)
        with pytest.raises(FeeNotIncreasing):
            schedule.set_fee(2, 10)
        assert schedule.fees == {1: 10, 2: 20}


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


class TestScheduleSerialization:
    def test_to_dict_uses_string_keys(self) -> None:
        assert _ladder(10, 20).to_dict() == {"1": 10, "2": 20}

    def test_from_dict(self) -> None:
        schedule = TierFeeSchedule.from_dict({"1": 10, "2": "20"})
        assert schedule.fee(2) == 20
        assert schedule.highest_tier == 2
