"""
Unit tests for RateTracker.

Uses a manually advanced clock, so no test sleeps.
"""

import pytest

from scb_catalog.services.rate_tracker import RateTracker


@pytest.fixture
def tracker(fake_clock):
    return RateTracker(window_seconds=10.0, max_calls=10, clock=fake_clock)


class TestRecord:
    """Test record()."""

    def test_record_returns_calls_within_window(self, tracker, fake_clock):
        """Should return every call younger than the window, oldest first."""
        first = fake_clock.now
        tracker.record()
        fake_clock.advance(3)
        calls = tracker.record()

        assert calls == [first, first + 3]

    def test_record_drops_calls_older_than_window(self, tracker, fake_clock):
        """Calls 10+ seconds old should be purged on the next record."""
        tracker.record()
        fake_clock.advance(4)
        tracker.record()
        fake_clock.advance(7)  # first call is now 11s old
        calls = tracker.record()

        assert len(calls) == 2
        assert calls[0] == fake_clock.now - 7

    def test_record_accepts_explicit_timestamp(self, tracker):
        """Should use the given timestamp instead of the clock."""
        calls = tracker.record(now=5.0)

        assert calls == [5.0]

    def test_len_counts_live_calls(self, tracker, fake_clock):
        for _ in range(3):
            tracker.record()
        assert len(tracker) == 3

        fake_clock.advance(10)
        assert len(tracker) == 0


class TestTimeUntilSlotFree:
    """Test time_until_slot_free()."""

    def test_zero_when_window_not_full(self, tracker):
        """Fewer than max_calls calls means no wait."""
        for _ in range(9):
            tracker.record()

        assert tracker.time_until_slot_free() == 0.0

    def test_wait_after_ten_calls_in_two_seconds(self, tracker, fake_clock):
        """Ten calls within 2s should require waiting ~10 - elapsed seconds."""
        start = fake_clock.now
        for _ in range(10):
            tracker.record()
            fake_clock.advance(0.2)

        elapsed = fake_clock.now - start
        wait = tracker.time_until_slot_free()

        assert wait > 0
        assert wait == pytest.approx(10.0 - elapsed)

    def test_zero_after_quiet_window(self, tracker, fake_clock):
        """No calls for 10+ seconds means no wait."""
        for _ in range(10):
            tracker.record()

        fake_clock.advance(10.5)

        assert tracker.time_until_slot_free() == 0.0

    def test_never_negative(self, tracker):
        for i in range(10):
            tracker.record(now=float(i) * 0.1)

        # Oldest call exactly at the window edge is purged
        assert tracker.time_until_slot_free(now=10.0) == 0.0
        assert tracker.time_until_slot_free(now=9.95) >= 0.0


class TestValidation:

    def test_rejects_non_positive_window(self):
        with pytest.raises(ValueError, match="window_seconds"):
            RateTracker(window_seconds=0)

    def test_rejects_non_positive_max_calls(self):
        with pytest.raises(ValueError, match="max_calls"):
            RateTracker(max_calls=0)
