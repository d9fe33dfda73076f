"""Test WallClock and FixedClock."""

from datetime import datetime, timedelta, timezone

from skuff.core.clock import FixedClock, WallClock


class TestWallClock:
    def test_now_returns_utc(self):
        now = WallClock().now()
        assert now.tzinfo == timezone.utc

    def test_now_is_recent(self):
        diff = abs((datetime.now(timezone.utc) - WallClock().now()).total_seconds())
        assert diff < 1.0


class TestFixedClock:
    def test_default_start(self):
        assert FixedClock().now() == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_custom_start(self, fixed_clock):
        assert fixed_clock.now() == datetime(2025, 9, 1, 12, tzinfo=timezone.utc)

    def test_does_not_move_on_its_own(self, fixed_clock):
        assert fixed_clock.now() == fixed_clock.now()

    def test_advance(self, fixed_clock):
        start = fixed_clock.now()
        fixed_clock.advance(90)
        assert fixed_clock.now() - start == timedelta(seconds=90)

    def test_set_time_may_go_backwards(self, fixed_clock):
        earlier = datetime(2020, 1, 1, tzinfo=timezone.utc)
        fixed_clock.set_time(earlier)
        assert fixed_clock.now() == earlier
