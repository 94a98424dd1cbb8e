# Area: Timing Tests
"""Tests for CountdownBoard — one live countdown per entity."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

from carebody._timing.clock import ManualClock, ManualScheduler
from carebody._timing.countdown_board import CountdownBoard


START = datetime(2025, 1, 9, tzinfo=timezone.utc)


def make_board():
    clock = ManualClock(START)
    scheduler = ManualScheduler(clock)
    return CountdownBoard(clock=clock, scheduler=scheduler), scheduler


class TestCountdownBoard:
    """Unit tests for CountdownBoard."""

    def test_empty_initially(self):
        board, _ = make_board()
        assert board.active_ids() == []

    def test_show_tracks_countdown(self):
        board, _ = make_board()
        countdown = board.show("c1", START + timedelta(minutes=1), MagicMock())
        assert board.get("c1") is countdown
        assert board.active_ids() == ["c1"]

    def test_show_replaces_existing_timer(self):
        board, scheduler = make_board()
        first_tick, second_tick = MagicMock(), MagicMock()
        first = board.show("c1", START + timedelta(minutes=1), first_tick)
        second = board.show("c1", START + timedelta(minutes=2), second_tick)

        scheduler.advance(3)
        assert first.cancelled
        assert first_tick.call_count == 1
        assert second_tick.call_count == 4
        assert board.get("c1") is second
        assert scheduler.active_calls == 1

    def test_expiry_removes_entry(self):
        board, scheduler = make_board()
        on_expired = MagicMock()
        board.show("c1", START + timedelta(seconds=2), MagicMock(), on_expired)
        scheduler.advance(5)
        on_expired.assert_called_once_with()
        assert board.get("c1") is None

    def test_past_target_not_tracked(self):
        board, _ = make_board()
        on_expired = MagicMock()
        board.show("c1", START - timedelta(days=1), MagicMock(), on_expired)
        on_expired.assert_called_once_with()
        assert board.get("c1") is None

    def test_missing_target_not_tracked(self):
        board, scheduler = make_board()
        on_tick = MagicMock()
        board.show("c1", None, on_tick)
        assert board.get("c1") is None
        assert scheduler.active_calls == 0
        on_tick.assert_not_called()

    def test_cancel_one(self):
        board, scheduler = make_board()
        keep_tick, drop_tick = MagicMock(), MagicMock()
        board.show("keep", START + timedelta(minutes=1), keep_tick)
        board.show("drop", START + timedelta(minutes=1), drop_tick)

        board.cancel("drop")
        scheduler.advance(2)
        assert board.active_ids() == ["keep"]
        assert keep_tick.call_count == 3
        assert drop_tick.call_count == 1

    def test_cancel_unknown_is_noop(self):
        board, _ = make_board()
        # Should not raise
        board.cancel("missing")

    def test_clear_cancels_all(self):
        board, scheduler = make_board()
        ticks = [MagicMock() for _ in range(3)]
        for i, on_tick in enumerate(ticks):
            board.show(f"c{i}", START + timedelta(minutes=5), on_tick)

        board.clear()
        scheduler.advance(10)
        assert board.active_ids() == []
        assert scheduler.active_calls == 0
        assert all(t.call_count == 1 for t in ticks)
