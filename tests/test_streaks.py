"""Tests for streak continuity, longest streak and daily focus totals."""

from datetime import date, datetime, timedelta

from gridgoal.stats.streaks import (
    DateRange, HistoryEntry, StreakResult,
    compute_streak, longest_streak, session_dates, today_focus_seconds,
)


D = date(2025, 10, 18)


def ago(n: int) -> date:
    return D - timedelta(days=n)


def pause(start_ago: int, end_ago: int) -> DateRange:
    return DateRange(ago(start_ago), ago(end_ago))


# ═══════════════════════════════════════════════════════════════════════════
#  CURRENT STREAK
# ═══════════════════════════════════════════════════════════════════════════


class TestComputeStreak:

    def test_empty_history(self):
        assert compute_streak(set(), [pause(10, 0)], D) == StreakResult(0, False)

    def test_today_only(self):
        assert compute_streak({D}, [], D) == StreakResult(1, True)

    def test_today_pending_does_not_break(self):
        """Sessions D-2, D-1 and nothing yet today → 2, not counted."""
        assert compute_streak({ago(2), ago(1)}, [], D) == StreakResult(2, False)

    def test_today_pending_is_not_counted(self):
        result = compute_streak({ago(1)}, [], D)
        assert result.current_streak == 1
        assert result.today_counted is False

    def test_pause_bridged(self):
        """D-5, pause D-4..D-2, D-1, D → 6, counted."""
        dates = {ago(5), ago(1), D}
        assert compute_streak(dates, [pause(4, 2)], D) == StreakResult(6, True)

    def test_gap_breaks_streak(self):
        dates = {ago(5), ago(4), ago(2), ago(1), D}
        assert compute_streak(dates, [], D) == StreakResult(3, True)

    def test_last_session_two_days_ago(self):
        assert compute_streak({ago(3), ago(2)}, [], D) == StreakResult(0, False)

    def test_pause_covering_yesterday_bridges_to_older_days(self):
        dates = {ago(3), ago(2)}
        assert compute_streak(dates, [pause(1, 1)], D) == StreakResult(3, False)

    def test_pause_covering_today_does_not_extend(self):
        assert compute_streak({ago(1)}, [pause(0, 0)], D) == StreakResult(1, False)
        assert compute_streak({D}, [pause(3, 0)], D) == StreakResult(1, True)

    def test_pause_without_earlier_session_is_not_credited(self):
        """Paused days only count when a logged day lies beyond them."""
        dates = {ago(1), D}
        assert compute_streak(dates, [pause(30, 2)], D) == StreakResult(2, True)

    def test_pause_then_real_gap(self):
        dates = {ago(6), ago(1)}
        assert compute_streak(dates, [pause(4, 2)], D) == StreakResult(1, False)

    def test_overlapping_unsorted_pauses(self):
        dates = {ago(10), ago(1)}
        pauses = [pause(5, 2), pause(9, 6), pause(7, 4)]
        assert compute_streak(dates, pauses, D) == StreakResult(10, False)

    def test_future_sessions_ignored(self):
        dates = {D + timedelta(days=2), ago(1)}
        assert compute_streak(dates, [], D) == StreakResult(1, False)

    def test_adding_pause_over_gap_never_decreases(self):
        dates = {ago(9), ago(8), ago(4), ago(3), ago(1)}
        before = compute_streak(dates, [], D).current_streak
        for start, end in [(2, 2), (7, 5), (7, 2), (20, 0)]:
            after = compute_streak(dates, [pause(start, end)], D).current_streak
            assert after >= before

    def test_removing_todays_session(self):
        dates = {ago(3), ago(2), ago(1), D}
        with_today = compute_streak(dates, [], D)
        without_today = compute_streak(dates - {D}, [], D)
        assert with_today == StreakResult(4, True)
        assert without_today == StreakResult(3, False)


# ═══════════════════════════════════════════════════════════════════════════
#  LONGEST STREAK / HISTORY HELPERS
# ═══════════════════════════════════════════════════════════════════════════


class TestLongestStreak:

    def test_empty(self):
        assert longest_streak(set(), []) == 0

    def test_single_day(self):
        assert longest_streak({ago(50)}, []) == 1

    def test_picks_longest_run(self):
        dates = {ago(20), ago(19), ago(18), ago(17), ago(10), ago(9), D}
        assert longest_streak(dates, []) == 4

    def test_pause_bridges_run(self):
        dates = {ago(10), ago(9), ago(5), ago(4)}
        assert longest_streak(dates, [pause(8, 6)]) == 7

    def test_partially_paused_gap_breaks(self):
        dates = {ago(10), ago(9), ago(5), ago(4)}
        assert longest_streak(dates, [pause(8, 7)]) == 2


class TestHistoryHelpers:

    HISTORY = [
        HistoryEntry(datetime(2025, 10, 16, 9, 0), 1500),
        HistoryEntry(datetime(2025, 10, 18, 8, 30), 1500),
        HistoryEntry(datetime(2025, 10, 18, 23, 50), 1200),  # crosses midnight
        HistoryEntry(datetime(2025, 10, 17, 23, 59), 600),
    ]

    def test_session_dates(self):
        assert session_dates(self.HISTORY) == {ago(2), ago(1), D}

    def test_today_focus(self):
        assert today_focus_seconds(self.HISTORY, D) == 2700

    def test_today_focus_empty(self):
        assert today_focus_seconds([], D) == 0

    def test_streak_from_history(self):
        result = compute_streak(session_dates(self.HISTORY), [], D)
        assert result == StreakResult(3, True)
