"""Tests for the cycle status summary."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from lunara.cycle.projector import CycleModel, DateRangeError, PhaseLabel, classify_day
from lunara.cycle.status import cycle_status, upcoming_period_starts
from lunara.cycle.tests.conftest import ANCHOR_DATE


class TestCycleStatus:
    def test_mid_follicular_day(self, default_model: CycleModel) -> None:
        status = cycle_status(date(2026, 1, 10), default_model, anchor=ANCHOR_DATE)
        assert status.cycle_start == ANCHOR_DATE
        assert status.cycle_day == 10
        assert status.phase == PhaseLabel.follicular
        assert status.period_end == date(2026, 1, 5)
        assert status.ovulation_date == date(2026, 1, 14)
        assert status.next_period_start == date(2026, 1, 29)
        assert status.days_until_next_period == 19
        assert not status.is_period_day

    def test_fertile_window_ends_on_ovulation(self, default_model: CycleModel) -> None:
        status = cycle_status(date(2026, 1, 10), default_model, anchor=ANCHOR_DATE)
        assert status.fertile_window_start == date(2026, 1, 9)
        assert status.fertile_window_end == date(2026, 1, 14)
        assert status.in_fertile_window

    def test_custom_fertile_window_length(self, default_model: CycleModel) -> None:
        status = cycle_status(
            date(2026, 1, 10), default_model, anchor=ANCHOR_DATE, fertile_window_days=3
        )
        assert status.fertile_window_start == date(2026, 1, 12)
        assert not status.in_fertile_window

    def test_period_day(self, default_model: CycleModel) -> None:
        status = cycle_status(date(2026, 1, 3), default_model, anchor=ANCHOR_DATE)
        assert status.phase == PhaseLabel.menstrual
        assert status.is_period_day

    def test_first_day_of_next_cycle(self, default_model: CycleModel) -> None:
        status = cycle_status(date(2026, 1, 29), default_model, anchor=ANCHOR_DATE)
        assert status.cycle_start == date(2026, 1, 29)
        assert status.cycle_day == 1
        assert status.phase == PhaseLabel.menstrual
        assert status.days_until_next_period == 28

    def test_default_baseline(self, default_model: CycleModel) -> None:
        status = cycle_status(date(2026, 3, 15), default_model)
        assert status.cycle_start == date(2026, 3, 1)
        assert status.cycle_day == 15
        assert status.phase == PhaseLabel.luteal
        assert status.days_until_next_period == 14

    def test_reference_before_anchor(self, default_model: CycleModel) -> None:
        status = cycle_status(date(2025, 12, 31), default_model, anchor=ANCHOR_DATE)
        assert status.cycle_day == 28
        assert status.next_period_start == ANCHOR_DATE
        assert status.days_until_next_period == 1

    def test_phase_matches_calendar(self, long_model: CycleModel) -> None:
        start = date(2026, 1, 1)
        for offset in range(80):
            day = start + timedelta(days=offset)
            status = cycle_status(day, long_model, anchor=ANCHOR_DATE)
            assert status.phase == classify_day(day, day, long_model, anchor=ANCHOR_DATE)
            assert status.phase != PhaseLabel.predicted_period

    def test_rejects_non_positive_fertile_window(self, default_model: CycleModel) -> None:
        with pytest.raises(ValueError):
            cycle_status(date(2026, 1, 10), default_model, fertile_window_days=0)


class TestUpcomingPeriodStarts:
    def test_next_three(self, default_model: CycleModel) -> None:
        starts = upcoming_period_starts(date(2026, 1, 10), default_model, anchor=ANCHOR_DATE)
        assert starts == [date(2026, 1, 29), date(2026, 2, 26), date(2026, 3, 26)]

    def test_zero_count(self, default_model: CycleModel) -> None:
        assert upcoming_period_starts(date(2026, 1, 10), default_model, count=0) == []

    def test_all_after_reference(self, long_model: CycleModel) -> None:
        reference = date(2026, 5, 17)
        starts = upcoming_period_starts(reference, long_model, count=5)
        assert all(s > reference for s in starts)
        assert all((b - a).days == 35 for a, b in zip(starts, starts[1:]))

    def test_stops_at_end_of_calendar(self, default_model: CycleModel) -> None:
        starts = upcoming_period_starts(
            date(9999, 11, 1), default_model, count=5, anchor=date(9999, 11, 1)
        )
        assert starts == [date(9999, 11, 29), date(9999, 12, 27)]


class TestCalendarRange:
    def test_first_month_of_calendar(self, default_model: CycleModel) -> None:
        status = cycle_status(date(1, 1, 15), default_model)
        assert status.cycle_start == date.min
        assert status.cycle_day == 15
        assert status.phase == PhaseLabel.luteal
        assert status.fertile_window_start == date(1, 1, 9)
        assert status.next_period_start == date(1, 1, 29)

    def test_dates_past_end_of_calendar_raise(self, default_model: CycleModel) -> None:
        # ovulation of the cycle starting Dec 27 would be Jan 9, 10000
        with pytest.raises(DateRangeError):
            cycle_status(date(9999, 12, 30), default_model, anchor=date(9999, 12, 27))
