"""Tests for break and day configuration validation."""

from datetime import time

import pytest

from app.exceptions import InvalidScheduleError, ScheduleValidationError
from app.models.schedule_template import BreakType
from app.schemas.schedule_template import (
    BreakSchema,
    DayConfiguration,
    copy_day_config,
    copy_day_to_all,
)

from conftest import office_days


def make_break(name, start, end, **kwargs) -> BreakSchema:
    return BreakSchema(name=name, start_time=start, end_time=end, **kwargs)


class TestBreak:
    def test_defaults(self):
        item = make_break("Pausa", time(12), time(12, 30))
        assert item.break_type == BreakType.REST
        assert item.is_paid is True
        assert item.is_required is False
        assert item.sort_order == 0
        assert item.minutes == 30

    def test_inverted_window(self):
        with pytest.raises(InvalidScheduleError):
            make_break("Pausa", time(13), time(12))

    def test_empty_window(self):
        with pytest.raises(InvalidScheduleError):
            make_break("Pausa", time(13), time(13))

    def test_blank_name(self):
        with pytest.raises(InvalidScheduleError):
            make_break("  ", time(12), time(13))

    def test_break_type_from_string(self):
        item = make_break("Rezo", time(12), time(12, 10), break_type="prayer")
        assert item.break_type == BreakType.PRAYER


class TestRegularDay:
    def test_valid_day(self):
        day = DayConfiguration(day_of_week=1, start_time=time(9), end_time=time(17))
        assert day.work_windows() == [(time(9), time(17))]
        assert day.total_minutes() == 480

    def test_missing_times(self):
        with pytest.raises(InvalidScheduleError):
            DayConfiguration(day_of_week=1, start_time=time(9))

    def test_inverted_times(self):
        with pytest.raises(InvalidScheduleError):
            DayConfiguration(day_of_week=1, start_time=time(17), end_time=time(9))

    def test_day_of_week_out_of_range(self):
        with pytest.raises(InvalidScheduleError):
            DayConfiguration(day_of_week=7, start_time=time(9), end_time=time(17))

    def test_non_working_day_ignores_times(self):
        day = DayConfiguration(
            day_of_week=0,
            is_working_day=False,
            start_time=time(17),
            end_time=time(9),
            breaks=[make_break("Pausa", time(12), time(13))],
        )
        assert day.start_time is None
        assert day.end_time is None
        assert day.breaks == []
        assert day.work_windows() == []
        assert day.total_minutes() == 0

    def test_unpaid_breaks_reduce_net_minutes(self):
        day = DayConfiguration(
            day_of_week=2,
            start_time=time(9),
            end_time=time(18),
            breaks=[
                make_break("Comida", time(14), time(15), is_paid=False),
                make_break("Café", time(11), time(11, 15)),
            ],
        )
        assert day.total_minutes() == 540
        assert day.unpaid_break_minutes() == 60
        assert day.net_minutes() == 480


class TestSplitDay:
    def split_day(self, **overrides) -> DayConfiguration:
        fields = dict(
            day_of_week=3,
            is_split_schedule=True,
            morning_start=time(9),
            morning_end=time(13),
            afternoon_start=time(15),
            afternoon_end=time(19),
        )
        fields.update(overrides)
        return DayConfiguration(**fields)

    def test_two_windows_480_minutes(self):
        day = self.split_day()
        assert day.work_windows() == [(time(9), time(13)), (time(15), time(19))]
        assert day.total_minutes() == 480

    def test_single_shift_times_cleared(self):
        day = self.split_day(start_time=time(8), end_time=time(20))
        assert day.start_time is None
        assert day.end_time is None

    def test_missing_afternoon(self):
        with pytest.raises(InvalidScheduleError):
            self.split_day(afternoon_end=None)

    def test_overlapping_shifts(self):
        with pytest.raises(InvalidScheduleError):
            self.split_day(morning_end=time(16))

    def test_back_to_back_shifts_allowed(self):
        day = self.split_day(morning_end=time(15))
        assert day.total_minutes() == 600

    def test_break_in_the_gap_is_rejected(self):
        with pytest.raises(InvalidScheduleError):
            self.split_day(breaks=[make_break("Comida", time(13, 30), time(14, 30))])

    def test_break_spanning_both_shifts_is_rejected(self):
        with pytest.raises(InvalidScheduleError):
            self.split_day(breaks=[make_break("Larga", time(12), time(16))])

    def test_break_in_afternoon(self):
        day = self.split_day(breaks=[make_break("Café", time(17), time(17, 15))])
        assert len(day.breaks) == 1


class TestBreakPlacement:
    def test_break_outside_working_hours(self):
        with pytest.raises(InvalidScheduleError):
            DayConfiguration(
                day_of_week=1,
                start_time=time(9),
                end_time=time(17),
                breaks=[make_break("Tarde", time(16, 30), time(17, 30))],
            )

    def test_overlap_detected_regardless_of_sort_order(self):
        with pytest.raises(InvalidScheduleError):
            DayConfiguration(
                day_of_week=1,
                start_time=time(9),
                end_time=time(17),
                breaks=[
                    make_break("B", time(12, 15), time(12, 45), sort_order=0),
                    make_break("A", time(12), time(12, 30), sort_order=1),
                ],
            )

    def test_adjacent_breaks_allowed(self):
        day = DayConfiguration(
            day_of_week=1,
            start_time=time(9),
            end_time=time(17),
            breaks=[
                make_break("Café", time(12, 30), time(13), sort_order=1),
                make_break("Pausa", time(12), time(12, 30), sort_order=0),
            ],
        )
        assert [b.name for b in day.ordered_breaks()] == ["Pausa", "Café"]

    def test_invalid_day_is_a_validation_error(self):
        with pytest.raises(ScheduleValidationError):
            DayConfiguration(day_of_week=1, start_time=time(18), end_time=time(9))


class TestCopyDay:
    def test_deep_copy_breaks_are_not_shared(self):
        source = DayConfiguration(
            day_of_week=1,
            start_time=time(9),
            end_time=time(17),
            breaks=[make_break("Comida", time(13), time(14))],
        )
        copied = copy_day_config(source, day_of_week=4)

        assert copied.day_of_week == 4
        assert source.day_of_week == 1
        assert copied.breaks == source.breaks
        assert copied.breaks is not source.breaks
        assert copied.breaks[0] is not source.breaks[0]

    def test_copy_keeps_day_when_not_given(self):
        source = DayConfiguration(day_of_week=2, start_time=time(9), end_time=time(17))
        assert copy_day_config(source).day_of_week == 2

    def test_copy_rejects_bad_day(self):
        source = DayConfiguration(day_of_week=2, start_time=time(9), end_time=time(17))
        with pytest.raises(InvalidScheduleError):
            copy_day_config(source, day_of_week=9)

    def test_copy_day_to_all(self):
        days = office_days()
        days[1] = DayConfiguration(
            day_of_week=1,
            start_time=time(8),
            end_time=time(15),
            breaks=[make_break("Café", time(10), time(10, 15))],
        )

        result = copy_day_to_all(days, source_day_of_week=1)

        assert [d.day_of_week for d in result] == list(range(7))
        for day in result:
            assert day.is_working_day
            assert day.start_time == time(8)
            assert day.end_time == time(15)
        assert len({id(d.breaks[0]) for d in result}) == 7
        # Input list is left untouched
        assert days[0].is_working_day is False

    def test_copy_day_to_all_needs_full_week(self):
        with pytest.raises(ScheduleValidationError):
            copy_day_to_all(office_days()[:6], source_day_of_week=1)
