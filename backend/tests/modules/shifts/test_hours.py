import pytest

from modules.shifts.exceptions import InvalidDateError, InvalidHoursError, InvalidRequirementsError
from modules.shifts.hours import (
    clamp_ranges,
    contains,
    covers,
    from_minutes,
    hour_slots,
    overlaps,
    to_minutes,
    validate_ranges,
    validate_requirements,
    validate_window,
    weekday_for,
)
from modules.shifts.models import HourRange, StaffingRequirement, Weekday


def _range(start, end):
    return HourRange(start_time=start, end_time=end)


def _req(start, end, minimum=1, optimal=2):
    return StaffingRequirement(
        start_time=start, end_time=end, min_workers=minimum, optimal_workers=optimal
    )


class TestMinutes:
    def test_round_trip_edges(self):
        assert to_minutes("00:00") == 0
        assert to_minutes("24:00") == 1440
        assert from_minutes(570) == "09:30"

    def test_numeric_not_lexicographic(self):
        """09:00 is before 10:00 even though compared as minutes."""
        assert to_minutes("09:00") < to_minutes("10:00")


class TestWeekday:
    @pytest.mark.parametrize("date,weekday", [
        ("2025-09-22", Weekday.MONDAY),
        ("2025-09-27", Weekday.SATURDAY),
        ("2025-09-28", Weekday.SUNDAY),
    ])
    def test_weekday_for(self, date, weekday):
        assert weekday_for(date) == weekday

    @pytest.mark.parametrize("date", ["2025-02-30", "22-09-2025", "tomorrow", "20250922", "2025-W39-1"])
    def test_invalid_dates(self, date):
        with pytest.raises(InvalidDateError):
            weekday_for(date)


class TestValidation:
    def test_window_must_be_ordered(self):
        validate_window("08:00", "20:00")
        with pytest.raises(InvalidHoursError):
            validate_window("20:00", "08:00")
        with pytest.raises(InvalidHoursError):
            validate_window("08:00", "08:00")

    def test_ranges_require_at_least_one(self):
        with pytest.raises(InvalidHoursError):
            validate_ranges([])

    def test_ranges_must_be_non_empty(self):
        with pytest.raises(InvalidHoursError):
            validate_ranges([_range("12:00", "12:00")])

    def test_ranges_must_fit_window(self):
        window = _range("08:00", "20:00")
        validate_ranges([_range("08:00", "20:00")], window)
        with pytest.raises(InvalidHoursError, match="outside shift hours"):
            validate_ranges([_range("07:00", "09:00")], window)

    def test_valid_requirements(self):
        validate_requirements([_req("08:00", "14:00"), _req("14:00", "20:00")], "08:00", "20:00")

    def test_requirements_required(self):
        with pytest.raises(InvalidRequirementsError):
            validate_requirements([], "08:00", "20:00")

    def test_optimal_below_minimum(self):
        with pytest.raises(InvalidRequirementsError, match="optimal must be >= minimum"):
            validate_requirements([_req("08:00", "12:00", 3, 2)], "08:00", "20:00")

    def test_negative_minimum(self):
        with pytest.raises(InvalidRequirementsError):
            validate_requirements([_req("08:00", "12:00", -1, 0)], "08:00", "20:00")

    def test_requirement_outside_window(self):
        with pytest.raises(InvalidRequirementsError, match="within shift hours"):
            validate_requirements([_req("07:00", "12:00")], "08:00", "20:00")

    def test_overlapping_requirements(self):
        with pytest.raises(InvalidRequirementsError, match="overlap"):
            validate_requirements(
                [_req("08:00", "14:00"), _req("13:00", "20:00")], "08:00", "20:00"
            )


class TestRangeHelpers:
    def test_overlaps_is_half_open(self):
        assert not overlaps(_range("08:00", "12:00"), _range("12:00", "16:00"))
        assert overlaps(_range("08:00", "12:01"), _range("12:00", "16:00"))

    def test_contains(self):
        assert contains(_range("08:00", "20:00"), _range("08:00", "20:00"))
        assert not contains(_range("08:00", "20:00"), _range("07:59", "09:00"))

    def test_covers(self):
        assert covers(_range("08:00", "09:00"), to_minutes("08:00"))
        assert not covers(_range("08:00", "09:00"), to_minutes("09:00"))

    def test_clamp_ranges(self):
        window = _range("10:00", "18:00")
        clamped = clamp_ranges(
            [_range("08:00", "12:00"), _range("13:00", "14:00"), _range("19:00", "21:00")],
            window,
        )
        assert clamped == [_range("10:00", "12:00"), _range("13:00", "14:00")]

    def test_hour_slots(self):
        assert hour_slots(_range("08:00", "11:00")) == [480, 540, 600]
