"""
Time arithmetic for shift windows and hour ranges.

All comparisons are done on minutes since midnight, so ``"9:00"``-style
inputs never compare lexicographically.
"""

import re
from datetime import date as date_type
from typing import Sequence

from .exceptions import InvalidDateError, InvalidHoursError, InvalidRequirementsError
from .models import DATE_PATTERN, HourRange, StaffingRequirement, Weekday

_WEEKDAYS = list(Weekday)


def to_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def from_minutes(value: int) -> str:
    return f"{value // 60:02d}:{value % 60:02d}"


def weekday_for(date: str) -> Weekday:
    """Weekday of a ``YYYY-MM-DD`` date."""
    if not re.fullmatch(DATE_PATTERN, date):
        raise InvalidDateError(date)
    try:
        parsed = date_type.fromisoformat(date)
    except ValueError:
        raise InvalidDateError(date)
    return _WEEKDAYS[parsed.weekday()]


def validate_date(date: str) -> str:
    weekday_for(date)
    return date


def validate_window(open_time: str, close_time: str) -> None:
    if to_minutes(open_time) >= to_minutes(close_time):
        raise InvalidHoursError(
            f"Open time {open_time} must be before close time {close_time}"
        )


def validate_ranges(
    ranges: Sequence[HourRange],
    window: HourRange | None = None,
) -> None:
    """
    Check that every range is non-empty and, given a window, inside it.

    Raises:
        InvalidHoursError: On the first offending range
    """
    if not ranges:
        raise InvalidHoursError("At least one hour range is required")

    for hour_range in ranges:
        start, end = to_minutes(hour_range.start_time), to_minutes(hour_range.end_time)
        if start >= end:
            raise InvalidHoursError(
                f"Invalid hour range {hour_range.start_time}-{hour_range.end_time}: "
                "start time must be before end time"
            )
        if window is not None and not contains(window, hour_range):
            raise InvalidHoursError(
                f"Hour range {hour_range.start_time}-{hour_range.end_time} is outside "
                f"shift hours ({window.start_time} - {window.end_time})"
            )


def validate_requirements(
    requirements: Sequence[StaffingRequirement],
    open_time: str,
    close_time: str,
) -> None:
    """
    Validate a template's staffing requirements against its window.

    Requirements must be non-empty, have ``0 <= min <= optimal``, non-empty
    ranges inside the window, and must not overlap one another.
    """
    if not requirements:
        raise InvalidRequirementsError("At least one hourly requirement is needed")

    shift_start, shift_end = to_minutes(open_time), to_minutes(close_time)

    for i, req in enumerate(requirements, start=1):
        if req.min_workers < 0 or req.optimal_workers < req.min_workers:
            raise InvalidRequirementsError(
                f"Requirement {i}: optimal must be >= minimum >= 0"
            )

        start, end = to_minutes(req.start_time), to_minutes(req.end_time)
        if start >= end:
            raise InvalidRequirementsError(
                f"Requirement {i}: start time must be before end time"
            )
        if start < shift_start or end > shift_end:
            raise InvalidRequirementsError(
                f"Requirement {i}: range must be within shift hours ({open_time} - {close_time})"
            )

        for j, other in enumerate(requirements[i:], start=i + 1):
            if overlaps(req, other):
                raise InvalidRequirementsError(
                    f"Requirements {i} and {j}: time ranges overlap "
                    f"({req.start_time}-{req.end_time} and {other.start_time}-{other.end_time})"
                )


def contains(window: HourRange, hour_range: HourRange) -> bool:
    return (
        to_minutes(window.start_time) <= to_minutes(hour_range.start_time)
        and to_minutes(hour_range.end_time) <= to_minutes(window.end_time)
    )


def overlaps(a: HourRange, b: HourRange) -> bool:
    return (
        to_minutes(a.start_time) < to_minutes(b.end_time)
        and to_minutes(a.end_time) > to_minutes(b.start_time)
    )


def covers(hour_range: HourRange, minute: int) -> bool:
    return to_minutes(hour_range.start_time) <= minute < to_minutes(hour_range.end_time)


def clamp_ranges(ranges: Sequence[HourRange], window: HourRange) -> list[HourRange]:
    """
    Clip each range to the window, dropping ranges left empty.

    Ranges already inside the window are returned unchanged.
    """
    low, high = to_minutes(window.start_time), to_minutes(window.end_time)
    clamped = []
    for hour_range in ranges:
        if contains(window, hour_range):
            clamped.append(hour_range)
            continue
        start = max(to_minutes(hour_range.start_time), low)
        end = min(to_minutes(hour_range.end_time), high)
        if start < end:
            clamped.append(HourRange(start_time=from_minutes(start), end_time=from_minutes(end)))
    return clamped


def hour_slots(window: HourRange) -> list[int]:
    """Start minute of every hour slot in the window."""
    return list(range(to_minutes(window.start_time), to_minutes(window.end_time), 60))
