"""
Openness queries against structured hours.
Every function here is pure; nothing is cached or mutated.
"""

from datetime import datetime, timedelta
from typing import Optional, Sequence, Union

import pytz

from ..models import DayKey, TimeRange, StructuredHours, ALL_DAYS, WEEK_ORDER, MINUTES_PER_DAY
from ..utils import ClockValidator

DayArg = Optional[Union[DayKey, str]]

# Query hours 0-5 are read as the tail of the previous service day
AFTER_MIDNIGHT_LAST_HOUR = 5


def _any_range_contains(ranges: Sequence[TimeRange], hour: int, minute: int) -> bool:
    target = hour * 60 + minute
    candidates = [target]
    if hour <= AFTER_MIDNIGHT_LAST_HOUR:
        candidates.append(target + MINUTES_PER_DAY)

    return any(r.contains(candidate) for r in ranges for candidate in candidates)


def _representative_ranges(hours: StructuredHours) -> Optional[Sequence[TimeRange]]:
    """First day in canonical order that has ranges."""
    for day in ALL_DAYS:
        ranges = hours.schedule.get(day)
        if ranges:
            return ranges
    return None


def is_open(hours: Optional[StructuredHours], day: DayArg = None, time: Optional[str] = None) -> bool:
    """
    Check whether a shop is open on a day and/or at a clock time.

    Args:
        hours: Parsed hours, or None when unknown
        day: Day key ("mon" … "holiday"), UI code ("Mon") or glyph ("月"); None skips the day check
        time: "HH:MM"; None skips the time check

    Returns:
        True if every supplied condition holds. Unknown or unparseable hours
        count as open; a day without ranges is closed.

    Raises:
        TypeError / ValueError: day or time is not a valid argument
    """
    day_key = DayKey.parse(day) if day is not None else None
    clock = ClockValidator.parse_clock(time) if time is not None else None

    if hours is None or hours.is_unparseable:
        return True

    if day_key is not None:
        ranges = hours.ranges_for(day_key)
        if ranges is None:
            return False
    else:
        ranges = _representative_ranges(hours)
        # No day carries hours to test the time against
        if ranges is None:
            return True

    if clock is None:
        return True

    return _any_range_contains(ranges, *clock)


def is_shop_open(structured_hours: Optional[StructuredHours], day: DayArg, time: Optional[str]) -> bool:
    """Filter entry point used by the map UI."""
    return is_open(structured_hours, day, time)


def is_open_at(hours: Optional[StructuredHours], when: datetime) -> bool:
    """
    Check openness at a wall-clock moment.

    Unlike is_open, this follows the calendar: at Tuesday 01:00 a shop is
    open if Tuesday's ranges cover 01:00 or Monday's cover 25:00.
    Public holidays are not detected; the weekday schedule is used.
    """
    if not isinstance(when, datetime):
        raise TypeError(f"when must be a datetime, got {type(when).__name__}")

    if hours is None or hours.is_unparseable:
        return True

    today = WEEK_ORDER[when.weekday()]
    minute_of_day = when.hour * 60 + when.minute
    today_ranges = hours.ranges_for(today) or ()
    if any(r.contains(minute_of_day) for r in today_ranges):
        return True

    yesterday = WEEK_ORDER[(when - timedelta(days=1)).weekday()]
    yesterday_ranges = hours.ranges_for(yesterday) or ()
    return any(r.contains(minute_of_day + MINUTES_PER_DAY) for r in yesterday_ranges)


def now_in(timezone: str) -> datetime:
    """Current time in the given timezone (e.g. "Asia/Tokyo")."""
    return datetime.now(pytz.timezone(timezone))
