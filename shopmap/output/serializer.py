"""
Persisted layout for structured hours.
Builds the "hours_structured" block stored with each shop, and reads it back.

    {
      "text": "月～金 11:00～14:00 / 17:00～22:00 定休日:日",
      "parsed": {"mon": "11:00～14:00 / 17:00～22:00", ..., "sun": null},
      "closed": "日"
    }

Close times past midnight stay in extended form ("26:00"); only
format_display_range converts them for people.
"""

from typing import Any, Dict, Optional

from ..models import DayKey, TimeRange, StructuredHours, ALL_DAYS, MINUTES_PER_DAY, format_minutes
from ..utils import get_logger
from ..utils.patterns import PERSISTED_RANGE_PATTERN, RANGE_SEPARATOR
from ..services.normalizer_hours import HoursNormalizer
from ..services.closure import ClosureExtractor
from ..services.time_blocks import TimeBlockParser

# Separator between ranges of one day
RANGE_JOINER = ' / '


def format_day(ranges) -> Optional[str]:
    """Persisted text for one day's ranges, or None."""
    if not ranges:
        return None
    return RANGE_JOINER.join(r.to_text() for r in ranges)


def to_persisted(hours: Optional[StructuredHours]) -> Optional[Dict[str, Any]]:
    """Serialize StructuredHours to the data-file layout."""
    if hours is None:
        return None

    data: Dict[str, Any] = {
        'text': hours.raw_text,
        'parsed': {day.value: format_day(hours.schedule.get(day)) for day in ALL_DAYS},
    }
    if hours.closed_label:
        data['closed'] = hours.closed_label
    return data


def parse_day(value: Optional[str]) -> Optional[tuple]:
    """
    Read one day's persisted text back into TimeRanges.
    Older files may hold "17:00-02:00" style ranges; they are normalized the
    same way fresh text is.
    """
    if not value:
        return None

    normalized = HoursNormalizer.normalize(value)
    if normalized is None:
        return None

    ranges = []
    for match in PERSISTED_RANGE_PATTERN.finditer(normalized):
        open_h, open_m, close_h, close_m = (int(g) for g in match.groups())
        time_range = TimeBlockParser.to_range(open_h, open_m, close_h, close_m)
        if time_range is None:
            get_logger().debug(f"Skipping persisted range {match.group(0)!r}")
            continue
        ranges.append(time_range)

    return tuple(sorted(ranges, key=lambda r: r.open_minutes)) or None


def from_persisted(data: Optional[Dict[str, Any]]) -> Optional[StructuredHours]:
    """Rebuild StructuredHours from a persisted block."""
    if not data:
        return None

    parsed = data.get('parsed') or {}
    schedule = {}
    for day in ALL_DAYS:
        schedule[day] = parse_day(parsed.get(day.value))

    label = data.get('closed') or None
    closed_days = frozenset()
    if label:
        _, resolved = ClosureExtractor.resolve_label(label)
        # A day that still carries hours was not really closed
        closed_days = frozenset(day for day in resolved if schedule[day] is None)

    return StructuredHours(
        raw_text=data.get('text') or '',
        schedule=schedule,
        closed_days=closed_days,
        closed_label=label,
    )


def format_display_range(time_range: TimeRange) -> str:
    """Human-facing text: "17:00～26:00" becomes "17:00～02:00"."""
    close = time_range.close_minutes
    if close > MINUTES_PER_DAY:
        close -= MINUTES_PER_DAY
    return f"{format_minutes(time_range.open_minutes)}{RANGE_SEPARATOR}{format_minutes(close)}"


# Labels used by the list view
DAY_LABELS: Dict[DayKey, str] = {
    DayKey.MON: '月',
    DayKey.TUE: '火',
    DayKey.WED: '水',
    DayKey.THU: '木',
    DayKey.FRI: '金',
    DayKey.SAT: '土',
    DayKey.SUN: '日',
    DayKey.HOLIDAY: '祝',
}


def format_display(hours: Optional[StructuredHours]) -> Dict[str, str]:
    """Day label → display text for every day ("定休日" for closed, "-" for unknown)."""
    display = {}
    for day in ALL_DAYS:
        label = DAY_LABELS[day]
        if hours is None:
            display[label] = '-'
            continue

        ranges = hours.schedule.get(day)
        if day in hours.closed_days:
            display[label] = '定休日'
        elif ranges:
            display[label] = RANGE_JOINER.join(format_display_range(r) for r in ranges)
        else:
            display[label] = '-'
    return display
