"""
Schedule assembly and the parse_hours entry point.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from ..models import DayKey, TimeRange, StructuredHours, ALL_DAYS, empty_schedule
from ..utils import get_logger
from .normalizer_hours import HoursNormalizer
from .closure import ClosureExtractor, ClosureResult
from .time_blocks import TimeBlockParser, TimeBlock


class ScheduleAssembler:
    """
    Merge closure and time blocks into one StructuredHours.

    - Qualified blocks append to each of their days
    - Unqualified blocks append to every day that is not closed
    - Closed days are forced to None last; closure always wins
    """

    @staticmethod
    def merge_ranges(ranges: Iterable[TimeRange]) -> Tuple[TimeRange, ...]:
        """Sort by open time and fold overlapping or repeated ranges together."""
        merged: List[TimeRange] = []
        for time_range in sorted(ranges, key=lambda r: (r.open_minutes, r.close_minutes)):
            if merged and time_range.open_minutes < merged[-1].close_minutes:
                last = merged[-1]
                merged[-1] = TimeRange(
                    open_minutes=last.open_minutes,
                    close_minutes=max(last.close_minutes, time_range.close_minutes)
                )
            else:
                merged.append(time_range)
        return tuple(merged)

    @classmethod
    def assemble(
        cls,
        raw_text: str,
        closure: ClosureResult,
        blocks: List[TimeBlock]
    ) -> StructuredHours:
        collected: Dict[DayKey, List[TimeRange]] = {}

        for block in blocks:
            if block.days:
                targets = block.days
            else:
                targets = [day for day in ALL_DAYS if day not in closure.closed_days]

            for day in targets:
                collected.setdefault(day, []).extend(block.ranges)

        schedule = empty_schedule()
        for day, ranges in collected.items():
            if ranges:
                schedule[day] = cls.merge_ranges(ranges)

        for day in closure.closed_days:
            schedule[day] = None

        return StructuredHours(
            raw_text=raw_text,
            schedule=schedule,
            closed_days=closure.closed_days,
            closed_label=closure.label,
        )


def parse_hours(raw_text: Optional[str]) -> Optional[StructuredHours]:
    """
    Parse free-form business hours text into a structured schedule.

    Returns None for missing or blank text. Text that yields nothing is
    still returned (all days None) so the raw text stays available; queries
    treat it as open.

    Raises:
        TypeError: raw_text is neither a string nor None
    """
    normalized = HoursNormalizer.normalize(raw_text)
    if normalized is None:
        return None

    closure = ClosureExtractor.extract(normalized)
    blocks = TimeBlockParser.parse(closure.remainder)
    hours = ScheduleAssembler.assemble(raw_text, closure, blocks)

    if hours.is_unparseable:
        get_logger().debug(f"No hours recognised in {raw_text!r}")

    return hours
