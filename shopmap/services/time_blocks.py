"""
Time-block parsing.
Extracts HH:MM～HH:MM ranges and the days each one applies to.
"""

import re
from typing import FrozenSet, List, Optional

from ..models import DayKey, TimeRange, MINUTES_PER_DAY, CLOSE_CEILING
from ..utils import get_logger
from ..utils.patterns import (
    TIME_RANGE_PATTERN,
    ALL_DAY_PATTERN,
    BRACKET_QUALIFIER_PATTERN,
    HARD_DELIMITER_PATTERN,
    DAY_ONLY_PATTERN,
    EXCLUSION_WORDS,
)
from .day_resolver import DayTokenResolver


# One pass over a segment: time ranges, 24-hour markers, bracketed qualifiers
TOKEN_PATTERN = re.compile(
    '(?P<time>' + TIME_RANGE_PATTERN.pattern + ')'
    '|(?P<all_day>' + ALL_DAY_PATTERN.pattern + ')'
    '|(?P<bracket>' + BRACKET_QUALIFIER_PATTERN.pattern + ')'
)


class TimeBlock:
    """Time ranges sharing one day qualifier. Empty days means unqualified."""

    def __init__(self, days: FrozenSet[DayKey] = frozenset(), ranges: Optional[List[TimeRange]] = None):
        self.days = set(days)
        self.ranges: List[TimeRange] = list(ranges or [])
        # Set once a trailing "(土・日)" has claimed this block
        self.sealed = False

    def __eq__(self, other):
        if not isinstance(other, TimeBlock):
            return NotImplemented
        return self.days == other.days and self.ranges == other.ranges

    def __repr__(self):
        days = sorted(day.value for day in self.days)
        ranges = [r.to_text() for r in self.ranges]
        return f"TimeBlock(days={days}, ranges={ranges})"


class TimeBlockParser:
    """
    Parse the time ranges of a normalized text and attribute them to days.

    Within a segment (text between hard delimiters such as newlines or ■):
    - a qualifier before times opens a new block: "月～金 11:00～22:00",
      "（土・日）17:00～23:00"
    - a bracket right after unqualified times qualifies them:
      "11:00～14:00 / 17:00～22:00（土・日）"
    - further times join the current block (lunch + dinner)
    """

    @staticmethod
    def to_range(
        open_h: int,
        open_m: int,
        close_h: int,
        close_m: int,
        next_day: bool = False
    ) -> Optional[TimeRange]:
        """
        Convert clock parts to a TimeRange in extended-hour form.

        A close hour of 24-29 is already extended and passes through. A
        close before the open (17:00～02:00) or marked 翌 rolls over to the
        next day. Returns None for values that make no sense.
        """
        if open_m > 59 or close_m > 59 or open_h >= 24:
            return None

        open_minutes = open_h * 60 + open_m
        close_minutes = close_h * 60 + close_m

        if close_h >= 24 and close_minutes > CLOSE_CEILING:
            return None

        if close_h < 24 and (next_day or close_minutes < open_minutes):
            close_minutes += MINUTES_PER_DAY

        if close_minutes <= open_minutes:
            return None

        if close_minutes > CLOSE_CEILING:
            get_logger().debug(
                f"Clamping close {close_h}:{close_m:02d} to {CLOSE_CEILING // 60}:00"
            )
            close_minutes = CLOSE_CEILING

        return TimeRange(open_minutes=open_minutes, close_minutes=close_minutes)

    @classmethod
    def range_from_match(cls, match) -> Optional[TimeRange]:
        """Build a TimeRange from a match carrying the TIME_RANGE_PATTERN groups."""
        time_range = cls.to_range(
            int(match.group('open_h')),
            int(match.group('open_m')),
            int(match.group('close_h')),
            int(match.group('close_m')),
            next_day=bool(match.group('next_day')),
        )
        if time_range is None:
            get_logger().debug(f"Discarding malformed time range: {match.group(0)!r}")
        return time_range

    @staticmethod
    def is_exclusion(text: str) -> bool:
        """Brackets like "（祝日を除く）" name exceptions, not the days served."""
        return any(word in text for word in EXCLUSION_WORDS)

    @classmethod
    def parse_segment(cls, segment: str) -> List[TimeBlock]:
        """Parse one segment into time blocks, in left-to-right order."""
        blocks: List[TimeBlock] = []
        current: Optional[TimeBlock] = None

        def add_days(days: FrozenSet[DayKey], trailing_allowed: bool):
            nonlocal current
            if not days:
                return
            if (trailing_allowed and current is not None and current.ranges
                    and not current.days and not current.sealed):
                current.days.update(days)
                current.sealed = True
            elif current is not None and not current.ranges:
                current.days.update(days)
            else:
                current = TimeBlock(days)
                blocks.append(current)

        def add_range(time_range: Optional[TimeRange]):
            nonlocal current
            if current is None or current.sealed:
                current = TimeBlock()
                blocks.append(current)
            if time_range is not None:
                current.ranges.append(time_range)

        position = 0
        for match in TOKEN_PATTERN.finditer(segment):
            # Free text between tokens may name days ("月～金: ")
            add_days(DayTokenResolver.resolve(segment[position:match.start()]), trailing_allowed=False)
            position = match.end()

            if match.group('time'):
                add_range(cls.range_from_match(match))
            elif match.group('all_day'):
                add_range(TimeRange(open_minutes=0, close_minutes=MINUTES_PER_DAY))
            else:
                inner = match.group('inner')
                if cls.is_exclusion(inner):
                    continue
                add_days(DayTokenResolver.resolve(inner), trailing_allowed=True)

        # Bare day text after the last time qualifies it like a bracket: "17:00～23:00 月～土"
        trailing = segment[position:]
        if blocks and DAY_ONLY_PATTERN.fullmatch(DayTokenResolver.prepare(trailing)):
            add_days(DayTokenResolver.resolve(trailing), trailing_allowed=True)

        return [block for block in blocks if block.ranges]

    @classmethod
    def parse(cls, text: str) -> List[TimeBlock]:
        """Parse every segment of a normalized text."""
        if not isinstance(text, str):
            raise TypeError(f"text must be a string, got {type(text).__name__}")

        blocks: List[TimeBlock] = []
        for segment in HARD_DELIMITER_PATTERN.split(text):
            if segment.strip():
                blocks.extend(cls.parse_segment(segment))
        return blocks
