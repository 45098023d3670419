"""
Day-token resolution.
Maps Japanese weekday/holiday glyphs in a text segment to canonical day keys.
"""

from typing import FrozenSet, List

from ..models import DayKey, WEEK_ORDER, GLYPH_TO_DAY
from ..utils.patterns import (
    DAY_RANGE_PATTERN,
    DAY_LIST_PATTERN,
    IGNORED_DAY_TOKENS,
    CALENDAR_DATE_PATTERN,
    WEEKDAY_SUFFIX_PATTERN,
    DAY_ALIASES,
    DAY_NOISE_WORDS,
    RANGE_DASH_PATTERN,
    RANGE_SEPARATOR,
)


class DayTokenResolver:
    """
    Resolve the days a text segment refers to.

    Handles ranges ("月～金", wrapping "金～月"), enumerated lists
    ("月・水・金") and bare glyphs ("土日祝"). An empty result means the
    segment names no day.
    """

    @staticmethod
    def prepare(segment: str) -> str:
        """Strip tokens that look like days but are not, and expand aliases."""
        text = RANGE_DASH_PATTERN.sub(RANGE_SEPARATOR, segment)
        for token in IGNORED_DAY_TOKENS:
            text = text.replace(token, ' ')

        text = CALENDAR_DATE_PATTERN.sub(' ', text)
        text = WEEKDAY_SUFFIX_PATTERN.sub('', text)

        for word, replacement in DAY_ALIASES:
            text = text.replace(word, replacement)
        for word in DAY_NOISE_WORDS:
            text = text.replace(word, ' ')

        return text

    @staticmethod
    def expand_range(start_glyph: str, end_glyph: str) -> List[DayKey]:
        """
        Expand a glyph range like 月～金 to individual days.
        A start after the end wraps around the week (金～月 = Fri, Sat, Sun, Mon).
        """
        start_idx = WEEK_ORDER.index(GLYPH_TO_DAY[start_glyph])
        end_idx = WEEK_ORDER.index(GLYPH_TO_DAY[end_glyph])

        if start_idx <= end_idx:
            return list(WEEK_ORDER[start_idx:end_idx + 1])
        # Wrap around (e.g., 土～月)
        return list(WEEK_ORDER[start_idx:]) + list(WEEK_ORDER[:end_idx + 1])

    @classmethod
    def resolve(cls, segment: str) -> FrozenSet[DayKey]:
        """Resolve a segment to the set of days it names."""
        if not isinstance(segment, str):
            raise TypeError(f"segment must be a string, got {type(segment).__name__}")

        text = cls.prepare(segment)
        days = set()

        # Ranges first; blank them out so their glyphs are not counted again
        for match in DAY_RANGE_PATTERN.finditer(text):
            days.update(cls.expand_range(match.group(1), match.group(2)))
        text = DAY_RANGE_PATTERN.sub(' ', text)

        for match in DAY_LIST_PATTERN.finditer(text):
            for char in match.group(0):
                if char in GLYPH_TO_DAY:
                    days.add(GLYPH_TO_DAY[char])
        text = DAY_LIST_PATTERN.sub(' ', text)

        # Whatever glyphs remain stand on their own
        for char in text:
            if char in GLYPH_TO_DAY:
                days.add(GLYPH_TO_DAY[char])

        return frozenset(days)
