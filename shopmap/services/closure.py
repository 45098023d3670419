"""
Closure extraction.
Finds the regular-closing-day clause (定休日) and resolves it to day keys.
"""

from typing import FrozenSet, Optional, Tuple

from ..models import DayKey
from ..utils import get_logger
from ..utils.patterns import (
    CLOSURE_PATTERNS,
    CLOSURE_NOTE_PATTERN,
    IRREGULAR_CLOSURE,
    IRREGULAR_CLOSURE_PATTERN,
    NO_CLOSURE,
    NO_CLOSURE_PATTERN,
    NTH_WEEK_MARKER,
    NTH_WEEK_PATTERN,
)
from .day_resolver import DayTokenResolver


class ClosureResult:
    """Closed days found in a text, plus the text left for time parsing."""

    def __init__(
        self,
        closed_days: FrozenSet[DayKey],
        label: Optional[str],
        remainder: str
    ):
        self.closed_days = closed_days
        self.label = label
        self.remainder = remainder

    def __repr__(self):
        days = sorted(day.value for day in self.closed_days)
        return f"ClosureResult(closed_days={days}, label={self.label!r}, remainder={self.remainder!r})"


class ClosureExtractor:
    """
    Extract closing days from normalized hours text.

    Patterns, first match wins:
    - "定休日:日曜日" (marker, colon, run up to the next delimiter)
    - "日曜定休", "火・水曜日休み" (glyphs then closure word)
    - "定休日 月曜" (marker then glyphs)

    "不定休" (irregular) and "無休" (never closed) are kept as labels and
    resolve to no days.
    """

    @staticmethod
    def _cut(text: str, start: int, end: int) -> str:
        """Remove text[start:end] together with a note in brackets right after it."""
        note = CLOSURE_NOTE_PATTERN.match(text, end)
        if note:
            end = note.end()
        return text[:start] + ' ' + text[end:]

    @staticmethod
    def resolve_label(captured: str) -> Tuple[Optional[str], FrozenSet[DayKey]]:
        """Turn captured closure text into (label, closed days)."""
        if IRREGULAR_CLOSURE in captured:
            return IRREGULAR_CLOSURE, frozenset()
        if NO_CLOSURE_PATTERN.search(captured) or captured in ('なし', '無し'):
            return NO_CLOSURE, frozenset()

        # "第2・4月曜" closes only some weeks; "火曜・第3水曜" still closes Tuesday
        if NTH_WEEK_MARKER in captured:
            return captured, DayTokenResolver.resolve(NTH_WEEK_PATTERN.sub(' ', captured))

        return captured, DayTokenResolver.resolve(captured)

    @classmethod
    def extract(cls, text: str) -> ClosureResult:
        """Find the closure clause in text."""
        if not isinstance(text, str):
            raise TypeError(f"text must be a string, got {type(text).__name__}")

        for pattern in CLOSURE_PATTERNS:
            match = pattern.search(text)
            if not match:
                continue

            captured = match.group(1).strip()
            label, closed_days = cls.resolve_label(captured)
            if not closed_days and label == captured:
                get_logger().debug(f"Closure '{captured}' resolved to no days")

            return ClosureResult(
                closed_days=closed_days,
                label=label,
                remainder=cls._cut(text, match.start(), match.end())
            )

        # No clause; a free-standing 不定休 / 無休 still labels the shop
        irregular = IRREGULAR_CLOSURE_PATTERN.search(text)
        if irregular:
            return ClosureResult(
                closed_days=frozenset(),
                label=IRREGULAR_CLOSURE,
                remainder=cls._cut(text, irregular.start(), irregular.end())
            )

        never_closed = NO_CLOSURE_PATTERN.search(text)
        if never_closed:
            return ClosureResult(
                closed_days=frozenset(),
                label=NO_CLOSURE,
                remainder=cls._cut(text, never_closed.start(), never_closed.end())
            )

        return ClosureResult(closed_days=frozenset(), label=None, remainder=text)
