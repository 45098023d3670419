"""
Argument validation utilities.
These guard the query entry points against caller mistakes; they are not
used on scraped text, which never raises.
"""

from typing import Tuple

from .patterns import CLOCK_PATTERN


class ClockValidator:
    """Validates "HH:MM" clock strings supplied by the filter UI."""

    @staticmethod
    def is_valid_clock(time_str: str) -> bool:
        """Check if time string is a valid 24-hour clock time."""
        if not isinstance(time_str, str):
            return False

        match = CLOCK_PATTERN.match(time_str.strip())
        if not match:
            return False

        hour, minute = int(match.group(1)), int(match.group(2))
        return 0 <= hour <= 23 and 0 <= minute <= 59

    @staticmethod
    def parse_clock(time_str: str) -> Tuple[int, int]:
        """
        Split "HH:MM" into (hour, minute).

        Raises:
            TypeError: time_str is not a string
            ValueError: time_str is not a valid clock time
        """
        if not isinstance(time_str, str):
            raise TypeError(f"time must be a string, got {type(time_str).__name__}")

        if not ClockValidator.is_valid_clock(time_str):
            raise ValueError(f"Invalid time, expected HH:MM: {time_str!r}")

        match = CLOCK_PATTERN.match(time_str.strip())
        return int(match.group(1)), int(match.group(2))
