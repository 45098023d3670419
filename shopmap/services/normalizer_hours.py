"""
Business hours text normalization service.
Purely lexical: no day or time interpretation happens here.
"""

from typing import Optional

from ..utils.patterns import (
    FULLWIDTH_DIGITS,
    RANGE_DASH_PATTERN,
    RANGE_SEPARATOR,
    LINE_BREAK_RUN_PATTERN,
    HORIZONTAL_SPACE_PATTERN,
)


class HoursNormalizer:
    """
    Normalize raw hours text before parsing.
    - Full-width digits to ASCII ("１７" → "17")
    - Full-width colon to ":"
    - Every range dash variant to "～"
    - Whitespace runs collapsed (line breaks survive as a single "\\n")
    """

    @staticmethod
    def normalize(text: Optional[str]) -> Optional[str]:
        """
        Normalize a raw hours string.

        Returns:
            Normalized text, or None for missing/blank input

        Raises:
            TypeError: text is neither a string nor None
        """
        if text is None:
            return None
        if not isinstance(text, str):
            raise TypeError(f"hours text must be a string, got {type(text).__name__}")

        if not text.strip():
            return None

        normalized = text.translate(FULLWIDTH_DIGITS)
        normalized = normalized.replace('：', ':')
        normalized = RANGE_DASH_PATTERN.sub(RANGE_SEPARATOR, normalized)

        normalized = LINE_BREAK_RUN_PATTERN.sub('\n', normalized.strip())
        normalized = HORIZONTAL_SPACE_PATTERN.sub(' ', normalized)

        return normalized
