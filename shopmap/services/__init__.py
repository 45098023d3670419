"""
Service modules for business-hours parsing and shop filtering.
"""

from .normalizer_hours import HoursNormalizer
from .day_resolver import DayTokenResolver
from .closure import ClosureExtractor, ClosureResult
from .time_blocks import TimeBlockParser, TimeBlock
from .schedule import ScheduleAssembler, parse_hours
from .openness import is_open, is_shop_open, is_open_at, now_in
from .shop_filter import (
    filter_shops,
    collect_genres,
    clean_genres,
    clean_shop_genres,
    structured_hours_of,
)

__all__ = [
    'HoursNormalizer',
    'DayTokenResolver',
    'ClosureExtractor',
    'ClosureResult',
    'TimeBlockParser',
    'TimeBlock',
    'ScheduleAssembler',
    'parse_hours',
    'is_open',
    'is_shop_open',
    'is_open_at',
    'now_in',
    'filter_shops',
    'collect_genres',
    'clean_genres',
    'clean_shop_genres',
    'structured_hours_of',
]
