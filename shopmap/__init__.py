"""
Business-hours parsing and openness queries for the restaurant map.
"""

from .models import DayKey, TimeRange, StructuredHours, ShopRecord
from .services import parse_hours, is_shop_open, is_open

__version__ = "1.0.0"

__all__ = [
    'DayKey',
    'TimeRange',
    'StructuredHours',
    'ShopRecord',
    'parse_hours',
    'is_shop_open',
    'is_open',
]
