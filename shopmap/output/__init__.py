"""
Output modules: persisted hours layout and data file writing.
"""

from .serializer import to_persisted, from_persisted, format_display, format_display_range
from .writer import ShopJsonWriter, load_shops

__all__ = [
    'to_persisted',
    'from_persisted',
    'format_display',
    'format_display_range',
    'ShopJsonWriter',
    'load_shops',
]
