"""
Utility modules for the shop map.
"""

from .logger import ShopMapLogger, get_logger, init_logger
from .patterns import *
from .validators import ClockValidator

__all__ = [
    'ShopMapLogger',
    'get_logger',
    'init_logger',
    'ClockValidator',
]
