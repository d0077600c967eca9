"""Utilities"""

from .cache import TTLCache
from .dates import get_recent_trading_date, prev_trading_date, to_yyyymmdd
from .parsing import parse_float, parse_int

__all__ = [
    'TTLCache',
    'get_recent_trading_date',
    'prev_trading_date',
    'to_yyyymmdd',
    'parse_float',
    'parse_int',
]
