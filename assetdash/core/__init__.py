"""Core (설정, 예외)"""

from .config import settings, Settings
from .exceptions import AssetDashError, CollectorError, AssetNotFoundError

__all__ = [
    "settings",
    "Settings",
    "AssetDashError",
    "CollectorError",
    "AssetNotFoundError",
]
