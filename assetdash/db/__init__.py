"""Database"""

from .models import Base, AssetMaster

__all__ = ["Base", "AssetMaster"]
