"""Data models"""

from .asset import (
    Asset,
    AssetDetail,
    AssetKind,
    DividendCycle,
    EtfDetail,
    EtfRecord,
    Holding,
    PricePoint,
    RawQuote,
    SearchResponse,
    SearchResult,
    StockDetail,
    StockRecord,
)
from .dividend import DividendInfo

__all__ = [
    # Asset models
    "Asset",
    "AssetDetail",
    "AssetKind",
    "DividendCycle",
    "EtfRecord",
    "StockRecord",
    "EtfDetail",
    "StockDetail",
    "RawQuote",
    "PricePoint",
    "Holding",
    "SearchResult",
    "SearchResponse",
    # Dividend models
    "DividendInfo",
]
