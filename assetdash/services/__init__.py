"""Services"""

from .quote_fetcher import QuoteFetcher
from .dividend_resolver import DividendResolver
from .listing_collector import ListingCollector
from .asset_loader import AssetLoader
from .asset_service import AssetService, ServiceResult

__all__ = [
    "QuoteFetcher",
    "DividendResolver",
    "ListingCollector",
    "AssetLoader",
    "AssetService",
    "ServiceResult",
]
