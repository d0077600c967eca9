"""
API 의존성 주입 (Dependency Injection)

FastAPI의 Depends를 사용하여 서비스 레이어를 주입합니다.
"""

from functools import lru_cache

from assetdash.core.config import settings
from assetdash.services import AssetService, DividendResolver, QuoteFetcher
from assetdash.utils.cache import TTLCache


# 싱글톤 패턴으로 서비스 인스턴스 생성
@lru_cache()
def get_quote_fetcher() -> QuoteFetcher:
    """
    QuoteFetcher 의존성 주입

    Returns:
        QuoteFetcher: 네이버 시세 조회기
    """
    return QuoteFetcher()


@lru_cache()
def get_dividend_resolver() -> DividendResolver:
    """
    DividendResolver 의존성 주입

    Returns:
        DividendResolver: 배당 정보 조회기
    """
    return DividendResolver()


@lru_cache()
def get_asset_service() -> AssetService:
    """
    AssetService 의존성 주입

    Returns:
        AssetService: 자산 조회 서비스 (자산 목록 캐시 보유)
    """
    return AssetService(
        quote_fetcher=get_quote_fetcher(),
        dividend_resolver=get_dividend_resolver(),
        cache=TTLCache(settings.ASSET_CACHE_TTL),
    )

