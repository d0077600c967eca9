"""
자산 조회 서비스

시세(QuoteFetcher) + 배당(DividendResolver) → 정규화 → 캐시 순으로 응답 데이터를 만듭니다.
외부 조회가 실패하면 목 데이터로 대체하고 결과에 degraded 표시를 남깁니다
(API 계층에서 X-Data-Source: mock 헤더로 변환).
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar, Union

from assetdash.core.config import settings
from assetdash.core.exceptions import AssetNotFoundError
from assetdash.models.asset import (
    AssetKind,
    EtfDetail,
    EtfRecord,
    Holding,
    PricePoint,
    StockDetail,
    StockRecord,
)
from assetdash.models.dividend import DividendInfo
from assetdash.services import mock_data
from assetdash.services.asset_normalizer import (
    normalize_asset,
    normalize_asset_detail,
    normalize_price_history,
)
from assetdash.services.dividend_resolver import DividendResolver
from assetdash.services.quote_fetcher import QuoteFetcher
from assetdash.services.ticker_registry import ALL_TICKERS, get_asset_kind
from assetdash.utils.cache import TTLCache

logger = logging.getLogger(__name__)

T = TypeVar('T')

AnyAsset = Union[EtfRecord, StockRecord]
AnyAssetDetail = Union[EtfDetail, StockDetail]


@dataclass
class ServiceResult(Generic[T]):
    """서비스 응답 (degraded=True면 목 데이터)"""
    data: T
    degraded: bool = False


def _filter_kind(assets: List[AnyAsset], kind: Optional[AssetKind]) -> List[AnyAsset]:
    if kind is None:
        return list(assets)
    return [a for a in assets if a.kind == kind.value]


class AssetService:
    """
    자산 조회 서비스

    Args:
        quote_fetcher: 시세 조회기
        dividend_resolver: 배당 조회기
        cache: 자산 목록 캐시 (기본 TTL 5분)
    """

    def __init__(
        self,
        quote_fetcher: QuoteFetcher,
        dividend_resolver: DividendResolver,
        cache: Optional[TTLCache[List[AnyAsset]]] = None,
    ):
        self.quote_fetcher = quote_fetcher
        self.dividend_resolver = dividend_resolver
        self.cache = cache or TTLCache(settings.ASSET_CACHE_TTL)

    async def close(self):
        await self.quote_fetcher.close()
        await self.dividend_resolver.close()

    async def _build_asset_list(self) -> List[AnyAsset]:
        price_map = await self.quote_fetcher.fetch_many(ALL_TICKERS)

        assets: List[AnyAsset] = []
        for ticker in ALL_TICKERS:
            raw = price_map.get(ticker)
            asset = normalize_asset(raw, ticker) if raw else None
            if asset is None:
                # 시세를 못 가져온 종목은 목 데이터로 대체
                asset = mock_data.get_mock_asset(ticker)
            if asset is not None:
                assets.append(asset)

        logger.info(f"📊 자산 목록 갱신: 실시세 {len(price_map)}/{len(ALL_TICKERS)}")
        return assets

    async def list_assets(self, kind: Optional[AssetKind] = None) -> ServiceResult[List[AnyAsset]]:
        """
        자산 목록 (캐시 우선)

        캐시가 비었거나 만료되면 전체 레지스트리 종목 시세를 다시 조회합니다.
        """
        try:
            assets = self.cache.get()
            if assets is None:
                assets = await self._build_asset_list()
                self.cache.set(assets)
        except Exception as e:
            logger.error(f"❌ 자산 목록 조회 실패, 목 데이터 사용: {e}", exc_info=True)
            return ServiceResult(_filter_kind(mock_data.MOCK_ASSETS, kind), degraded=True)

        return ServiceResult(_filter_kind(assets, kind))

    async def get_asset_detail(self, ticker: str) -> ServiceResult[AnyAssetDetail]:
        """
        자산 상세

        Raises:
            AssetNotFoundError: 레지스트리/목 데이터 모두에 없는 종목
        """
        kind = get_asset_kind(ticker)
        if kind is None:
            raise AssetNotFoundError(ticker)

        try:
            raw, dividend = await asyncio.gather(
                self.quote_fetcher.fetch_one(ticker),
                self.dividend_resolver.resolve(ticker, kind),
            )
            if raw is None:
                raise ValueError("No price data returned")

            detail = normalize_asset_detail(raw, ticker, dividend)
            if detail is None:
                raise ValueError("Normalization failed")

            return ServiceResult(detail)

        except Exception as e:
            logger.warning(f"⚠️ {ticker}: 상세 조회 실패, 목 데이터 사용: {e}")

        fallback = mock_data.get_asset_detail(ticker)
        if fallback is None:
            raise AssetNotFoundError(ticker)
        return ServiceResult(fallback, degraded=True)

    async def get_price_history(self, ticker: str, days: int = 30) -> ServiceResult[List[PricePoint]]:
        """가격 히스토리 (실패 시 결정적 합성 데이터)"""
        raw_items = await self.quote_fetcher.fetch_history(ticker, days)
        if raw_items:
            return ServiceResult(normalize_price_history(raw_items))

        logger.warning(f"⚠️ {ticker}: 가격 히스토리 없음, 목 데이터 사용")
        return ServiceResult(mock_data.generate_price_history(ticker, days), degraded=True)

    async def get_dividend(self, ticker: str) -> DividendInfo:
        """배당 정보 (미등록 종목은 스크래핑만)"""
        return await self.dividend_resolver.resolve(ticker, get_asset_kind(ticker))

    def get_holdings(self, ticker: str) -> List[Holding]:
        """구성 종목 (정적 데이터)"""
        return mock_data.get_holdings(ticker)
