"""
자산 관련 API 엔드포인트

자산 목록, 상세, 가격 히스토리, 구성 종목 조회
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response

from assetdash.api.dependencies import get_asset_service
from assetdash.core.exceptions import AssetNotFoundError
from assetdash.models import Asset, AssetDetail, AssetKind, Holding, PricePoint
from assetdash.services import AssetService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assets", tags=["assets"])

DATA_SOURCE_HEADER = "X-Data-Source"


def _mark_mock(response: Response, degraded: bool) -> None:
    if degraded:
        response.headers[DATA_SOURCE_HEADER] = "mock"


def _parse_kind(type_param: str) -> Optional[AssetKind]:
    # ETF / STOCK 외의 값은 전체 조회
    try:
        return AssetKind(type_param.upper())
    except ValueError:
        return None


@router.get("", response_model=List[Asset])
async def list_assets(
    response: Response,
    type_param: str = Query("ALL", alias="type", description="ALL | ETF | STOCK"),
    service: AssetService = Depends(get_asset_service)
):
    """
    자산 목록 조회 (5분 캐시)

    Example:
        GET /api/v1/assets?type=ETF
    """
    result = await service.list_assets(_parse_kind(type_param))
    _mark_mock(response, result.degraded)
    return result.data


@router.get("/{ticker}", response_model=AssetDetail)
async def get_asset_detail(
    response: Response,
    ticker: str = Path(..., description="종목 코드 (예: 069500)"),
    service: AssetService = Depends(get_asset_service)
):
    """
    자산 상세 조회

    Raises:
        404: 레지스트리에 없는 종목
    """
    try:
        result = await service.get_asset_detail(ticker)
    except AssetNotFoundError as e:
        logger.info(f"자산 상세 조회 실패 ({ticker}): {e}")
        raise HTTPException(status_code=404, detail=str(e))

    _mark_mock(response, result.degraded)
    return result.data


@router.get("/{ticker}/price-history", response_model=List[PricePoint])
async def get_price_history(
    response: Response,
    ticker: str,
    days: int = Query(30, ge=1, le=365, description="조회 거래일 수"),
    service: AssetService = Depends(get_asset_service)
):
    """가격 히스토리 (최근 days 거래일, 실패 시 합성 데이터)"""
    result = await service.get_price_history(ticker, days)
    _mark_mock(response, result.degraded)
    return result.data


@router.get("/{ticker}/holdings", response_model=List[Holding])
async def get_holdings(
    ticker: str,
    service: AssetService = Depends(get_asset_service)
):
    """구성 종목 상위 10개 (정적 데이터)"""
    return service.get_holdings(ticker)
