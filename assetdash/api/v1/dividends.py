"""
배당 정보 API 엔드포인트
"""

from fastapi import APIRouter, Depends

from assetdash.api.dependencies import get_asset_service
from assetdash.models import DividendInfo
from assetdash.services import AssetService

router = APIRouter(prefix="/dividend", tags=["dividend"])


@router.get("/{ticker}", response_model=DividendInfo)
async def get_dividend(
    ticker: str,
    service: AssetService = Depends(get_asset_service)
):
    """
    배당 정보 조회

    조회 실패 시에도 200으로 source="none" 기본값을 반환합니다.
    """
    return await service.get_dividend(ticker)
