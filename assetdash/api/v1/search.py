"""
종목 검색 API 엔드포인트
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from assetdash.db.database import get_db_session
from assetdash.models import SearchResponse
from assetdash.services.search_service import search_assets

router = APIRouter(prefix="/search", tags=["search"])


@router.get("", response_model=SearchResponse, response_model_exclude_none=True)
def search(
    q: str = Query("", description="종목명 또는 티커 검색어"),
    db: Session = Depends(get_db_session)
):
    """
    종목 검색 (최대 10개)

    Example:
        GET /api/v1/search?q=KODEX

        Response:
        {"results": [{"ticker": "069500", "name": "KODEX 200", "marketType": "ETF"}]}
    """
    outcome = search_assets(q, db)
    return SearchResponse(results=outcome.results, source=outcome.source)
