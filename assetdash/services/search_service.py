"""
종목 검색 서비스

assets_master에서 종목명/티커 부분 일치 검색 후,
결과가 없거나 DB에 접근할 수 없으면 목 데이터에서 검색합니다.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from assetdash.db.models import AssetMaster
from assetdash.models.asset import SearchResult
from assetdash.services import mock_data

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 10


@dataclass
class SearchOutcome:
    results: List[SearchResult]
    source: Optional[str] = None  # "fallback"이면 목 데이터 결과


def search_fallback(q: str) -> List[SearchResult]:
    """목 데이터에서 검색 (주식은 모두 KOSPI 대형주)"""
    lq = q.lower()
    matches = [
        a for a in mock_data.MOCK_ASSETS
        if lq in a.ticker.lower() or lq in a.name.lower()
    ]
    return [
        SearchResult(
            ticker=a.ticker,
            name=a.name,
            market_type="ETF" if a.kind == "ETF" else "KOSPI",
        )
        for a in matches[:SEARCH_LIMIT]
    ]


def search_assets(q: str, session: Optional[Session]) -> SearchOutcome:
    """
    종목 검색

    Args:
        q: 검색어 (앞뒤 공백 제거 후 빈 문자열이면 빈 결과)
        session: DB 세션 (None이면 바로 목 데이터 검색)
    """
    q = (q or "").strip()
    if not q:
        return SearchOutcome(results=[])

    if session is not None:
        pattern = f"%{q}%"
        stmt = (
            select(AssetMaster.ticker, AssetMaster.name, AssetMaster.market_type)
            .where(or_(AssetMaster.name.ilike(pattern), AssetMaster.ticker.ilike(pattern)))
            .order_by(AssetMaster.ticker)
            .limit(SEARCH_LIMIT)
        )
        try:
            rows = session.execute(stmt).all()
        except SQLAlchemyError as e:
            logger.warning(f"⚠️ 종목 검색 DB 조회 실패, 목 데이터 사용: {e}")
            rows = []

        if rows:
            return SearchOutcome(results=[
                SearchResult(ticker=ticker, name=name, market_type=market_type)
                for ticker, name, market_type in rows
            ])

    return SearchOutcome(results=search_fallback(q), source="fallback")
