"""
상장종목 동기화 서비스

수집(ListingCollector) → 적재(AssetLoader) → 현황 요약 순으로 실행합니다.
CLI와 스케줄러가 공용으로 사용합니다.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Optional, Tuple

from sqlalchemy.orm import sessionmaker

from assetdash.db.database import SessionLocal, get_db, init_db
from assetdash.services.asset_loader import AssetLoader, dedupe_by_ticker
from assetdash.services.listing_collector import ListingCollector, ListingRow

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """동기화 결과"""
    collected: int
    upserted: int
    summary: List[Tuple[str, int]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(count for _, count in self.summary)


def log_summary(result: SyncResult):
    """assets_master 현황 출력"""
    logger.info("[완료] assets_master 현황:")
    logger.info("─" * 30)
    for market_type, count in result.summary:
        logger.info(f"  {market_type:<8} {count:,}개")
    logger.info(f"{'  합계':<10} {result.total:,}개")
    logger.info("─" * 30)


async def run_sync(
    collector: Optional[ListingCollector] = None,
    loader: Optional[AssetLoader] = None,
    session_factory: sessionmaker = SessionLocal,
    today: Optional[date] = None,
    progress_factory: Optional[Callable[[int], Callable[[int], None]]] = None,
) -> SyncResult:
    """
    상장종목 동기화 실행

    Args:
        collector: 수집기 (미지정 시 내부 생성 후 종료 시 close)
        loader: 적재기
        session_factory: 세션 팩토리
        today: 기준일 (테스트용)
        progress_factory: 전체 행 수를 받아 배치 콜백을 반환하는 함수 (진행률 표시)

    Returns:
        SyncResult

    Raises:
        CollectorError: 수집 실패 또는 결과 0건 (DB는 변경되지 않음)
        SQLAlchemyError: 적재 실패
    """
    loader = loader or AssetLoader()

    if collector is None:
        async with ListingCollector() as owned:
            rows: List[ListingRow] = await owned.run(today)
    else:
        rows = await collector.run(today)

    logger.info(f"[upsert] {len(rows):,}개 종목을 DB에 반영 중...")

    on_batch = progress_factory(len(dedupe_by_ticker(rows))) if progress_factory else None

    with get_db(session_factory) as session:
        init_db(session.get_bind())
        upserted = loader.upsert_all(rows, session, on_batch=on_batch)
        summary = loader.count_by_market_type(session)

    result = SyncResult(collected=len(rows), upserted=upserted, summary=summary)
    log_summary(result)
    return result
