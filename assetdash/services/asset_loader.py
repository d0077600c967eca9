"""
assets_master 적재기

상장종목 수집 결과를 배치 단위로 Upsert 합니다.

Note:
    - ticker 기준 INSERT ... ON CONFLICT DO UPDATE (SQLite / PostgreSQL)
    - 갱신 시 name, market_type, last_updated만 덮어씀 (category는 보존)
    - 배치 하나가 트랜잭션 하나, 실패 시 이전 배치는 그대로 남음
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from assetdash.core.config import settings
from assetdash.db.models import AssetMaster
from assetdash.services.listing_collector import ListingRow, detect_market_type

logger = logging.getLogger(__name__)

_DIALECT_INSERT = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def dedupe_by_ticker(rows: List[ListingRow]) -> List[ListingRow]:
    """
    ticker 중복 제거 (나중 행 우선, 최초 등장 순서 유지)

    한 INSERT ... ON CONFLICT 문에 같은 키가 두 번 들어가면
    PostgreSQL은 "cannot affect row a second time" 오류를 냅니다.
    """
    return list({row.ticker: row for row in rows}.values())


class AssetLoader:
    """assets_master Upsert 적재기"""

    def __init__(self, batch_size: int = settings.UPSERT_BATCH_SIZE):
        self.batch_size = batch_size

    def _insert(self, session: Session):
        dialect = session.get_bind().dialect.name
        try:
            return _DIALECT_INSERT[dialect](AssetMaster)
        except KeyError:
            raise NotImplementedError(f"Upsert not supported for dialect: {dialect}")

    def upsert_batch(self, rows: List[ListingRow], session: Session) -> int:
        """
        배치 Upsert (단일 트랜잭션)

        Args:
            rows: 상장종목 행 (batch_size 이하)
            session: DB 세션

        Returns:
            int: 반영된 행 수

        Raises:
            SQLAlchemyError: 적재 실패 (재시도 없음)
        """
        if not rows:
            return 0

        now = datetime.now()
        values = [
            {
                "ticker": row.ticker,
                "name": row.name,
                "market_type": detect_market_type(row),
                "category": None,
                "last_updated": now,
            }
            for row in rows
        ]

        stmt = self._insert(session).values(values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[AssetMaster.ticker],
            set_={
                "name": stmt.excluded.name,
                "market_type": stmt.excluded.market_type,
                "last_updated": stmt.excluded.last_updated,
            },
        )

        try:
            session.execute(stmt)
            session.commit()
        except Exception:
            session.rollback()
            raise

        return len(values)

    def upsert_all(
        self,
        rows: List[ListingRow],
        session: Session,
        on_batch: Optional[Callable[[int], None]] = None,
    ) -> int:
        """
        전체 행을 batch_size 단위로 Upsert

        Args:
            on_batch: 배치 완료 콜백 (반영 행 수 전달, 진행률 표시용)
        """
        unique = dedupe_by_ticker(rows)
        if len(unique) < len(rows):
            logger.warning(f"⚠️ 중복 ticker {len(rows) - len(unique):,}건 제외 (나중 행 우선)")
        rows = unique

        upserted = 0
        for i in range(0, len(rows), self.batch_size):
            count = self.upsert_batch(rows[i:i + self.batch_size], session)
            upserted += count
            if on_batch:
                on_batch(count)

        logger.info(f"✅ Upsert 완료: {upserted:,}개")
        return upserted

    def count_by_market_type(self, session: Session) -> List[Tuple[str, int]]:
        """market_type별 종목 수 (market_type 오름차순)"""
        stmt = (
            select(AssetMaster.market_type, func.count(AssetMaster.ticker))
            .group_by(AssetMaster.market_type)
            .order_by(AssetMaster.market_type)
        )
        return [(market_type, count) for market_type, count in session.execute(stmt).all()]
