"""
상장종목 동기화 CLI

공공데이터포털 상장종목 정보를 수집하여 assets_master 테이블에 Upsert 합니다.

실행:
    assetdash-sync
    python scripts/sync_all_assets.py --dry-run

필요 환경변수 (.env.local 또는 .env):
    DATA_GO_KR_API_KEY=<공공데이터포털 인증키>
    DATABASE_URL=<DB 연결 문자열>
"""

import argparse
import asyncio
import sys
from datetime import date, datetime
from typing import List, Optional

from tqdm import tqdm

from assetdash.core.config import settings
from assetdash.core.exceptions import CollectorError
from assetdash.services.listing_collector import ListingCollector, detect_market_type
from assetdash.services.sync_service import run_sync
from assetdash.utils.logger import setup_logger


def _parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y%m%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"날짜 형식 오류 (YYYYMMDD): {value}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="assetdash-sync",
        description="공공데이터포털 상장종목 → assets_master 동기화"
    )
    parser.add_argument('--date', type=_parse_date, default=None,
                        help='기준일 (YYYYMMDD, 기본값: 오늘)')
    parser.add_argument('--dry-run', action='store_true',
                        help='수집만 하고 DB에 반영하지 않음')
    parser.add_argument('--log-dir', type=str, default=None,
                        help=f'로그 디렉토리 (기본값: {settings.LOG_DIR})')
    return parser


def _tqdm_progress(total: int):
    bar = tqdm(total=total, desc="Upsert", unit="종목")

    def on_batch(count: int):
        bar.update(count)
        if bar.n >= total:
            bar.close()

    return on_batch


async def _dry_run(today: Optional[date], logger) -> int:
    async with ListingCollector() as collector:
        rows = await collector.run(today)

    counts = {}
    for row in rows:
        market_type = detect_market_type(row)
        counts[market_type] = counts.get(market_type, 0) + 1

    logger.info(f"[dry-run] 수집 {len(rows):,}개 (DB 반영 안 함)")
    for market_type in sorted(counts):
        logger.info(f"  {market_type:<8} {counts[market_type]:,}개")
    return 0


async def _run(args, logger) -> int:
    if args.dry_run:
        return await _dry_run(args.date, logger)

    result = await run_sync(today=args.date, progress_factory=_tqdm_progress)
    logger.info(f"동기화 완료: 수집 {result.collected:,}개 / 반영 {result.upserted:,}개")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """CLI 진입점 (종료 코드 반환)"""
    args = build_parser().parse_args(argv)
    logger = setup_logger("assetdash", log_dir=args.log_dir)

    logger.info("=" * 50)
    logger.info("[sync-all-assets] 상장종목 동기화 시작")
    logger.info("=" * 50)

    try:
        return asyncio.run(_run(args, logger))
    except CollectorError as e:
        logger.error(f"[error] {e}")
        return 1
    except Exception as e:
        logger.error(f"[fatal] {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
