"""
스케줄러 작업 정의

APScheduler를 사용하여 상장종목 동기화를 평일 장 마감 후 자동 실행합니다.
"""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from assetdash.core.config import settings
from assetdash.core.exceptions import CollectorError
from assetdash.services.sync_service import run_sync

logger = logging.getLogger(__name__)

# 글로벌 스케줄러 인스턴스
scheduler = AsyncIOScheduler()

SYNC_JOB_ID = 'sync_assets'


# ============= 작업 함수 =============

async def sync_assets_job():
    """상장종목 동기화 (평일 SYNC_CRON_HOUR:SYNC_CRON_MINUTE)"""
    try:
        logger.info("⏰ [상장종목 동기화] 시작")
        result = await run_sync()
        logger.info(f"✅ [상장종목 동기화] 완료 - {result.upserted:,}개 반영 / 전체 {result.total:,}개")
    except CollectorError as e:
        logger.error(f"❌ [상장종목 동기화] 수집 실패: {e}")
    except Exception as e:
        logger.error(f"❌ [상장종목 동기화] 실패: {e}", exc_info=True)


# ============= 스케줄러 관리 =============

def register_jobs(target: AsyncIOScheduler = scheduler) -> None:
    """작업 등록 (시작하지 않음)"""
    target.add_job(
        func=sync_assets_job,
        trigger=CronTrigger(
            day_of_week='mon-fri',  # 월~금
            hour=settings.SYNC_CRON_HOUR,
            minute=settings.SYNC_CRON_MINUTE
        ),
        id=SYNC_JOB_ID,
        name='상장종목 동기화',
        replace_existing=True
    )


def start_scheduler():
    """스케줄러 시작 및 작업 등록"""
    register_jobs(scheduler)

    scheduler.start()
    logger.info("📅 스케줄러 시작됨")

    # 등록된 작업 출력
    jobs = scheduler.get_jobs()
    logger.info(f"📋 등록된 작업: {len(jobs)}개")
    for job in jobs:
        next_run = job.next_run_time.strftime("%Y-%m-%d %H:%M:%S") if job.next_run_time else "없음"
        logger.info(f"  - {job.name} (다음 실행: {next_run})")


def stop_scheduler():
    """스케줄러 정리"""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("📅 스케줄러 종료됨")
