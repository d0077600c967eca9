"""
스케줄러 패키지

APScheduler를 사용한 정기 작업 실행
"""

from assetdash.scheduler.jobs import start_scheduler, stop_scheduler

__all__ = ['start_scheduler', 'stop_scheduler']
