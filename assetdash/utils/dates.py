"""
영업일 계산 유틸리티

주말만 제외합니다 (공휴일은 고려하지 않음).
"""

from datetime import date, timedelta
from typing import Optional

DATE_FORMAT = '%Y%m%d'


def to_yyyymmdd(d: date) -> str:
    """date → 'YYYYMMDD'"""
    return d.strftime(DATE_FORMAT)


def get_recent_trading_date(today: Optional[date] = None) -> date:
    """
    가장 최근 영업일 (오늘 또는 직전 평일)

    토요일이면 1일, 일요일이면 2일 전으로 이동합니다.
    """
    d = today or date.today()
    if d.weekday() == 6:  # 일
        d -= timedelta(days=2)
    elif d.weekday() == 5:  # 토
        d -= timedelta(days=1)
    return d


def prev_trading_date(from_date: date, n: int) -> date:
    """from_date 기준 n 영업일 전 날짜"""
    d = from_date
    skipped = 0
    while skipped < n:
        d -= timedelta(days=1)
        if d.weekday() < 5:
            skipped += 1
    return d
