"""
utils 단위 테스트 (숫자 파싱, 영업일 계산, TTL 캐시)
"""

import math
from datetime import date

import pytest

from assetdash.utils.cache import TTLCache
from assetdash.utils.dates import get_recent_trading_date, prev_trading_date, to_yyyymmdd
from assetdash.utils.parsing import parse_float, parse_int


class TestParsing:
    """문자열 숫자 파싱 테스트"""

    @pytest.mark.parametrize("value,expected", [
        ("1.82", 1.82),
        ("-0.87", -0.87),
        ("+2.15", 2.15),
        ("1,234.5", 1234.5),
        (3, 3.0),
    ])
    def test_parse_float(self, value, expected):
        assert parse_float(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", [None, "", "-", "N/A", "nan", "inf", True])
    def test_parse_float_fallback(self, value):
        """파싱 불가 값은 NaN 대신 기본값"""
        result = parse_float(value)
        assert result == 0.0
        assert not math.isnan(result)

    def test_parse_float_custom_default(self):
        assert parse_float("abc", default=None) is None

    @pytest.mark.parametrize("value,expected", [
        ("72400", 72400),
        ("72,400", 72400),
        ("12345.9", 12345),
        ("0", 0),
    ])
    def test_parse_int(self, value, expected):
        assert parse_int(value) == expected

    def test_parse_int_fallback(self):
        assert parse_int("abc") == 0
        assert parse_int("abc", default=None) is None
        assert parse_int(None, default=-1) == -1


class TestDates:
    """영업일 계산 테스트"""

    def test_recent_trading_date_weekday(self):
        """평일은 그대로"""
        assert get_recent_trading_date(date(2026, 2, 11)) == date(2026, 2, 11)

    def test_recent_trading_date_weekend(self):
        """토요일 → 금요일, 일요일 → 금요일"""
        assert get_recent_trading_date(date(2026, 2, 14)) == date(2026, 2, 13)
        assert get_recent_trading_date(date(2026, 2, 15)) == date(2026, 2, 13)

    def test_prev_trading_date_skips_weekends(self):
        """월요일 기준 1영업일 전은 금요일"""
        assert prev_trading_date(date(2026, 2, 16), 1) == date(2026, 2, 13)
        # 10 영업일 = 2주
        assert prev_trading_date(date(2026, 2, 13), 10) == date(2026, 1, 30)

    def test_to_yyyymmdd(self):
        assert to_yyyymmdd(date(2026, 1, 5)) == "20260105"


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestTTLCache:
    """TTL 캐시 테스트"""

    def test_empty_cache(self):
        cache = TTLCache(300, clock=FakeClock())
        assert cache.get() is None
        assert not cache.is_fresh()

    def test_fresh_then_expired(self):
        """TTL 이내는 hit, 초과하면 miss"""
        clock = FakeClock()
        cache = TTLCache(300, clock=clock)
        cache.set(["a"])

        clock.now += 299
        assert cache.get() == ["a"]

        clock.now += 2
        assert cache.get() is None

    def test_set_refreshes_timestamp(self):
        clock = FakeClock()
        cache = TTLCache(300, clock=clock)
        cache.set(1)
        clock.now += 400
        cache.set(2)
        assert cache.filled_at == clock.now
        assert cache.get() == 2
