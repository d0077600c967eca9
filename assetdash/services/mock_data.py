"""
정적 목(mock) 데이터

외부 API 장애 시 최종 fallback으로 사용하는 마지막 확인값(last-known) 데이터셋.
정규화 단계의 시가총액/종목명 fallback 소스이기도 합니다.
"""

import math
from datetime import date, timedelta
from typing import Dict, List, Optional, Union

from assetdash.models.asset import (
    EtfDetail,
    EtfRecord,
    Holding,
    PricePoint,
    StockDetail,
    StockRecord,
)
from assetdash.services.ticker_registry import EOK, ETF_REGISTRY, STOCK_REGISTRY


def _etf(ticker, name, price, change_rate, market_cap, volume, dividend_yield) -> EtfRecord:
    meta = ETF_REGISTRY[ticker]
    return EtfRecord(
        ticker=ticker,
        name=name,
        current_price=price,
        change_rate=change_rate,
        market_cap=market_cap,
        volume=volume,
        dividend_yield=dividend_yield,
        category=meta.category,
        expense_ratio=meta.expense_ratio,
        issuer=meta.issuer,
        nav=meta.nav,
        dividend_cycle=meta.dividend_cycle,
        last_dividend_amount=meta.last_dividend_amount,
    )


def _stock(ticker, name, price, change_rate, market_cap, volume, dividend_yield) -> StockRecord:
    meta = STOCK_REGISTRY[ticker]
    return StockRecord(
        ticker=ticker,
        name=name,
        current_price=price,
        change_rate=change_rate,
        market_cap=market_cap,
        volume=volume,
        dividend_yield=dividend_yield,
        category=meta.category,
        per=meta.per,
        pbr=meta.pbr,
        sector=meta.sector,
        dividend_cycle=meta.dividend_cycle,
    )


# ─── ETF 목 데이터 ──────────────────────────────────────────

MOCK_ETFS: List[EtfRecord] = [
    _etf("069500", "KODEX 200", 35420, 1.23, 5_8234 * EOK, 12_340_000, 1.82),
    _etf("133690", "TIGER 미국나스닥100", 98750, 2.15, 8_4521 * EOK, 8_920_000, 0.51),
    _etf("278530", "RISE 200", 11230, -0.87, 1_2340 * EOK, 3_450_000, 1.95),
    _etf("371460", "TIGER 차이나전기차SOLACTIVE", 7890, -2.34, 9870 * EOK, 7_560_000, 0),
    _etf("381180", "TIGER 미국S&P500", 17850, 0.89, 4_5600 * EOK, 6_540_000, 1.21),
    _etf("305720", "KODEX 2차전지산업", 8765, -1.45, 7560 * EOK, 5_430_000, 0),
    _etf("379810", "KODEX 미국S&P500TR", 14560, 1.02, 3_2100 * EOK, 4_320_000, 0),
    _etf("364690", "KODEX Fn반도체", 11890, 3.21, 1_8760 * EOK, 9_870_000, 0.35),
    _etf("261240", "RISE 미국S&P500", 18920, 0.56, 2_1300 * EOK, 2_340_000, 1.18),
    _etf("252670", "KODEX 200선물인버스2X", 2340, -3.21, 4_3210 * EOK, 18_760_000, 0),
    _etf("102110", "TIGER 200", 35680, 1.18, 3_9800 * EOK, 4_560_000, 1.78),
    _etf("114800", "KODEX 인버스", 4120, -1.52, 2_8900 * EOK, 15_430_000, 0),
    _etf("229200", "KODEX 코스닥150", 12340, -0.32, 8900 * EOK, 3_210_000, 0.42),
    _etf("091160", "KODEX 반도체", 34500, 2.87, 1_5670 * EOK, 7_890_000, 0.28),
    _etf("453810", "RISE 미국나스닥100", 15670, 1.95, 6780 * EOK, 2_890_000, 0.48),
    _etf("458730", "TIGER 미국배당다우존스", 12850, 0.64, 3_1200 * EOK, 5_670_000, 3.52),
    _etf("441800", "TIGER 미국배당+7%프리미엄다우존스", 11340, 0.32, 1_8500 * EOK, 4_120_000, 7.15),
    _etf("446720", "KODEX 미국배당다우존스", 12420, 0.58, 1_2300 * EOK, 3_450_000, 3.48),
    _etf("490600", "RISE 미국배당다우존스", 10870, 0.45, 4560 * EOK, 1_890_000, 3.45),
]

# ─── 주식 목 데이터 ─────────────────────────────────────────

MOCK_STOCKS: List[StockRecord] = [
    _stock("005930", "삼성전자", 72400, 1.54, 432_1200 * EOK, 15_230_000, 2.07),
    _stock("000660", "SK하이닉스", 178500, 2.87, 129_8700 * EOK, 4_560_000, 0.67),
    _stock("005380", "현대차", 245000, -0.41, 52_3400 * EOK, 1_890_000, 3.27),
    _stock("035420", "NAVER", 215000, 0.94, 35_2100 * EOK, 1_230_000, 0.42),
    _stock("068270", "셀트리온", 198000, -1.25, 28_1400 * EOK, 2_340_000, 0.25),
]

MOCK_ASSETS: List[Union[EtfRecord, StockRecord]] = [*MOCK_ETFS, *MOCK_STOCKS]

_MOCK_BY_TICKER: Dict[str, Union[EtfRecord, StockRecord]] = {a.ticker: a for a in MOCK_ASSETS}


def get_mock_asset(ticker: str) -> Optional[Union[EtfRecord, StockRecord]]:
    return _MOCK_BY_TICKER.get(ticker)


def get_mock_market_cap(ticker: str) -> int:
    """목 데이터 시가총액 (없으면 0)"""
    asset = _MOCK_BY_TICKER.get(ticker)
    return asset.market_cap if asset else 0


def get_mock_name(ticker: str) -> Optional[str]:
    asset = _MOCK_BY_TICKER.get(ticker)
    return asset.name if asset else None


# ─── 상세 정보 ──────────────────────────────────────────────

def get_asset_detail(ticker: str) -> Optional[Union[EtfDetail, StockDetail]]:
    """목 상세 정보 (ETF 또는 주식, 없으면 None)"""
    asset = _MOCK_BY_TICKER.get(ticker)
    if asset is None:
        return None

    if isinstance(asset, EtfRecord):
        meta = ETF_REGISTRY.get(ticker)
        return EtfDetail(
            **asset.model_dump(),
            benchmark=meta.benchmark if meta else "-",
            listing_date=meta.listing_date if meta else "2020-01-01",
        )

    meta = STOCK_REGISTRY.get(ticker)
    if meta is None:
        return StockDetail(**asset.model_dump(), description="-", listing_date="2000-01-01")
    return StockDetail(
        **asset.model_dump(),
        description=meta.description,
        listing_date=meta.listing_date,
        employees=meta.employees,
        revenue=meta.revenue,
        operating_profit=meta.operating_profit,
        net_income=meta.net_income,
    )


# ─── 가격 히스토리 생성 (최근 30일) ─────────────────────────

def format_point_date(d: date) -> str:
    """date → 'M/D'"""
    return f"{d.month}/{d.day}"


def generate_price_history(ticker: str, days: int = 30, today: Optional[date] = None) -> List[PricePoint]:
    """
    결정적(deterministic) 합성 가격 히스토리

    티커 문자 코드 합을 시드로 하는 선형 합동 난수로 생성합니다.
    같은 티커는 항상 같은 곡선을 반환합니다.
    """
    asset = _MOCK_BY_TICKER.get(ticker)
    if asset is None:
        return []

    today = today or date.today()
    base_price = asset.current_price
    seed = sum(ord(c) for c in ticker)

    points: List[PricePoint] = []
    price = base_price * 0.95
    for i in range(days - 1, -1, -1):
        seed = (seed * 9301 + 49297) % 233280
        rnd = seed / 233280
        change = (rnd - 0.45) * base_price * 0.02
        price = max(price + change, base_price * 0.85)
        points.append(PricePoint(
            date=format_point_date(today - timedelta(days=i)),
            price=int(math.floor(price + 0.5)),
        ))

    return points


# ─── 구성 종목 (Holdings) ───────────────────────────────────

def _holdings(*rows) -> List[Holding]:
    return [Holding(name=name, ticker=ticker, weight=weight) for name, ticker, weight in rows]


HOLDINGS_MAP: Dict[str, List[Holding]] = {
    "069500": _holdings(
        ("삼성전자", "005930", 29.8), ("SK하이닉스", "000660", 11.2), ("현대차", "005380", 4.1),
        ("셀트리온", "068270", 3.2), ("KB금융", "105560", 2.8), ("신한지주", "055550", 2.5),
        ("POSCO홀딩스", "005490", 2.3), ("NAVER", "035420", 2.1), ("삼성바이오로직스", "207940", 1.9),
        ("LG화학", "051910", 1.7),
    ),
    "133690": _holdings(
        ("Apple", "AAPL", 8.9), ("Microsoft", "MSFT", 8.1), ("NVIDIA", "NVDA", 7.6),
        ("Amazon", "AMZN", 5.2), ("Broadcom", "AVGO", 4.8), ("Meta Platforms", "META", 4.5),
        ("Tesla", "TSLA", 3.8), ("Alphabet A", "GOOGL", 3.2), ("Costco", "COST", 2.7),
        ("Netflix", "NFLX", 2.4),
    ),
    "102110": _holdings(
        ("삼성전자", "005930", 30.1), ("SK하이닉스", "000660", 11.5), ("현대차", "005380", 4.0),
        ("셀트리온", "068270", 3.3), ("기아", "000270", 2.7), ("KB금융", "105560", 2.6),
        ("신한지주", "055550", 2.4), ("POSCO홀딩스", "005490", 2.2), ("NAVER", "035420", 2.0),
        ("삼성바이오로직스", "207940", 1.8),
    ),
    "305720": _holdings(
        ("LG에너지솔루션", "373220", 22.5), ("삼성SDI", "006400", 18.3), ("에코프로비엠", "247540", 12.1),
        ("포스코퓨처엠", "003670", 9.8), ("에코프로", "086520", 7.4), ("엘앤에프", "066970", 5.2),
        ("SK이노베이션", "096770", 4.1), ("코스모신소재", "005070", 3.3), ("천보", "278280", 2.8),
        ("나노신소재", "121600", 2.1),
    ),
    "364690": _holdings(
        ("삼성전자", "005930", 25.4), ("SK하이닉스", "000660", 23.8), ("한미반도체", "042700", 8.2),
        ("리노공업", "058470", 5.6), ("ISC", "095340", 4.1), ("주성엔지니어링", "036930", 3.5),
        ("테크윙", "089030", 3.0), ("하나마이크론", "067310", 2.6), ("DB하이텍", "000990", 2.2),
        ("넥스틴", "348210", 1.9),
    ),
    "091160": _holdings(
        ("삼성전자", "005930", 27.2), ("SK하이닉스", "000660", 24.5), ("한미반도체", "042700", 7.9),
        ("리노공업", "058470", 5.3), ("DB하이텍", "000990", 4.8), ("주성엔지니어링", "036930", 3.7),
        ("ISC", "095340", 3.1), ("테크윙", "089030", 2.5), ("하나마이크론", "067310", 2.0),
        ("넥스틴", "348210", 1.6),
    ),
}

DEFAULT_HOLDINGS: List[Holding] = _holdings(
    ("삼성전자", "005930", 15.2), ("SK하이닉스", "000660", 8.7), ("LG에너지솔루션", "373220", 5.3),
    ("현대차", "005380", 4.1), ("셀트리온", "068270", 3.5), ("기아", "000270", 2.9),
    ("KB금융", "105560", 2.6), ("신한지주", "055550", 2.3), ("NAVER", "035420", 2.0),
    ("POSCO홀딩스", "005490", 1.8),
)


def get_holdings(ticker: str) -> List[Holding]:
    """구성 종목 (공공데이터포털 미제공 → 정적 데이터)"""
    return HOLDINGS_MAP.get(ticker, DEFAULT_HOLDINGS)
