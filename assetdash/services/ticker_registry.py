"""
정적 메타데이터 레지스트리

공공데이터포털/네이버 API에서 제공하지 않는 필드(운용사, 보수율, 섹터, 배당 주기 등)의
source of truth. I/O 없는 순수 조회 모듈입니다.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from assetdash.models.asset import AssetKind, DividendCycle

M = DividendCycle.MONTHLY
Q = DividendCycle.QUARTERLY
A = DividendCycle.ANNUAL
N = DividendCycle.NONE

# 억 단위 (원)
EOK = 1_0000_0000


@dataclass(frozen=True)
class EtfMeta:
    """ETF 정적 메타데이터"""
    issuer: str
    expense_ratio: float
    nav: int
    category: str
    dividend_cycle: DividendCycle
    last_dividend_amount: int
    benchmark: str
    listing_date: str

    kind: AssetKind = AssetKind.ETF


@dataclass(frozen=True)
class StockMeta:
    """주식 정적 메타데이터"""
    sector: str
    category: str
    dividend_cycle: DividendCycle
    per: float
    pbr: float
    description: str
    listing_date: str
    employees: int
    revenue: int
    operating_profit: int
    net_income: int

    kind: AssetKind = AssetKind.STOCK


TickerMeta = Union[EtfMeta, StockMeta]


ETF_REGISTRY: Dict[str, EtfMeta] = {
    "069500": EtfMeta("삼성자산운용", 0.15, 35450, "국내주식", Q, 160, "KOSPI 200", "2002-10-14"),
    "133690": EtfMeta("미래에셋자산운용", 0.07, 98820, "해외주식", Q, 125, "NASDAQ 100", "2010-10-18"),
    "278530": EtfMeta("KB자산운용", 0.017, 11245, "국내주식", Q, 55, "KOSPI 200", "2017-08-29"),
    "371460": EtfMeta("미래에셋자산운용", 0.49, 7910, "해외주식", N, 0, "Solactive China Electric Vehicle", "2021-01-07"),
    "381180": EtfMeta("미래에셋자산운용", 0.07, 17870, "해외주식", Q, 54, "S&P 500", "2021-04-09"),
    "305720": EtfMeta("삼성자산운용", 0.45, 8780, "국내주식", N, 0, "FnGuide 2차전지산업 지수", "2018-09-10"),
    "379810": EtfMeta("삼성자산운용", 0.05, 14580, "해외주식", N, 0, "S&P 500 TR", "2021-04-09"),
    "364690": EtfMeta("삼성자산운용", 0.45, 11910, "국내주식", A, 42, "FnGuide 반도체 지수", "2020-10-29"),
    "261240": EtfMeta("KB자산운용", 0.021, 18940, "해외주식", Q, 56, "S&P 500", "2016-08-12"),
    "252670": EtfMeta("삼성자산운용", 0.64, 2345, "국내주식", N, 0, "KOSPI 200 선물인버스2X", "2016-09-22"),
    "102110": EtfMeta("미래에셋자산운용", 0.05, 35710, "국내주식", Q, 158, "KOSPI 200", "2005-10-17"),
    "114800": EtfMeta("삼성자산운용", 0.64, 4125, "국내주식", N, 0, "KOSPI 200 인버스", "2009-09-25"),
    "229200": EtfMeta("삼성자산운용", 0.25, 12360, "국내주식", A, 52, "KOSDAQ 150", "2015-10-05"),
    "091160": EtfMeta("삼성자산운용", 0.45, 34530, "국내주식", A, 97, "KRX 반도체", "2006-06-27"),
    "453810": EtfMeta("KB자산운용", 0.021, 15690, "해외주식", Q, 19, "NASDAQ 100", "2022-11-15"),
    "458730": EtfMeta("미래에셋자산운용", 0.01, 12870, "해외주식", M, 38, "Dow Jones U.S. Dividend 100", "2023-06-20"),
    "441800": EtfMeta("미래에셋자산운용", 0.39, 11360, "해외주식", M, 68, "Dow Jones U.S. Dividend 100 7% Premium", "2022-09-27"),
    "446720": EtfMeta("삼성자산운용", 0.01, 12440, "해외주식", M, 36, "Dow Jones U.S. Dividend 100", "2022-11-15"),
    "490600": EtfMeta("KB자산운용", 0.01, 10890, "해외주식", M, 31, "Dow Jones U.S. Dividend 100", "2024-01-23"),
}

STOCK_REGISTRY: Dict[str, StockMeta] = {
    "005930": StockMeta(
        "반도체", "전자/반도체", Q, 13.2, 1.15,
        "반도체, 스마트폰, 디스플레이 등을 제조하는 글로벌 전자기업", "1975-06-11",
        267937, 258_9400 * EOK, 6_5700 * EOK, 15_4800 * EOK,
    ),
    "000660": StockMeta(
        "반도체", "전자/반도체", A, 8.5, 1.82,
        "DRAM, NAND Flash 등 메모리 반도체를 제조하는 기업", "1996-12-26",
        35000, 66_1900 * EOK, 28_8800 * EOK, 19_5700 * EOK,
    ),
    "005380": StockMeta(
        "자동차", "자동차", Q, 5.8, 0.62,
        "승용차, 상용차 및 자동차 부품을 제조·판매하는 자동차 기업", "1974-06-28",
        75000, 162_6600 * EOK, 14_8700 * EOK, 12_2700 * EOK,
    ),
    "035420": StockMeta(
        "인터넷", "IT/플랫폼", A, 24.3, 1.45,
        "검색, 커머스, 핀테크, 콘텐츠 등 인터넷 플랫폼 기업", "2002-10-29",
        4500, 9_6700 * EOK, 1_5800 * EOK, 1_0500 * EOK,
    ),
    "068270": StockMeta(
        "바이오", "바이오", A, 38.7, 3.21,
        "바이오시밀러 및 항체 의약품을 개발·생산하는 바이오 기업", "2018-11-08",
        8500, 3_5200 * EOK, 5800 * EOK, 4200 * EOK,
    ),
}

# 등록된 모든 티커 (ETF → 주식 순서)
ALL_TICKERS: List[str] = [*ETF_REGISTRY.keys(), *STOCK_REGISTRY.keys()]


def get_ticker_meta(ticker: str) -> Optional[TickerMeta]:
    """티커 메타데이터 조회 (미등록 시 None)"""
    return ETF_REGISTRY.get(ticker) or STOCK_REGISTRY.get(ticker)


def get_asset_kind(ticker: str) -> Optional[AssetKind]:
    """티커의 자산 유형 (미등록 시 None)"""
    meta = get_ticker_meta(ticker)
    return meta.kind if meta else None


def is_etf_ticker(ticker: str) -> bool:
    return ticker in ETF_REGISTRY
