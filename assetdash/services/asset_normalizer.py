"""
외부 API 원시 데이터 → 내부 Asset 정규화

원시 시세(RawQuote) + 정적 레지스트리 메타 + 배당 정보를 합쳐
EtfRecord / StockRecord를 만듭니다. I/O는 없습니다.
"""

from datetime import date, timedelta
from typing import List, Optional, Union

from assetdash.models.asset import (
    DividendCycle,
    EtfDetail,
    EtfRecord,
    PricePoint,
    RawQuote,
    StockDetail,
    StockRecord,
)
from assetdash.models.dividend import DividendInfo
from assetdash.services import mock_data
from assetdash.services.ticker_registry import ETF_REGISTRY, STOCK_REGISTRY, EtfMeta
from assetdash.utils.parsing import parse_float, parse_int

# 지급 ETF의 수익률 하한 (%, 반올림 후 0 방지)
MIN_PAYING_YIELD = 0.01


def estimate_etf_yield(meta: EtfMeta, price: int) -> float:
    """
    레지스트리 기반 연 배당수익률 추정 (%)

    최근 분배금 × 연간 지급 횟수 / 현재가 × 100
    """
    payouts = meta.dividend_cycle.payouts_per_year
    if price <= 0 or payouts == 0 or meta.last_dividend_amount <= 0:
        return 0.0
    return round(meta.last_dividend_amount * payouts / price * 100, 2)


def _resolve_etf_yield(meta: EtfMeta, price: int, scraped_yield: float) -> float:
    """
    ETF 배당수익률 (반올림 후 기준)

    미지급 ETF는 항상 0, 지급 ETF는 0이 되지 않도록
    스크래핑 값 → 레지스트리 추정치 → 최소값 순으로 결정합니다.
    """
    if meta.dividend_cycle == DividendCycle.NONE:
        return 0.0

    dividend_yield = round(scraped_yield, 2) if scraped_yield > 0 else 0.0
    if dividend_yield <= 0:
        dividend_yield = estimate_etf_yield(meta, price)
    return dividend_yield if dividend_yield > 0 else MIN_PAYING_YIELD


def _resolve_price(raw: RawQuote, ticker: str) -> int:
    price = parse_int(raw.close_price, default=None)
    if price is None or price <= 0:
        mock = mock_data.get_mock_asset(ticker)
        return mock.current_price if mock else 0
    return price


def _resolve_market_cap(raw: RawQuote, ticker: str) -> int:
    market_cap = parse_int(raw.market_cap)
    return market_cap if market_cap > 0 else mock_data.get_mock_market_cap(ticker)


def normalize_asset(
    raw: RawQuote,
    ticker: str,
    dividend_override: Optional[DividendInfo] = None,
) -> Optional[Union[EtfRecord, StockRecord]]:
    """
    원시 시세 + 메타 → Asset

    Args:
        raw: 원시 시세
        ticker: 종목 코드
        dividend_override: 배당 조회 결과 (있으면 레지스트리 값보다 우선)

    Returns:
        EtfRecord / StockRecord, 레지스트리에 없는 종목이면 None
    """
    etf_meta = ETF_REGISTRY.get(ticker)
    stock_meta = STOCK_REGISTRY.get(ticker)

    if etf_meta is None and stock_meta is None:
        return None

    current_price = _resolve_price(raw, ticker)
    change_rate = round(parse_float(raw.change_rate), 2)
    market_cap = _resolve_market_cap(raw, ticker)
    volume = max(parse_int(raw.volume), 0)
    name = raw.name or mock_data.get_mock_name(ticker) or ticker

    if etf_meta is not None:
        scraped_yield = dividend_override.dividend_yield if dividend_override else 0.0
        dividend_yield = _resolve_etf_yield(etf_meta, current_price, scraped_yield)

        override_amount = dividend_override.last_dividend_amount if dividend_override else 0

        return EtfRecord(
            ticker=ticker,
            name=name,
            current_price=current_price,
            change_rate=change_rate,
            market_cap=market_cap,
            volume=volume,
            dividend_yield=dividend_yield,
            category=etf_meta.category,
            expense_ratio=etf_meta.expense_ratio,
            issuer=etf_meta.issuer,
            nav=etf_meta.nav,
            # 네이버는 월/분기 구분 불가 → 레지스트리 배당 주기 항상 사용
            dividend_cycle=etf_meta.dividend_cycle,
            last_dividend_amount=override_amount if override_amount > 0 else etf_meta.last_dividend_amount,
        )

    return StockRecord(
        ticker=ticker,
        name=name,
        current_price=current_price,
        change_rate=change_rate,
        market_cap=market_cap,
        volume=volume,
        dividend_yield=round(dividend_override.dividend_yield, 2) if dividend_override else 0.0,
        category=stock_meta.category,
        per=stock_meta.per,
        pbr=stock_meta.pbr,
        sector=stock_meta.sector,
        dividend_cycle=stock_meta.dividend_cycle,
        last_dividend_amount=dividend_override.last_dividend_amount if dividend_override else 0,
    )


def normalize_asset_detail(
    raw: RawQuote,
    ticker: str,
    dividend_override: Optional[DividendInfo] = None,
) -> Optional[Union[EtfDetail, StockDetail]]:
    """원시 시세 + 메타 → AssetDetail (상장일, 기초지수/기업 개요 추가)"""
    base = normalize_asset(raw, ticker, dividend_override)
    if base is None:
        return None

    if isinstance(base, EtfRecord):
        meta = ETF_REGISTRY[ticker]
        return EtfDetail(
            **base.model_dump(),
            benchmark=meta.benchmark,
            listing_date=meta.listing_date,
        )

    meta = STOCK_REGISTRY[ticker]
    return StockDetail(
        **base.model_dump(),
        description=meta.description,
        listing_date=meta.listing_date,
        employees=meta.employees,
        revenue=meta.revenue,
        operating_profit=meta.operating_profit,
        net_income=meta.net_income,
    )


def normalize_price_history(raw_items: List[RawQuote], today: Optional[date] = None) -> List[PricePoint]:
    """
    원시 일별 시세 → PricePoint 리스트

    마지막 항목을 오늘로 두고 하루씩 역산한 날짜('M/D')를 붙입니다.
    """
    today = today or date.today()
    last = len(raw_items) - 1
    return [
        PricePoint(
            date=mock_data.format_point_date(today - timedelta(days=last - idx)),
            price=parse_int(item.close_price),
        )
        for idx, item in enumerate(raw_items)
    ]
