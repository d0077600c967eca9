"""
asset_normalizer 단위 테스트
"""

from datetime import date

import pytest

from assetdash.models.asset import (
    DividendCycle,
    EtfDetail,
    EtfRecord,
    RawQuote,
    StockDetail,
    StockRecord,
)
from assetdash.models.dividend import DividendInfo
from assetdash.services import mock_data
from assetdash.services.asset_normalizer import (
    estimate_etf_yield,
    normalize_asset,
    normalize_asset_detail,
    normalize_price_history,
)
from assetdash.services.ticker_registry import ETF_REGISTRY


def _raw(ticker: str, price: str = "35420", ratio: str = "1.234", volume: str = "12340000",
         market_cap: str = "0", name: str = "") -> RawQuote:
    return RawQuote(
        ticker=ticker,
        name=name,
        close_price=price,
        change_rate=ratio,
        volume=volume,
        market_cap=market_cap,
    )


class TestNormalizeEtf:
    """ETF 정규화 테스트"""

    def test_basic_fields(self):
        asset = normalize_asset(_raw("069500", name="KODEX 200"), "069500")

        assert isinstance(asset, EtfRecord)
        assert asset.kind == "ETF"
        assert asset.current_price == 35420
        assert asset.change_rate == 1.23
        assert asset.volume == 12340000
        assert asset.issuer == "삼성자산운용"
        assert asset.dividend_cycle == DividendCycle.QUARTERLY
        assert asset.last_dividend_amount == 160

    def test_unregistered_ticker(self):
        assert normalize_asset(_raw("999999"), "999999") is None

    def test_zero_market_cap_uses_mock(self):
        asset = normalize_asset(_raw("069500", market_cap="0"), "069500")
        assert asset.market_cap == mock_data.get_mock_market_cap("069500")

    def test_unparsable_price_uses_mock(self):
        asset = normalize_asset(_raw("069500", price="N/A"), "069500")
        assert asset.current_price == mock_data.get_mock_asset("069500").current_price

    def test_missing_name_uses_mock(self):
        asset = normalize_asset(_raw("069500", name=""), "069500")
        assert asset.name == "KODEX 200"

    def test_estimated_yield(self):
        """분배금 160원 × 분기 4회 / 35,420원 → 1.81%"""
        asset = normalize_asset(_raw("069500"), "069500")
        assert asset.dividend_yield == 1.81

    def test_scraped_yield_overrides_estimate(self):
        override = DividendInfo(dividend_yield=2.5, source="naver")
        asset = normalize_asset(_raw("069500"), "069500", override)

        assert asset.dividend_yield == 2.5
        # 배당 주기는 레지스트리 값 유지
        assert asset.dividend_cycle == DividendCycle.QUARTERLY

    def test_override_amount(self):
        override = DividendInfo(dividend_yield=2.5, last_dividend_amount=200, source="naver")
        asset = normalize_asset(_raw("069500"), "069500", override)
        assert asset.last_dividend_amount == 200

    def test_non_paying_etf_ignores_scraped_yield(self):
        """미지급 ETF는 스크래핑 값이 있어도 수익률 0"""
        override = DividendInfo(dividend_yield=3.0, source="naver")
        asset = normalize_asset(_raw("252670", price="2345"), "252670", override)

        assert asset.dividend_cycle == DividendCycle.NONE
        assert asset.dividend_yield == 0

    @pytest.mark.parametrize("ticker", list(ETF_REGISTRY))
    def test_non_paying_iff_zero_yield(self, ticker):
        """미지급 ↔ 수익률 0 (추정치 기준)"""
        asset = normalize_asset(_raw(ticker, price="10000"), ticker)
        if asset.dividend_cycle == DividendCycle.NONE:
            assert asset.dividend_yield == 0
        else:
            assert asset.dividend_yield > 0

    def test_tiny_scraped_yield_falls_back_to_estimate(self):
        """반올림하면 0이 되는 스크래핑 수익률은 추정치로 대체"""
        override = DividendInfo(dividend_yield=0.004, source="naver")
        asset = normalize_asset(_raw("069500"), "069500", override)

        assert asset.dividend_cycle == DividendCycle.QUARTERLY
        assert asset.dividend_yield == 1.81

    def test_tiny_estimate_uses_floor(self):
        """추정치도 반올림 후 0이면 최소값 0.01%"""
        asset = normalize_asset(_raw("453810", price="2000000"), "453810")

        assert asset.dividend_cycle == DividendCycle.QUARTERLY
        assert asset.dividend_yield == 0.01

    @pytest.mark.parametrize("scraped", [0.0, 0.001, 0.004, 0.005, 2.5])
    @pytest.mark.parametrize("price", ["1", "10000", "9999999"])
    def test_yield_cycle_invariant_after_rounding(self, scraped, price):
        """수익률 0 ↔ 미지급 (스크래핑 값/가격과 무관)"""
        override = DividendInfo(dividend_yield=scraped, source="naver" if scraped else "none")
        for ticker in ETF_REGISTRY:
            asset = normalize_asset(_raw(ticker, price=price), ticker, override)
            assert (asset.dividend_yield == 0) == (asset.dividend_cycle == DividendCycle.NONE), ticker

    def test_estimate_etf_yield_guards(self):
        meta = ETF_REGISTRY["069500"]
        assert estimate_etf_yield(meta, 0) == 0.0
        assert estimate_etf_yield(ETF_REGISTRY["252670"], 2345) == 0.0


class TestNormalizeStock:
    """주식 정규화 테스트"""

    def test_without_dividend(self):
        asset = normalize_asset(_raw("005930", price="72400"), "005930")

        assert isinstance(asset, StockRecord)
        assert asset.kind == "STOCK"
        assert asset.sector == "반도체"
        assert asset.dividend_yield == 0
        assert asset.last_dividend_amount == 0
        assert asset.dividend_cycle == DividendCycle.QUARTERLY

    def test_with_dividend_override(self):
        override = DividendInfo(
            dividend_yield=1.8263,
            dividend_cycle=DividendCycle.ANNUAL,
            last_dividend_amount=361,
            source="data_go_kr",
        )
        asset = normalize_asset(_raw("005930", price="72400"), "005930", override)

        assert asset.dividend_yield == 1.83
        assert asset.last_dividend_amount == 361
        # 배당 주기는 레지스트리 기준
        assert asset.dividend_cycle == DividendCycle.QUARTERLY


class TestNormalizeDetail:
    """상세 정규화 테스트"""

    def test_etf_detail(self):
        detail = normalize_asset_detail(_raw("069500"), "069500")
        assert isinstance(detail, EtfDetail)
        assert detail.benchmark == "KOSPI 200"
        assert detail.listing_date == "2002-10-14"

    def test_stock_detail(self):
        detail = normalize_asset_detail(_raw("005930", price="72400"), "005930")
        assert isinstance(detail, StockDetail)
        assert detail.employees == 267937
        assert detail.listing_date == "1975-06-11"

    def test_unregistered(self):
        assert normalize_asset_detail(_raw("999999"), "999999") is None


class TestSerialization:
    """API 응답 직렬화 (camelCase, kind → type)"""

    def test_alias_dump(self):
        data = normalize_asset(_raw("069500"), "069500").model_dump(by_alias=True, mode="json")

        assert data["type"] == "ETF"
        assert data["currentPrice"] == 35420
        assert data["dividendCycle"] == "분기배당"
        assert "kind" not in data


class TestNormalizePriceHistory:
    """일별 시세 정규화 테스트"""

    def test_dates_counted_back_from_today(self):
        raw = [
            RawQuote(ticker="069500", close_price="35200"),
            RawQuote(ticker="069500", close_price="35400"),
            RawQuote(ticker="069500", close_price="35420"),
        ]
        points = normalize_price_history(raw, today=date(2026, 3, 2))

        assert [p.date for p in points] == ["2/28", "3/1", "3/2"]
        assert [p.price for p in points] == [35200, 35400, 35420]

    def test_empty(self):
        assert normalize_price_history([]) == []
