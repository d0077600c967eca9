"""
ListingCollector 단위 테스트

공공데이터포털 응답은 httpx.MockTransport로 대체합니다.
"""

from datetime import date

import httpx
import pytest

from assetdash.core.exceptions import CollectorError
from assetdash.services.listing_collector import (
    ListingCollector,
    ListingRow,
    detect_market_type,
    filter_latest,
)
from conftest import mock_client


def _item(ticker: str, name: str = "테스트", market: str = "KOSPI", bas_dt: str = "20260211") -> dict:
    return {"basDt": bas_dt, "srtnCd": ticker, "isinCd": f"KR7{ticker}000", "itmsNm": name, "mrktCtg": market}


def _page(items, total_count: int) -> dict:
    return {
        "response": {
            "header": {"resultCode": "00", "resultMsg": "NORMAL SERVICE."},
            "body": {
                "totalCount": total_count,
                "pageNo": 1,
                "numOfRows": 1000,
                "items": {"item": items} if items != "" else "",
            },
        }
    }


def _collector(handler, **kwargs) -> ListingCollector:
    return ListingCollector(client=mock_client(handler), api_key="test-key", page_delay=0, **kwargs)


class TestDetectMarketType:
    """market_type 분류 테스트"""

    @pytest.mark.parametrize("name", ["KODEX 200", "TIGER 미국S&P500", "kbstar 200", "ACE 미국나스닥100", "파워 200"])
    def test_etf_keywords(self, name):
        """ETF 키워드가 있으면 시장구분과 무관하게 ETF"""
        row = ListingRow(bas_dt="20260211", ticker="000000", name=name, market="KOSPI")
        assert detect_market_type(row) == "ETF"

    @pytest.mark.parametrize("market,expected", [
        ("KOSPI", "KOSPI"),
        ("KOSDAQ", "KOSDAQ"),
        ("KONEX", "KOSDAQ"),
        ("ETC", "ETC"),
    ])
    def test_market_mapping(self, market, expected):
        row = ListingRow(bas_dt="20260211", ticker="005930", name="삼성전자", market=market)
        assert detect_market_type(row) == expected


class TestFilterLatest:
    """최신 기준일 필터 테스트"""

    def test_keeps_only_max_bas_dt(self):
        rows = [
            ListingRow("20260210", "005930", "삼성전자", "KOSPI"),
            ListingRow("20260211", "005930", "삼성전자", "KOSPI"),
            ListingRow("20260211", "000660", "SK하이닉스", "KOSPI"),
        ]
        latest = filter_latest(rows)
        assert len(latest) == 2
        assert {r.bas_dt for r in latest} == {"20260211"}

    def test_empty(self):
        assert filter_latest([]) == []


class TestFetchPage:
    """단일 페이지 조회 테스트"""

    @pytest.mark.asyncio
    async def test_request_params(self):
        """필수 쿼리 파라미터 전달"""
        seen = {}

        def handler(request: httpx.Request):
            seen.update(request.url.params)
            return httpx.Response(200, json=_page([_item("005930")], 1))

        collector = _collector(handler)
        rows, total = await collector.fetch_page(3, "20260101", "20260211")

        assert seen["serviceKey"] == "test-key"
        assert seen["numOfRows"] == "1000"
        assert seen["pageNo"] == "3"
        assert seen["resultType"] == "json"
        assert seen["beginBasDt"] == "20260101"
        assert seen["endBasDt"] == "20260211"
        assert total == 1
        assert rows[0].ticker == "005930"

    @pytest.mark.asyncio
    async def test_empty_items_string(self):
        """items가 빈 문자열이면 0건"""
        collector = _collector(lambda request: httpx.Response(200, json=_page("", 0)))
        rows, total = await collector.fetch_page(1, "20260101", "20260211")
        assert rows == []
        assert total == 0

    @pytest.mark.asyncio
    async def test_single_item_dict(self):
        """item이 dict 하나면 리스트로 감싸기"""
        payload = _page([], 1)
        payload["response"]["body"]["items"] = {"item": _item("069500", "KODEX 200")}

        collector = _collector(lambda request: httpx.Response(200, json=payload))
        rows, _ = await collector.fetch_page(1, "20260101", "20260211")
        assert [r.ticker for r in rows] == ["069500"]

    @pytest.mark.asyncio
    async def test_http_error_aborts(self):
        """non-2xx 응답은 CollectorError"""
        collector = _collector(lambda request: httpx.Response(500))
        with pytest.raises(CollectorError, match="HTTP 500"):
            await collector.fetch_page(1, "20260101", "20260211")

    @pytest.mark.asyncio
    async def test_timeout_aborts(self):
        """타임아웃은 재시도 없이 CollectorError"""
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ReadTimeout("timed out", request=request)

        collector = _collector(handler)
        with pytest.raises(CollectorError):
            await collector.fetch_page(1, "20260101", "20260211")
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_missing_body_aborts(self):
        """response.body 누락 시 CollectorError"""
        payload = {"response": {"header": {"resultCode": "30", "resultMsg": "SERVICE KEY IS NOT REGISTERED ERROR."}}}
        collector = _collector(lambda request: httpx.Response(200, json=payload))
        with pytest.raises(CollectorError, match="API 응답 오류"):
            await collector.fetch_page(1, "20260101", "20260211")

    @pytest.mark.parametrize("payload", [{"response": "SERVICE ERROR"}, ["unexpected"]])
    @pytest.mark.asyncio
    async def test_non_dict_response_aborts(self, payload):
        collector = _collector(lambda request: httpx.Response(200, json=payload))
        with pytest.raises(CollectorError, match="API 응답 오류"):
            await collector.fetch_page(1, "20260101", "20260211")

    @pytest.mark.asyncio
    async def test_malformed_items_skipped(self):
        """dict가 아닌 item은 버리고 totalCount 파싱 실패는 0"""
        payload = {"response": {"body": {"items": {"item": ["x", _item("069500")]}, "totalCount": "abc"}}}
        collector = _collector(lambda request: httpx.Response(200, json=payload))

        rows, total_count = await collector.fetch_page(1, "20260101", "20260211")

        assert [row.ticker for row in rows] == ["069500"]
        assert total_count == 0

    @pytest.mark.asyncio
    async def test_connect_error_retried(self):
        """연결 오류는 재시도 후 성공하면 정상 반환"""
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) == 1:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json=_page([_item("005930")], 1))

        collector = _collector(handler)
        rows, _ = await collector.fetch_page(1, "20260101", "20260211")
        assert len(calls) == 2
        assert len(rows) == 1


class TestCollectAll:
    """페이지네이션 테스트"""

    @pytest.mark.asyncio
    async def test_paginates_until_total(self):
        """1페이지 1000행 + totalCount 1500 → 2페이지 요청 후 종료"""
        requested_pages = []

        def handler(request: httpx.Request):
            page_no = int(request.url.params["pageNo"])
            requested_pages.append(page_no)
            if page_no == 1:
                items = [_item(f"{i:06d}") for i in range(1000)]
            else:
                items = [_item(f"{i:06d}") for i in range(1000, 1500)]
            return httpx.Response(200, json=_page(items, 1500))

        collector = _collector(handler)
        rows = await collector.collect_all(today=date(2026, 2, 11))

        assert requested_pages == [1, 2]
        assert len(rows) == 1500

    @pytest.mark.asyncio
    async def test_stops_on_short_page(self):
        """페이지 행 수가 page_size 미만이면 totalCount와 무관하게 종료"""
        requested_pages = []

        def handler(request: httpx.Request):
            requested_pages.append(int(request.url.params["pageNo"]))
            return httpx.Response(200, json=_page([_item("005930")], 5000))

        collector = _collector(handler)
        rows = await collector.collect_all(today=date(2026, 2, 11))

        assert requested_pages == [1]
        assert len(rows) == 1

    @pytest.mark.asyncio
    async def test_date_range(self):
        """일요일 기준 → 금요일 종료, 30 영업일 전 시작"""
        seen = {}

        def handler(request: httpx.Request):
            seen.update(request.url.params)
            return httpx.Response(200, json=_page("", 0))

        collector = _collector(handler)
        await collector.collect_all(today=date(2026, 2, 15))

        assert seen["endBasDt"] == "20260213"
        assert seen["beginBasDt"] == "20260102"


class TestRun:
    """수집 + 최신 기준일 필터 테스트"""

    @pytest.mark.asyncio
    async def test_filters_latest_date(self):
        items = [
            _item("005930", "삼성전자", bas_dt="20260210"),
            _item("005930", "삼성전자", bas_dt="20260211"),
            _item("069500", "KODEX 200", bas_dt="20260211"),
        ]
        collector = _collector(lambda request: httpx.Response(200, json=_page(items, 3)))
        rows = await collector.run(today=date(2026, 2, 11))

        assert len(rows) == 2
        assert all(r.bas_dt == "20260211" for r in rows)

    @pytest.mark.asyncio
    async def test_zero_rows_raises(self):
        """수집 결과 0건이면 CollectorError"""
        collector = _collector(lambda request: httpx.Response(200, json=_page("", 0)))
        with pytest.raises(CollectorError, match="데이터를 가져오지 못했습니다"):
            await collector.run(today=date(2026, 2, 11))

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        """인증키 없으면 요청 없이 CollectorError"""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=_page("", 0))

        collector = ListingCollector(client=mock_client(handler), api_key="")
        with pytest.raises(CollectorError, match="DATA_GO_KR_API_KEY"):
            await collector.run()
        assert calls == []
