"""
배당 정보 조회

- 주식: 공공데이터포털 GetStockDividendInfoService → 실패 시 네이버 스크래핑
- ETF: 네이버 금융 종목 페이지 스크래핑

모든 실패는 DividendInfo.none()으로 반환합니다.
"""

import logging
import re
from datetime import date
from typing import Any, Dict, List, Optional

import httpx
from bs4 import BeautifulSoup

from assetdash.core.config import settings
from assetdash.models.asset import AssetKind, DividendCycle
from assetdash.models.dividend import DividendInfo
from assetdash.utils.data_go_kr import extract_items, response_section
from assetdash.utils.dates import to_yyyymmdd
from assetdash.utils.parsing import parse_float, parse_int

logger = logging.getLogger(__name__)

_YIELD_PATTERN = re.compile(r"([\d.]+)\s*%")
_DPS_PATTERN = re.compile(r"([\d,]+)\s*원")


def classify_cycle(records_per_year: int) -> DividendCycle:
    """연간 배당 레코드 수 → 배당 주기"""
    if records_per_year >= 4:
        return DividendCycle.QUARTERLY
    if records_per_year >= 2:
        return DividendCycle.SEMIANNUAL
    return DividendCycle.ANNUAL


def normalize_yield(raw_yield: float) -> float:
    """소수 표현(0.0182)이면 퍼센트(1.82)로 변환"""
    if 0 < raw_yield < 1:
        return round(raw_yield * 100, 4)
    return raw_yield


def parse_dividend_items(items: List[Dict[str, Any]], today: date) -> DividendInfo:
    """
    배당 API 레코드 → DividendInfo

    최신 기준일 레코드의 수익률/주당배당금을 사용하고,
    올해/작년 레코드 수 중 큰 값으로 배당 주기를 추정합니다.
    """
    items = [i for i in items if isinstance(i, dict)]
    if not items:
        return DividendInfo.none()

    items = sorted(items, key=lambda i: str(i.get("basDt", "")), reverse=True)
    latest = items[0]

    raw_yield = parse_float(latest.get("thstrmDvdnYldt"))
    amount = parse_int(latest.get("thstrmDvdnAmt"))

    if raw_yield == 0 and amount == 0:
        return DividendInfo.none()

    this_year = str(today.year)
    last_year = str(today.year - 1)
    max_per_year = max(
        sum(1 for i in items if str(i.get("basDt", "")).startswith(this_year)),
        sum(1 for i in items if str(i.get("basDt", "")).startswith(last_year)),
    )

    return DividendInfo(
        dividend_yield=max(normalize_yield(raw_yield), 0.0),
        dividend_cycle=classify_cycle(max_per_year),
        last_dividend_amount=max(amount, 0),
        source="data_go_kr",
    )


def _labelled_value(soup: BeautifulSoup, label: str) -> Optional[str]:
    # <th>라벨</th><td>값</td> 구조에서 값 셀 텍스트 (라벨 완전 일치)
    for th in soup.find_all("th"):
        if th.get_text(strip=True) != label:
            continue
        td = th.find_next_sibling("td")
        if td is not None:
            return td.get_text(strip=True)
    return None


def parse_dividend_html(html: str) -> DividendInfo:
    """
    네이버 종목 페이지 HTML → DividendInfo

    배당 주기는 페이지에서 제공하지 않으므로 수익률이 있으면 연배당으로 간주합니다.
    """
    soup = BeautifulSoup(html, "html.parser")

    yield_text = _labelled_value(soup, "배당수익률")
    yield_match = _YIELD_PATTERN.match(yield_text) if yield_text else None
    if not yield_match:
        return DividendInfo.none()

    dividend_yield = parse_float(yield_match.group(1))

    dps_text = _labelled_value(soup, "주당배당금")
    dps_match = _DPS_PATTERN.match(dps_text) if dps_text else None
    amount = parse_int(dps_match.group(1)) if dps_match else 0

    if dividend_yield <= 0 and amount <= 0:
        return DividendInfo.none()

    return DividendInfo(
        dividend_yield=max(dividend_yield, 0.0),
        dividend_cycle=DividendCycle.ANNUAL if dividend_yield > 0 else DividendCycle.NONE,
        last_dividend_amount=max(amount, 0),
        source="naver",
    )


class DividendResolver:
    """
    배당 정보 조회기

    Args:
        client: httpx.AsyncClient (미지정 시 내부 생성, 테스트에서 주입)
        api_key: 공공데이터포털 인증키 (미지정 시 settings)
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, api_key: Optional[str] = None):
        self.client = client or httpx.AsyncClient()
        self.api_key = api_key if api_key is not None else settings.DATA_GO_KR_API_KEY

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def fetch_structured(self, ticker: str, today: Optional[date] = None) -> DividendInfo:
        """공공데이터포털 배당 API (최근 2년치)"""
        if not self.api_key:
            return DividendInfo.none()

        today = today or date.today()
        params = {
            "serviceKey": self.api_key,
            "numOfRows": 10,  # 분기배당 기준 2년치 최대 8건
            "pageNo": 1,
            "resultType": "json",
            "srtnCd": ticker,
            "beginBasDt": to_yyyymmdd(date(today.year - 2, 1, 1)),
            "endBasDt": to_yyyymmdd(today),
        }

        try:
            response = await self.client.get(
                settings.DIVIDEND_API_URL,
                params=params,
                timeout=settings.DIVIDEND_TIMEOUT,
            )
            if response.status_code != 200:
                return DividendInfo.none()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"⚠️ {ticker}: 배당 API 조회 실패 - {e!r}")
            return DividendInfo.none()

        body = response_section(payload, "body")
        if body is None:
            logger.warning(f"⚠️ {ticker}: 배당 API 응답 형식 오류")
            return DividendInfo.none()

        return parse_dividend_items(extract_items(body), today)

    async def scrape(self, ticker: str) -> DividendInfo:
        """네이버 금융 종목 페이지 스크래핑"""
        try:
            response = await self.client.get(
                settings.NAVER_ITEM_URL,
                params={"code": ticker},
                headers={"User-Agent": settings.SCRAPE_USER_AGENT},
                timeout=settings.SCRAPE_TIMEOUT,
            )
            if response.status_code != 200:
                return DividendInfo.none()
            html = response.text
        except httpx.HTTPError as e:
            logger.warning(f"⚠️ {ticker}: 배당 스크래핑 실패 - {e!r}")
            return DividendInfo.none()

        return parse_dividend_html(html)

    async def resolve(self, ticker: str, kind: Optional[AssetKind] = None) -> DividendInfo:
        """
        자산 유형별 배당 정보

        주식은 공공데이터포털을 먼저 조회하고 결과가 없으면 스크래핑합니다.
        ETF와 미등록 종목(kind=None)은 스크래핑만 사용합니다.
        """
        if kind == AssetKind.STOCK:
            info = await self.fetch_structured(ticker)
            if info.has_dividend:
                return info

        return await self.scrape(ticker)
