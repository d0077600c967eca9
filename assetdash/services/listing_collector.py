"""
상장종목 수집기 (공공데이터포털)

GetStockSecuritiesInfoService/getStockPriceInfo API로 국내 상장 전 종목
(KOSPI + KOSDAQ + ETF)을 페이지 단위로 수집합니다.

Flow:
1. 최근 영업일 기준 30 영업일 범위로 전체 페이지 수집 (페이지 간 1초 대기)
2. 가장 최근 기준일(basDt) 행만 사용
3. 종목명/시장구분으로 market_type 분류 (ETF, KOSPI, KOSDAQ)
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from assetdash.core.config import settings
from assetdash.core.exceptions import CollectorError
from assetdash.utils.data_go_kr import extract_items, response_section
from assetdash.utils.dates import get_recent_trading_date, prev_trading_date, to_yyyymmdd
from assetdash.utils.parsing import parse_int

logger = logging.getLogger(__name__)

# 한국 ETF 운용사 브랜드 키워드 (getStockPriceInfo 응답에는 ETF가 섞여 있음)
ETF_KEYWORDS = (
    "KODEX", "TIGER", "KBSTAR", "HANARO", "RISE", "SOL",
    "TIMEFOLIO", "FOCUS", "SMART", "ACE", "KOSEF", "파워",
)

# 공공데이터포털 mrktCtg → market_type
MARKET_TYPE_MAP = {
    "KOSPI": "KOSPI",
    "KOSDAQ": "KOSDAQ",
    "KONEX": "KOSDAQ",  # KONEX는 KOSDAQ 계열로 통합
}


@dataclass
class ListingRow:
    """상장종목 원시 행 (API item)"""
    bas_dt: str      # 기준일자 (YYYYMMDD)
    ticker: str      # 단축코드 (srtnCd)
    name: str        # 종목명 (itmsNm)
    market: str      # 시장구분 (mrktCtg)

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "ListingRow":
        return cls(
            bas_dt=str(item.get("basDt", "")),
            ticker=str(item.get("srtnCd", "")),
            name=str(item.get("itmsNm", "")),
            market=str(item.get("mrktCtg", "")),
        )


def detect_market_type(row: ListingRow) -> str:
    """
    market_type 분류

    종목명에 ETF 브랜드 키워드가 포함되면 ETF, 아니면 시장구분을 매핑합니다.
    키워드 휴리스틱이라 오분류 가능성이 있습니다 (예: 'ACE' 포함 일반 종목).
    """
    name_upper = row.name.upper()
    if any(kw in name_upper for kw in ETF_KEYWORDS):
        return "ETF"
    return MARKET_TYPE_MAP.get(row.market, row.market)


def filter_latest(rows: List[ListingRow]) -> List[ListingRow]:
    """가장 최근 기준일(basDt)의 행만 반환"""
    if not rows:
        return []
    latest = max(r.bas_dt for r in rows)
    return [r for r in rows if r.bas_dt == latest]


class ListingCollector:
    """
    상장종목 페이지 수집기

    Args:
        client: httpx.AsyncClient (미지정 시 내부 생성, 테스트에서 주입)
        api_key: 공공데이터포털 인증키 (미지정 시 settings)
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        api_key: Optional[str] = None,
        page_size: int = settings.LISTING_PAGE_SIZE,
        page_delay: float = settings.LISTING_PAGE_DELAY,
    ):
        self.api_key = api_key if api_key is not None else settings.DATA_GO_KR_API_KEY
        self.page_size = page_size
        self.page_delay = page_delay
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=httpx.Timeout(settings.LISTING_TIMEOUT))

    async def close(self):
        """Close HTTP client"""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "ListingCollector":
        return self

    async def __aexit__(self, *exc):
        await self.close()

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        retry=retry_if_exception_type((httpx.ConnectError, httpx.RemoteProtocolError)),
        reraise=True,
    )
    async def _get(self, params: Dict[str, Any]) -> httpx.Response:
        return await self.client.get(settings.LISTING_API_URL, params=params)

    async def fetch_page(self, page_no: int, begin_dt: str, end_dt: str) -> Tuple[List[ListingRow], int]:
        """
        단일 페이지 조회

        Returns:
            (행 리스트, totalCount)

        Raises:
            CollectorError: HTTP 오류, 타임아웃, 응답 본문 누락
        """
        params = {
            "serviceKey": self.api_key,
            "numOfRows": self.page_size,
            "pageNo": page_no,
            "resultType": "json",
            "beginBasDt": begin_dt,
            "endBasDt": end_dt,
        }

        logger.info(f"  → GET page={page_no} ({begin_dt}~{end_dt})")

        try:
            response = await self._get(params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise CollectorError(f"HTTP {e.response.status_code} {e.response.reason_phrase}") from e
        except httpx.HTTPError as e:
            raise CollectorError(f"요청 실패 (page={page_no}): {e!r}") from e
        except ValueError as e:
            raise CollectorError(f"JSON 파싱 실패 (page={page_no}): {e}") from e

        body = response_section(data, "body")
        if not body:
            raise CollectorError(f"API 응답 오류: {response_section(data, 'header')}")

        rows = [ListingRow.from_item(item) for item in extract_items(body)]
        total_count = parse_int(body.get("totalCount"))
        return rows, total_count

    async def collect_all(self, today: Optional[date] = None) -> List[ListingRow]:
        """
        전체 페이지 수집

        페이지를 순차 조회하며, 누계가 totalCount 이상이거나
        페이지 행 수가 page_size 미만이면 종료합니다.
        """
        end = get_recent_trading_date(today)
        begin = prev_trading_date(end, settings.LISTING_LOOKBACK_DAYS)
        end_dt, begin_dt = to_yyyymmdd(end), to_yyyymmdd(begin)

        logger.info(f"📅 조회 범위: {begin_dt} ~ {end_dt}")

        rows: List[ListingRow] = []
        page_no = 1
        total_count = 0

        while True:
            items, total = await self.fetch_page(page_no, begin_dt, end_dt)

            if page_no == 1:
                total_count = total
                pages = -(-total_count // self.page_size)
                logger.info(f"     총 {total_count:,}개 행 / {pages}페이지 예상")

            rows.extend(items)
            logger.info(f"     수집 누계: {len(rows):,}개")

            if len(rows) >= total_count or len(items) < self.page_size:
                break

            page_no += 1
            await asyncio.sleep(self.page_delay)

        return rows

    async def run(self, today: Optional[date] = None) -> List[ListingRow]:
        """
        수집 + 최신 기준일 필터

        Raises:
            CollectorError: 인증키 누락 또는 수집 결과 0건
        """
        if not self.api_key:
            raise CollectorError("DATA_GO_KR_API_KEY 환경변수가 설정되지 않았습니다.")

        raw_rows = await self.collect_all(today)
        if not raw_rows:
            raise CollectorError("데이터를 가져오지 못했습니다. API 키 또는 네트워크를 확인하세요.")

        latest = filter_latest(raw_rows)
        logger.info(f"     최신 기준일: {latest[0].bas_dt} / 종목 수: {len(latest):,}개")
        return latest
