"""
네이버 금융 시세 클라이언트

- 실시간 시세: polling.finance.naver.com (ETF + 주식 공통)
- 일별 시세: api.finance.naver.com/siseJson.naver

실패는 예외 대신 None / 빈 리스트로 반환합니다.
"""

import asyncio
import logging
import math
import re
from datetime import date, timedelta
from typing import Dict, List, Optional

import httpx

from assetdash.core.config import settings
from assetdash.models.asset import RawQuote
from assetdash.utils.dates import to_yyyymmdd

logger = logging.getLogger(__name__)

# 일별 시세 데이터 행의 날짜 토큰 ("20260210")
_DATE_TOKEN = re.compile(r'"(\d{8})"')
_STRIP_CHARS = re.compile(r'[\[\]"]')


def parse_history_text(text: str, ticker: str, days: int) -> List[RawQuote]:
    """
    siseJson 응답 텍스트 파싱

    응답 형식 (JSON 유사 텍스트):
        [["날짜","시가","고가","저가","종가","거래량","외국인소진율"],
        ["20260210", 79300, 80100, 78900, 79800, 12345678, 51.2],
        ...]

    날짜로 시작하는 행만 사용하며 종가=4번째, 거래량=5번째 필드입니다.
    """
    result: List[RawQuote] = []

    for line in text.strip().split("\n"):
        line = line.strip()
        if not line.startswith('["2'):
            continue

        match = _DATE_TOKEN.search(line)
        if not match:
            continue

        parts = [p.strip() for p in _STRIP_CHARS.sub("", line).split(",")]
        if len(parts) < 6:
            continue

        result.append(RawQuote(
            ticker=ticker,
            close_price=parts[4],  # 종가
            volume=parts[5],       # 거래량
            date=match.group(1),
        ))

    return result[-days:] if days > 0 else []


class QuoteFetcher:
    """
    네이버 금융 시세 조회

    Args:
        client: httpx.AsyncClient (미지정 시 내부 생성, 테스트에서 주입)
        concurrency: 배치 조회 시 동시 요청 수
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, concurrency: int = settings.QUOTE_CONCURRENCY):
        self.client = client or httpx.AsyncClient()
        self.concurrency = concurrency

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def fetch_one(self, ticker: str) -> Optional[RawQuote]:
        """
        단일 종목 최신 시세

        Returns:
            RawQuote (시가총액은 제공되지 않아 "0"), 실패 시 None
        """
        url = f"{settings.NAVER_POLLING_URL}/{ticker}"

        try:
            response = await self.client.get(url, timeout=settings.QUOTE_TIMEOUT)
            if response.status_code != 200:
                logger.debug(f"{ticker}: polling HTTP {response.status_code}")
                return None
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"⚠️ {ticker}: 시세 조회 실패 - {e!r}")
            return None

        datas = payload.get("datas") if isinstance(payload, dict) else None
        if not isinstance(datas, list) or not datas or not isinstance(datas[0], dict):
            logger.debug(f"{ticker}: polling 응답 형식 오류")
            return None
        data = datas[0]

        return RawQuote(
            ticker=str(data.get("itemCode") or ticker),
            name=str(data.get("stockName") or ""),
            close_price=str(data.get("closePriceRaw") or "0"),
            change_rate=str(data.get("fluctuationsRatioRaw") or "0"),
            volume=str(data.get("accumulatedTradingVolumeRaw") or "0"),
            market_cap="0",  # polling API에는 시가총액 없음 → normalizer에서 목 데이터 사용
        )

    async def fetch_many(self, tickers: List[str]) -> Dict[str, RawQuote]:
        """
        복수 종목 배치 조회

        concurrency 개씩 묶어 동시 조회하고 묶음끼리는 순차 실행합니다.
        실패/None 결과는 제외됩니다.
        """
        result: Dict[str, RawQuote] = {}

        for i in range(0, len(tickers), self.concurrency):
            batch = tickers[i:i + self.concurrency]
            settled = await asyncio.gather(
                *(self.fetch_one(t) for t in batch),
                return_exceptions=True
            )

            for ticker, outcome in zip(batch, settled):
                if isinstance(outcome, BaseException):
                    logger.warning(f"⚠️ {ticker}: 시세 조회 예외 - {outcome!r}")
                    continue
                if outcome is not None:
                    result[ticker] = outcome

        logger.debug(f"시세 배치 조회: {len(result)}/{len(tickers)}")
        return result

    async def fetch_history(self, ticker: str, days: int = 30, today: Optional[date] = None) -> List[RawQuote]:
        """
        일별 시세 히스토리 (최근 days 거래일)

        시작일은 주말/공휴일을 감안해 days * 1.5일 전으로 잡습니다.
        """
        end = today or date.today()
        start = end - timedelta(days=math.ceil(days * 1.5))

        params = {
            "symbol": ticker,
            "requestType": 1,
            "startTime": to_yyyymmdd(start),
            "endTime": to_yyyymmdd(end),
            "timeframe": "day",
        }

        try:
            response = await self.client.get(
                settings.NAVER_CHART_URL,
                params=params,
                headers={"User-Agent": "Mozilla/5.0"},
                timeout=settings.HISTORY_TIMEOUT,
            )
            if response.status_code != 200:
                return []
            text = response.text
        except httpx.HTTPError as e:
            logger.warning(f"⚠️ {ticker}: 일별 시세 조회 실패 - {e!r}")
            return []

        return parse_history_text(text, ticker, days)
