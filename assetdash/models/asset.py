"""
자산 데이터 모델

ETF / STOCK 두 가지 레코드를 kind 판별자로 구분하는 태그드 유니온으로 정의합니다.
JSON 응답은 대시보드 클라이언트 형식에 맞춰 camelCase alias를 사용합니다
(kind → "type").
"""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class AssetKind(str, Enum):
    """자산 유형 구분자"""
    ETF = "ETF"
    STOCK = "STOCK"


class DividendCycle(str, Enum):
    """배당 주기"""
    MONTHLY = "월배당"
    QUARTERLY = "분기배당"
    SEMIANNUAL = "반기배당"
    ANNUAL = "연배당"
    NONE = "미지급"

    @property
    def payouts_per_year(self) -> int:
        """연간 지급 횟수 (미지급 = 0)"""
        return _PAYOUTS_PER_YEAR[self]


_PAYOUTS_PER_YEAR = {
    DividendCycle.MONTHLY: 12,
    DividendCycle.QUARTERLY: 4,
    DividendCycle.SEMIANNUAL: 2,
    DividendCycle.ANNUAL: 1,
    DividendCycle.NONE: 0,
}


class CamelModel(BaseModel):
    """camelCase 직렬화 베이스"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        use_enum_values = False


class AssetRecord(CamelModel):
    """공통 필드 (ETF + 주식)"""

    ticker: str = Field(..., description="종목 코드 (예: 069500)")
    name: str = Field(..., min_length=1, description="종목명")
    current_price: int = Field(..., description="현재가 (원)")
    change_rate: float = Field(..., description="등락률 (%)")
    market_cap: int = Field(0, ge=0, description="시가총액 (원)")
    volume: int = Field(0, description="거래량 (주)")
    dividend_yield: float = Field(0.0, ge=0, description="배당수익률 (%)")
    category: str = Field(..., description="분류")


class EtfRecord(AssetRecord):
    """ETF"""

    kind: Literal["ETF"] = Field("ETF", alias="type")
    expense_ratio: float = Field(..., description="총보수 (%)")
    issuer: str = Field(..., description="운용사")
    nav: int = Field(..., description="순자산가치 (원)")
    dividend_cycle: DividendCycle = Field(..., description="배당 주기")
    last_dividend_amount: int = Field(0, description="최근 주당 분배금 (원)")

    class Config:
        json_schema_extra = {
            "example": {
                "type": "ETF",
                "ticker": "069500",
                "name": "KODEX 200",
                "currentPrice": 35420,
                "changeRate": 1.23,
                "marketCap": 5823400000000,
                "volume": 12340000,
                "dividendYield": 1.82,
                "category": "국내주식",
                "expenseRatio": 0.15,
                "issuer": "삼성자산운용",
                "nav": 35450,
                "dividendCycle": "분기배당",
                "lastDividendAmount": 160
            }
        }


class StockRecord(AssetRecord):
    """주식"""

    kind: Literal["STOCK"] = Field("STOCK", alias="type")
    per: float = Field(..., description="PER (주가수익비율)")
    pbr: float = Field(..., description="PBR (주가순자산비율)")
    sector: str = Field(..., description="업종")
    dividend_cycle: DividendCycle = Field(DividendCycle.NONE, description="배당 주기")
    last_dividend_amount: int = Field(0, description="최근 주당 배당금 (원)")


class EtfDetail(EtfRecord):
    """ETF 상세"""

    benchmark: str = Field(..., description="기초지수")
    listing_date: str = Field(..., description="상장일 (YYYY-MM-DD)")


class StockDetail(StockRecord):
    """주식 상세"""

    description: str = Field(..., description="기업 개요")
    listing_date: str = Field(..., description="상장일 (YYYY-MM-DD)")
    employees: int = Field(0, description="임직원 수")
    revenue: int = Field(0, description="매출액 (원)")
    operating_profit: int = Field(0, description="영업이익 (원)")
    net_income: int = Field(0, description="당기순이익 (원)")


# 통합 자산 (Discriminated Union)
Asset = Annotated[Union[EtfRecord, StockRecord], Field(discriminator="kind")]
AssetDetail = Annotated[Union[EtfDetail, StockDetail], Field(discriminator="kind")]


class RawQuote(BaseModel):
    """
    외부 시세 원시 레코드

    모든 숫자 필드는 문자열 그대로 보관하며 정규화 단계에서 파싱합니다.
    """

    ticker: str
    name: str = ""
    close_price: str = "0"
    change_rate: str = "0"
    volume: str = "0"
    market_cap: str = "0"
    date: Optional[str] = None  # YYYYMMDD (일별 시세에만 존재)


class PricePoint(CamelModel):
    """가격 히스토리 포인트"""

    date: str = Field(..., description="날짜 (M/D)")
    price: int = Field(..., description="종가")


class Holding(CamelModel):
    """ETF 구성 종목"""

    name: str
    ticker: str
    weight: float = Field(..., description="비중 (%)")


class SearchResult(CamelModel):
    """검색 결과"""

    ticker: str
    name: str
    market_type: str


class SearchResponse(CamelModel):
    """검색 응답"""

    results: List[SearchResult] = Field(default_factory=list)
    source: Optional[str] = Field(None, description="'fallback'이면 목 데이터 결과")
