"""
배당 정보 모델
"""

from typing import Literal

from pydantic import Field

from assetdash.models.asset import CamelModel, DividendCycle

DividendSource = Literal["data_go_kr", "naver", "none"]


class DividendInfo(CamelModel):
    """
    배당 조회 결과

    데이터가 없는 경우에도 예외 대신 source="none" 값으로 표현합니다.
    """

    dividend_yield: float = Field(0.0, ge=0, description="배당수익률 (%)")
    dividend_cycle: DividendCycle = Field(DividendCycle.NONE, description="배당 주기")
    last_dividend_amount: int = Field(0, ge=0, description="최근 주당 배당금 (원)")
    source: DividendSource = Field("none", description="데이터 출처")

    @classmethod
    def none(cls) -> "DividendInfo":
        return cls()

    @property
    def has_dividend(self) -> bool:
        return self.source != "none" and (self.dividend_yield > 0 or self.last_dividend_amount > 0)
