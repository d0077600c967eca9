"""
예외 정의

라이브러리 계층(시세/배당/정규화)은 예상 가능한 실패에 대해 예외를 던지지 않고
None/기본값을 반환합니다. 아래 예외는 배치 수집 중단과 미등록 종목(404)에만 사용합니다.
"""


class AssetDashError(Exception):
    """assetdash 기본 예외"""
    pass


class CollectorError(AssetDashError):
    """상장종목 수집 실패 (전체 실행 중단)"""
    pass


class AssetNotFoundError(AssetDashError):
    """레지스트리에 없는 종목"""

    def __init__(self, ticker: str):
        self.ticker = ticker
        super().__init__(f"Unknown ticker: {ticker}")
