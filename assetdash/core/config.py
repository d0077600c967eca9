"""
환경 설정 관리

Pydantic Settings를 사용하여 .env.local / .env 파일에서 환경 변수를 로드합니다.
.env.local이 있으면 .env보다 우선합니다.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional
from pathlib import Path

# 프로젝트 루트 디렉토리 경로
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
ENV_FILES = (str(PROJECT_ROOT / ".env"), str(PROJECT_ROOT / ".env.local"))
DATA_DIR = PROJECT_ROOT / "data"


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 기본 설정
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = str(DATA_DIR / "logs")

    # 데이터베이스 (assets_master)
    DATABASE_URL: str = f"sqlite:///{DATA_DIR / 'assetdash.db'}"

    # 공공데이터포털 인증키
    DATA_GO_KR_API_KEY: Optional[str] = None

    # 공공데이터포털 엔드포인트
    LISTING_API_URL: str = (
        "https://apis.data.go.kr/1160100/service/GetStockSecuritiesInfoService/getStockPriceInfo"
    )
    DIVIDEND_API_URL: str = (
        "https://apis.data.go.kr/1160100/service/GetStockDividendInfoService/getStockDividendInfo"
    )

    # 네이버 금융 엔드포인트
    NAVER_POLLING_URL: str = "https://polling.finance.naver.com/api/realtime/domestic/stock"
    NAVER_CHART_URL: str = "https://api.finance.naver.com/siseJson.naver"
    NAVER_ITEM_URL: str = "https://finance.naver.com/item/main.naver"
    SCRAPE_USER_AGENT: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

    # 상장종목 수집 설정
    LISTING_PAGE_SIZE: int = 1000          # 페이지당 행 수
    LISTING_PAGE_DELAY: float = 1.0        # 페이지 간 대기 (초)
    LISTING_LOOKBACK_DAYS: int = 30        # 조회 범위 (영업일)
    UPSERT_BATCH_SIZE: int = 500           # 트랜잭션당 Upsert 행 수

    # 타임아웃 (초)
    LISTING_TIMEOUT: float = 30.0
    QUOTE_TIMEOUT: float = 8.0
    DIVIDEND_TIMEOUT: float = 8.0
    HISTORY_TIMEOUT: float = 10.0
    SCRAPE_TIMEOUT: float = 5.0

    # 시세 배치 조회 동시성
    QUOTE_CONCURRENCY: int = 6

    # 자산 목록 캐시 TTL (초)
    ASSET_CACHE_TTL: float = 300.0

    # 스케줄러 (평일 상장종목 동기화)
    SCHEDULER_ENABLED: bool = False
    SYNC_CRON_HOUR: int = 18
    SYNC_CRON_MINUTE: int = 30

    # CORS
    ALLOWED_ORIGINS: str = "http://localhost:3000"

    @property
    def allowed_origins_list(self) -> List[str]:
        """CORS 허용 origin 리스트"""
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    class Config:
        env_file = ENV_FILES
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


# 전역 설정 인스턴스
settings = Settings()
