"""
assetdash FastAPI 애플리케이션

국내 ETF/주식 대시보드용 자산 목록, 상세, 가격 히스토리, 배당, 검색 API 서버

Usage:
    uvicorn assetdash.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from assetdash import __version__
from assetdash.core.config import settings
from assetdash.db.database import init_db
from assetdash.scheduler import start_scheduler, stop_scheduler

# 로거 설정
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
)
# httpx 로그 레벨을 WARNING으로 설정 (HTTP 요청 로그 숨기기)
logging.getLogger('httpx').setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI 앱의 생명주기 관리

    시작 시: 테이블 생성 + 스케줄러 시작
    종료 시: 스케줄러 정리 + HTTP 클라이언트 종료
    """
    from assetdash.api.dependencies import get_asset_service

    logger.info("🚀 assetdash 애플리케이션 시작")
    init_db()

    if settings.SCHEDULER_ENABLED:
        start_scheduler()
    else:
        logger.warning("⚠️ 스케줄러가 비활성화되어 있습니다 (SCHEDULER_ENABLED=False)")

    yield  # 앱 실행 중

    logger.info("🛑 assetdash 애플리케이션 종료")
    if settings.SCHEDULER_ENABLED:
        stop_scheduler()
    await get_asset_service().close()


def create_app() -> FastAPI:
    """
    FastAPI 애플리케이션 생성 및 설정

    Returns:
        FastAPI: 설정된 FastAPI 인스턴스
    """
    app = FastAPI(
        title="assetdash API",
        description="국내 ETF/주식 대시보드 API",
        version=__version__,
        lifespan=lifespan
    )

    setup_middleware(app)
    setup_routers(app)

    logger.info("FastAPI application initialized")

    return app


def setup_middleware(app: FastAPI) -> None:
    """CORS 설정"""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Data-Source"]
    )


def setup_routers(app: FastAPI) -> None:
    """API 라우터 등록"""
    from assetdash.api import api_router
    app.include_router(api_router)

    @app.get("/health")
    async def health_check():
        """헬스 체크 엔드포인트"""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": __version__
        }


# 앱 인스턴스 생성
app = create_app()
