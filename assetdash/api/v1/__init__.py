"""API v1 router"""

from fastapi import APIRouter
from .assets import router as assets_router
from .dividends import router as dividends_router
from .search import router as search_router

# v1 라우터 생성
api_router = APIRouter(prefix="/api/v1")

# 서브 라우터 등록
api_router.include_router(assets_router)
api_router.include_router(dividends_router)
api_router.include_router(search_router)

__all__ = ["api_router"]
