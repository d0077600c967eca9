"""
데이터베이스 연결 및 세션 관리
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from assetdash.core.config import settings
from assetdash.db.models import Base

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str = settings.DATABASE_URL):
    """
    Engine 생성

    SQLite 파일 DB이면 상위 디렉토리를 먼저 만듭니다.
    """
    url = make_url(database_url)
    connect_args = {}

    if url.get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False  # SQLite용
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    return create_engine(
        database_url,
        connect_args=connect_args,
        echo=False  # SQL 로그 출력 (개발 시 True)
    )


engine = create_db_engine()

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    """데이터베이스 초기화 (테이블 생성)"""
    Base.metadata.create_all(bind=bind or engine)
    logger.info(f"✅ Database initialized ({(bind or engine).url.render_as_string(hide_password=True)})")


@contextmanager
def get_db(session_factory: Optional[sessionmaker] = None) -> Session:
    """
    데이터베이스 세션 컨텍스트 매니저

    정상 종료 시 commit, 예외 시 rollback 후 재발생, 항상 close.

    Args:
        session_factory: 세션 팩토리 (미지정 시 SessionLocal)

    Example:
        >>> with get_db() as db:
        ...     row = db.get(AssetMaster, '069500')
    """
    db = (session_factory or SessionLocal)()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_db_session():
    """
    요청 단위 세션 (FastAPI dependency용)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
