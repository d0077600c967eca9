"""
공용 테스트 픽스처

- HTTP: httpx.MockTransport로 외부 API 응답을 대체
- DB: 인메모리 SQLite
"""

import sys
from pathlib import Path

# 프로젝트 루트를 sys.path에 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from assetdash.db.models import Base


def mock_client(handler) -> httpx.AsyncClient:
    """handler(request) -> httpx.Response 로 응답하는 AsyncClient"""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def db_engine():
    """인메모리 SQLite 엔진 (테이블 생성 완료)"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()
