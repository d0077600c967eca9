"""
데이터베이스 모델 정의
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class AssetMaster(Base):
    """상장종목 마스터 테이블 (상장종목 동기화 결과)"""
    __tablename__ = 'assets_master'

    ticker = Column(String(10), primary_key=True)
    name = Column(String(200), nullable=False)
    market_type = Column(String(20), nullable=False, index=True)  # ETF, KOSPI, KOSDAQ
    category = Column(String(50), nullable=True)  # 사용자 분류 (동기화 시 덮어쓰지 않음)
    last_updated = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    def __repr__(self):
        return f"<AssetMaster(ticker={self.ticker}, name={self.name}, market_type={self.market_type})>"
