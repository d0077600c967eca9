"""
assetdash

국내 ETF/주식 대시보드 백엔드.

Architecture:
- 공공데이터포털 상장종목 전체 수집 → assets_master Upsert (배치)
- 네이버 금융 실시간 시세 / 일별 시세 조회 (요청 시)
- 공공데이터포털 배당 API + 네이버 금융 스크래핑 배당 정보
- 정적 레지스트리 메타데이터와 병합하여 ETF/STOCK 레코드로 정규화
"""

__version__ = "1.0.0"
