"""
배치 작업용 로깅 설정
콘솔 + Severity별로 분리된 로그 파일 생성 (상장종목 동기화 CLI에서 사용)
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from assetdash.core.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# 로그 파일 최대 크기 및 백업 개수
LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
LOG_BACKUP_COUNT = 5


def _file_handler(path: Path, level: int, formatter: logging.Formatter) -> RotatingFileHandler:
    if not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        path,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logger(name: str = "assetdash", log_dir: Optional[str] = None) -> logging.Logger:
    """
    로거 설정

    'assetdash' 패키지 루트 로거에 핸들러를 붙이면 하위 모듈 로거
    (logging.getLogger(__name__))가 모두 같은 핸들러로 전파됩니다.

    Args:
        name: 로거 이름 (기본값: 패키지 루트)
        log_dir: 로그 디렉토리 (기본값: settings.LOG_DIR)

    Returns:
        logging.Logger: 설정된 로거
    """
    logger = logging.getLogger(name)

    # 이미 핸들러가 설정되어 있으면 재설정하지 않음 (중복 방지)
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    logger.propagate = False

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    # 1. Console Handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    base_dir = Path(log_dir or settings.LOG_DIR)

    # 2. ERROR 파일 핸들러
    logger.addHandler(_file_handler(base_dir / 'error' / 'error.log', logging.ERROR, formatter))

    # 3. INFO 파일 핸들러
    logger.addHandler(_file_handler(base_dir / 'info' / 'info.log', logging.INFO, formatter))

    # httpx 요청 로그 숨기기
    logging.getLogger('httpx').setLevel(logging.WARNING)

    return logger
