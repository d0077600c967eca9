"""
상장종목 동기화 스크립트

실행:
    python scripts/sync_all_assets.py [--date YYYYMMDD] [--dry-run]
"""

import sys
from pathlib import Path

# 프로젝트 루트를 sys.path에 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from assetdash.cli import main

if __name__ == "__main__":
    sys.exit(main())
